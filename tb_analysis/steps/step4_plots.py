from tb_analysis.context import PipelineContext
from tb_analysis.analysis.plots import (
    plot_top_countries_bar,
    plot_country_trend,
    plot_age_groups,
)

def run(ctx: PipelineContext) -> PipelineContext:
    out_fig = ctx.cfg.output_dir / "figures"
    log = ctx.logger
    log.info("[step04] build plots")

    ctx.figures["top_countries_bar"] = plot_top_countries_bar(ctx.tables["top_countries_short"], out_fig)
    ctx.figures["top_countries_trend"] = plot_country_trend(ctx.tables["top_countries_yearly"], out_fig)
    ctx.figures["age_groups_bar"] = plot_age_groups(ctx.tables["age_groups"], out_fig)

    for name, path in ctx.figures.items():
        log.info(f"[step04] {name}: {path}")
    log.info("[step04] done")
    return ctx
