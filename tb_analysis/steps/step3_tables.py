from tb_analysis.context import PipelineContext
from tb_analysis.analysis.summaries import (
    average_cases,
    sex_share,
    top_countries,
    yearly_average,
    age_summary,
    shorten_country_names,
)

def run(ctx: PipelineContext) -> PipelineContext:
    df = ctx.data_tidy
    cfg = ctx.cfg
    log = ctx.logger
    log.info("[step03] build tables")

    ctx.tables["by_country"] = average_cases(df, "country", ascending=False)
    ctx.tables["by_sex"] = sex_share(df)
    ctx.tables["by_age"] = average_cases(df, "age", ascending=True)

    top = top_countries(df, cfg.top_n)
    ctx.tables["top_countries"] = top
    ctx.tables["top_countries_short"] = shorten_country_names(top, cfg.short_names)
    ctx.tables["top_countries_yearly"] = yearly_average(df, top)
    ctx.tables["age_groups"] = age_summary(df)

    log.info("[step03] average cases by country (head):\n%s", ctx.tables["by_country"].head(10).to_string(index=False))
    log.info("[step03] share of cases by sex (%%):\n%s", ctx.tables["by_sex"].to_string(index=False))
    log.info("[step03] average cases by age:\n%s", ctx.tables["by_age"].to_string(index=False))
    log.info(f"[step03] done. top {cfg.top_n}: {list(top['country'])}")
    return ctx
