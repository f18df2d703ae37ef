from tb_analysis.context import PipelineContext
from tb_analysis.analysis.io import safe_save, save_text, save_value_counts_summary

def build_summary_report(ctx: PipelineContext) -> str:
    df = ctx.data_tidy
    lines = [
        "WHO tuberculosis summary report",
        f"Case records: {len(df)}",
        f"Countries: {df['country'].nunique()}",
        f"Years: {df['year'].min()}-{df['year'].max()}",
        f"Total cases: {int(df['cases'].sum())}",
        "",
    ]
    for title, key in [
        ("Top countries by average cases", "top_countries"),
        ("Share of cases by sex (%)", "by_sex"),
        ("Average cases by age", "age_groups"),
    ]:
        table = ctx.tables.get(key)
        if table is None:
            continue
        lines += [title + ":", table.to_string(index=False), ""]
    for name, result in ctx.models.items():
        lines += [f"{name}: {result.model.formula}", f"  R-squared: {result.rsquared:.4f}  n: {int(result.nobs)}", ""]
    return "\n".join(lines)

def run(ctx: PipelineContext) -> PipelineContext:
    out = ctx.cfg.output_dir
    log = ctx.logger
    report = build_summary_report(ctx)
    ctx.misc["summary_report"] = report

    if not ctx.cfg.export:
        log.info("[step06] export disabled")
        return ctx

    log.info("[step06] export tables + report")
    safe_save(ctx.misc.get("prefix_counts"), out / "tables" / "prefix_counts.csv")
    for name, df in ctx.tables.items():
        safe_save(df, out / "tables" / f"{name}.csv")
    save_value_counts_summary(ctx.data_tidy, out / "tables" / "key_value_counts.csv", exclude_cols=["country", "cases"])

    for name, result in ctx.models.items():
        save_text(result.summary().as_text(), out / "tables" / f"{name}_summary.txt")

    save_text(report, out / "summary_report.txt")
    log.info("[step06] done")
    return ctx
