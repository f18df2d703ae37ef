from tb_analysis.context import PipelineContext
from tb_analysis.analysis.models import build_model_data, fit_age_sex_models, coefficient_table

def run(ctx: PipelineContext) -> PipelineContext:
    log = ctx.logger
    log.info("[step05] fit age / sex models")

    ctx.data_model = build_model_data(ctx.data_tidy, young_ages=ctx.cfg.young_ages)
    log.info(f"[step05] model data: {len(ctx.data_model)} rows, "
             f"age_group counts {ctx.data_model['age_group'].value_counts().to_dict()}")

    ctx.models = fit_age_sex_models(ctx.data_model)
    for name, result in ctx.models.items():
        coef = coefficient_table(result)
        ctx.tables[f"{name}_coefficients"] = coef
        log.info("[step05] %s coefficients:\n%s", name, coef[["term", "estimate", "std_error", "p_value"]].to_string(index=False))

    log.info("[step05] done")
    return ctx
