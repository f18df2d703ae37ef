from tb_analysis.context import PipelineContext
from tb_analysis.analysis.reshape import tidy_who

def run(ctx: PipelineContext) -> PipelineContext:
    log = ctx.logger
    log.info("[step02] wide -> long case records")

    df, prefix_counts = tidy_who(ctx.data_raw, return_prefix_counts=True)
    ctx.misc["prefix_counts"] = prefix_counts
    if len(prefix_counts) > 1:
        log.warning(f"[step02] key prefix is not constant: {prefix_counts.to_dict('records')}")
    else:
        log.info(f"[step02] key prefix: {prefix_counts.to_dict('records')} (dropped)")

    ctx.data_tidy = df
    log.info(f"[step02] done. shape={df.shape}")
    return ctx
