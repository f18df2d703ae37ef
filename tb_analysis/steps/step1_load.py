from tb_analysis.context import PipelineContext
from tb_analysis.analysis.io import load_who
from tb_analysis.analysis.reshape import find_case_columns

def run(ctx: PipelineContext) -> PipelineContext:
    log = ctx.logger
    cfg = ctx.cfg

    log.info(f"[step01] read: {cfg.raw_csv}")
    df = load_who(cfg.raw_csv)
    ctx.data_raw = df

    case_cols = find_case_columns(df)
    log.info(f"[step01] {df['country'].nunique()} countries, years {df['year'].min()}-{df['year'].max()}")
    log.info(f"[step01] {len(case_cols)} indicator columns: {case_cols[0]} .. {case_cols[-1]}")
    log.info(f"[step01] done. shape={df.shape}")
    return ctx
