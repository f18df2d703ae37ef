import argparse
import sys
from pathlib import Path

from tb_analysis.config import DEFAULT_OUTPUT_DIR, DEFAULT_RAW_CSV, make_output_dir
from tb_analysis.context import PipelineConfig, PipelineContext
from tb_analysis.analysis.logging import setup_logger

from tb_analysis.steps.step1_load import run as s1
from tb_analysis.steps.step2_reshape import run as s2
from tb_analysis.steps.step3_tables import run as s3
from tb_analysis.steps.step4_plots import run as s4
from tb_analysis.steps.step5_models import run as s5
from tb_analysis.steps.step6_report import run as s6

STEPS = (s1, s2, s3, s4, s5, s6)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="WHO tuberculosis tidy-data analysis")
    parser.add_argument("--csv", default=str(DEFAULT_RAW_CSV), help="Path to the wide WHO CSV file")
    parser.add_argument("--outdir", default=str(DEFAULT_OUTPUT_DIR), help="Output directory (a dated run folder is created inside)")
    parser.add_argument("--top-n", type=int, default=10, help="Number of countries in the top-N charts")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--no-export", action="store_true", help="Skip writing tables and report")
    return parser.parse_args(argv)

def run_pipeline(cfg: PipelineConfig, logger) -> PipelineContext:
    ctx = PipelineContext(cfg=cfg, logger=logger)
    for step in STEPS:
        ctx = step(ctx)
    return ctx

def main(argv=None) -> int:
    args = parse_args(argv)
    out = make_output_dir(Path(args.outdir))

    logger = setup_logger(out / "logs", "tb_analysis", level=args.log_level)

    cfg = PipelineConfig(
        raw_csv=Path(args.csv),
        output_dir=out,
        top_n=args.top_n,
        export=not args.no_export,
    )
    try:
        run_pipeline(cfg, logger)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"pipeline failed: {e}")
        return 1

    logger.info(f"DONE. outputs at: {out}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
