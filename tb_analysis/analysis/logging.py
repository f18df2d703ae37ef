import logging
from pathlib import Path

def setup_logger(log_dir: Path, name: str = "tb_analysis", level: int | str = logging.INFO) -> logging.Logger:
    """Stream + file logger for one pipeline run (logs/<name>.log)."""
    log_dir.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")

    sh = logging.StreamHandler()
    sh.setFormatter(fmt)

    fh = logging.FileHandler(log_dir / f"{name}.log", encoding="utf-8")
    fh.setFormatter(fmt)

    logger.addHandler(sh)
    logger.addHandler(fh)

    # matplotlib / font manager chatter at INFO drowns the step logs
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    return logger
