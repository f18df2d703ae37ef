import os

os.environ.setdefault("MPLBACKEND", "Agg")

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from tb_analysis.context import PipelineConfig, PipelineContext
from tb_analysis.analysis.logging import setup_logger

REPO_DIR = Path(__file__).resolve().parents[1]
SAMPLE_CSV = REPO_DIR / "data" / "who_sample.csv"


@pytest.fixture
def wide_df() -> pd.DataFrame:
    """Three country-years in WHO layout, a few absent cells, every key family present."""
    return pd.DataFrame({
        "country": ["Aland", "Aland", "Borduria"],
        "iso2": ["AL", "AL", "NA"],
        "iso3": ["ALD", "ALD", "BOR"],
        "year": [2000, 2001, 2000],
        "new_sp_m014": [1.0, np.nan, 5.0],
        "new_sp_f1524": [2.0, 4.0, np.nan],
        "new_sn_m65": [np.nan, 3.0, 7.0],
        "new_ep_f3544": [6.0, np.nan, np.nan],
        "newrel_m2534": [10.0, 20.0, np.nan],
        "newrel_f5564": [np.nan, np.nan, 8.0],
    })


@pytest.fixture
def tidy_df() -> pd.DataFrame:
    rows = [
        # country, year, type, sex, age, cases
        ("A", 2000, "sp", "m", "014", 10),
        ("A", 2000, "sp", "f", "014", 20),
        ("A", 2001, "sp", "m", "1524", 30),
        ("A", 2001, "sn", "f", "1524", 40),
        ("B", 2000, "sp", "m", "65", 1),
        ("B", 2000, "sp", "f", "65", 3),
        ("C", 2000, "ep", "m", "3544", 100),
        ("C", 2001, "ep", "f", "3544", 200),
    ]
    return pd.DataFrame(rows, columns=["country", "year", "type", "sex", "age", "cases"])


@pytest.fixture
def ctx(tmp_path) -> PipelineContext:
    for sub in ("tables", "figures", "logs"):
        (tmp_path / sub).mkdir()
    logger = setup_logger(tmp_path / "logs", "tb_analysis_test")
    cfg = PipelineConfig(raw_csv=SAMPLE_CSV, output_dir=tmp_path, top_n=5)
    return PipelineContext(cfg=cfg, logger=logger)
