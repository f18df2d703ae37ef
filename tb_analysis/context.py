from dataclasses import dataclass, field
from pathlib import Path
import logging
import pandas as pd

from tb_analysis.analysis.mappings import COUNTRY_SHORT_NAMES, YOUNG_AGES

@dataclass
class PipelineConfig:
    raw_csv: Path
    output_dir: Path
    top_n: int = 10                     # countries kept for the top-N charts
    short_names: dict = field(default_factory=lambda: dict(COUNTRY_SHORT_NAMES))
    young_ages: tuple = YOUNG_AGES      # age codes labelled "young" in the models
    export: bool = True

@dataclass
class PipelineContext:
    cfg: PipelineConfig
    logger: logging.Logger

    # DataFrames in memory
    data_raw: pd.DataFrame | None = None
    data_tidy: pd.DataFrame | None = None
    data_model: pd.DataFrame | None = None

    # Analysis products (tables, fitted models, etc.)
    tables: dict = field(default_factory=dict)
    figures: dict = field(default_factory=dict)
    models: dict = field(default_factory=dict)
    misc: dict = field(default_factory=dict)
