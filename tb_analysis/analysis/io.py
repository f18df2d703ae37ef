from pathlib import Path
import logging
import pandas as pd

from tb_analysis.analysis.mappings import ID_COLS

logger = logging.getLogger(__name__)

# Namibia's iso2 code is literally "NA"; only numeric columns get NA parsing
TEXT_COLS = ("country", "iso2", "iso3")
NA_MARKERS = ["", "NA", "NaN", "nan"]

def coerce_numeric_series(s: pd.Series) -> pd.Series:
    """Raw CSV text -> numbers, NA markers and blank cells become NaN."""
    s2 = s.astype(str).str.strip()
    s2 = s2.mask(s2.isin(NA_MARKERS))
    return pd.to_numeric(s2, errors="raise")

def load_who(path: Path) -> pd.DataFrame:
    """Read the wide WHO table (country, iso2, iso3, year + one column per indicator)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"WHO data file not found: {path}")

    # everything as text first; NA parsing happens after the header is cleaned
    df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    df.columns = [str(c).strip() for c in df.columns]
    # write.csv from R adds an unnamed row-name column first
    if len(df.columns) and df.columns[0].startswith("Unnamed"):
        df = df.drop(columns=[df.columns[0]])

    missing = [c for c in ID_COLS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing expected columns in WHO dataset: {missing}")

    for col in df.columns:
        if col in TEXT_COLS:
            df[col] = df[col].str.strip().astype("string")
        else:
            df[col] = coerce_numeric_series(df[col])
    df["year"] = df["year"].astype(int)
    logger.debug("loaded %s rows from %s", len(df), path)
    return df

def save_df(df: pd.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)

def safe_save(df: pd.DataFrame | None, path: Path) -> None:
    if df is None:
        return
    if hasattr(df, "empty") and df.empty:
        return
    save_df(df, path)

def save_text(text: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")

def save_value_counts_summary(df: pd.DataFrame, output_path: Path, exclude_cols: list = None) -> pd.DataFrame:
    """
    One row per (Column, Value) with its Count, NaN included; most frequent
    value first within each column. Written to output_path and returned.
    """
    cols = [c for c in df.columns if c not in (exclude_cols or [])]
    long = df[cols].astype("string").melt(var_name="Column", value_name="Value")
    results_df = (
        long.value_counts(["Column", "Value"], dropna=False)
        .reset_index(name="Count")
        .sort_values(["Column", "Count", "Value"], ascending=[True, False, True], kind="mergesort")
        .reset_index(drop=True)
    )
    save_df(results_df, Path(output_path))
    logger.info(f"Value counts saved to {output_path}")
    return results_df
