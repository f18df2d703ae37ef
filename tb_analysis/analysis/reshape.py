"""
Wide -> long reshaping of the WHO tuberculosis table.

One column per (type, sex, age) combination, e.g. ``new_sp_m014`` or
``newrel_f65``, becomes one row per observation with explicit key columns.
"""
import logging

import pandas as pd

from tb_analysis.analysis.mappings import (
    AGE_ORDER,
    ID_COLS,
    KEY_ALIASES,
    KEY_SEP,
    REDUNDANT_COLS,
    SEX_ORDER,
    TYPE_ORDER,
    apply_orders,
)

logger = logging.getLogger(__name__)

KEY_COLS = ["country", "year", "type", "sex", "age"]


def find_case_columns(df: pd.DataFrame) -> list[str]:
    """Indicator columns (names starting with ``new``) in file order."""
    cols = [c for c in df.columns if str(c).startswith("new")]
    if not cols:
        raise ValueError(
            "No case columns detected in WHO dataset.\n"
            "Expected wide indicator columns such as 'new_sp_m014' ... 'newrel_f65'."
        )
    return cols


def pivot_longer(df: pd.DataFrame, value_cols: list[str] | None = None) -> pd.DataFrame:
    if value_cols is None:
        value_cols = find_case_columns(df)
    id_vars = [c for c in df.columns if c not in value_cols]
    return df.melt(
        id_vars=id_vars,
        value_vars=value_cols,
        var_name="key",
        value_name="cases",
    )


def drop_missing_cases(df_long: pd.DataFrame) -> pd.DataFrame:
    return df_long.dropna(subset=["cases"]).reset_index(drop=True)


def normalize_keys(keys: pd.Series) -> pd.Series:
    out = keys.astype(str)
    for alias, canonical in KEY_ALIASES.items():
        # only the prefix, so an already canonical "new_rel_..." is left alone
        out = out.str.replace(rf"^{alias}(?={KEY_SEP})", canonical, regex=True)
    return out


def separate_key(df_long: pd.DataFrame) -> pd.DataFrame:
    """
    Split ``key`` into new / type / sex / age.

    ``new_sp_m014`` -> ("new", "sp", "m", "014"): the first two separator
    delimited parts are the prefix and the type, the first character of the
    remainder is the sex and the rest is the age bucket.
    """
    df = df_long.drop(columns=["key"]).copy()
    if df_long.empty:
        for col in ("new", "type", "sex", "age"):
            df[col] = pd.Series(dtype=object)
        return df

    parts = df_long["key"].str.split(KEY_SEP, expand=True)
    if parts.shape[1] != 3 or parts.isna().to_numpy().any():
        bad = df_long.loc[df_long["key"].str.count(KEY_SEP) != 2, "key"].unique()
        raise ValueError(f"Keys do not split into exactly three parts: {sorted(bad)[:10]}")

    df["new"] = parts[0].values
    df["type"] = parts[1].values
    df["sex"] = parts[2].str[:1].values
    df["age"] = parts[2].str[1:].values
    return df


def count_prefix(df: pd.DataFrame) -> pd.DataFrame:
    """Number of rows per value of the ``new`` prefix; a single value means the column carries nothing."""
    return (
        df["new"].value_counts()
        .rename_axis("new")
        .reset_index(name="n")
    )


def validate_tidy(df: pd.DataFrame) -> None:
    problems = []
    for col, allowed in (("type", TYPE_ORDER), ("sex", SEX_ORDER), ("age", AGE_ORDER)):
        unknown = sorted(set(df[col].astype(str)) - set(allowed))
        if unknown:
            problems.append(f"{col}: unexpected values {unknown}")
    if (df["cases"] < 0).any():
        problems.append("cases: negative counts")
    fractional = df.loc[df["cases"] % 1 != 0, "cases"]
    if not fractional.empty:
        problems.append(f"cases: non-integer counts {sorted(fractional.unique())[:10]}")
    dup = df.duplicated(subset=KEY_COLS)
    if dup.any():
        problems.append(f"{int(dup.sum())} duplicated (country, year, type, sex, age) rows")
    if problems:
        raise ValueError("Tidy WHO table is inconsistent:\n  " + "\n  ".join(problems))


def tidy_who(df_wide: pd.DataFrame, return_prefix_counts: bool = False):
    """
    Full reshaping chain: pivot, drop absent cases, fix the ``newrel`` alias,
    split the key, drop iso2/iso3/new and order the key columns.
    """
    value_cols = find_case_columns(df_wide)
    df_long = drop_missing_cases(pivot_longer(df_wide, value_cols))
    df_long["key"] = normalize_keys(df_long["key"])

    df = separate_key(df_long)
    prefix_counts = count_prefix(df)

    validate_tidy(df)
    df["cases"] = df["cases"].astype("int64")

    df = df.drop(columns=[c for c in REDUNDANT_COLS if c in df.columns])
    other_cols = [c for c in df.columns if c not in KEY_COLS + ["cases"] and c not in ID_COLS]
    df = df[KEY_COLS + other_cols + ["cases"]]
    df = apply_orders(df)
    logger.info(f"tidy: {len(value_cols)} indicator columns -> {len(df)} case records")

    if return_prefix_counts:
        return df, prefix_counts
    return df
