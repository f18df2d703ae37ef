import logging

import pandas as pd

logger = logging.getLogger(__name__)


def _round_int(s: pd.Series) -> pd.Series:
    # Series.round is half-to-even, same as the usual IEC 60559 rounding
    return s.round(0).astype("int64")


def average_cases(df: pd.DataFrame, by, ascending: bool | None = None, value_col: str = "cases") -> pd.DataFrame:
    """Mean of ``value_col`` per group, rounded to the nearest integer."""
    keys = [by] if isinstance(by, str) else list(by)
    out = (
        df.groupby(keys, as_index=False, observed=True)[value_col]
        .mean()
        .rename(columns={value_col: "average_cases"})
    )
    out["average_cases"] = _round_int(out["average_cases"])
    if ascending is not None:
        out = out.sort_values(["average_cases"] + keys, ascending=[ascending] + [True] * len(keys), kind="mergesort")
    return out.reset_index(drop=True)


def sex_share(df: pd.DataFrame) -> pd.DataFrame:
    """Share of all cases per sex, in whole percent."""
    total = df["cases"].sum()
    if total == 0:
        raise ValueError("No cases to compute sex shares from.")
    out = df.groupby("sex", as_index=False, observed=True)["cases"].sum()
    out["total_cases"] = _round_int(out["cases"] / total * 100)
    return out[["sex", "total_cases"]]


def top_countries(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """
    Countries with the ``n`` highest average case counts.
    Countries tied with the n-th one are kept, so more than ``n`` rows can come back.
    """
    by_country = average_cases(df, "country", ascending=False)
    if by_country.empty or n <= 0:
        return by_country.iloc[0:0]
    cutoff = by_country["average_cases"].iloc[min(n, len(by_country)) - 1]
    return by_country.loc[by_country["average_cases"] >= cutoff].reset_index(drop=True)


def yearly_average(df: pd.DataFrame, countries) -> pd.DataFrame:
    """Average cases per (country, year), restricted to ``countries``."""
    if isinstance(countries, pd.DataFrame):
        countries = countries["country"]
    keep = df.loc[df["country"].isin(set(countries))]
    return average_cases(keep, ["country", "year"])


def age_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Average cases per age bucket, ascending, with the median of those averages."""
    out = average_cases(df, "age", ascending=True)
    out["median_average_cases"] = float(out["average_cases"].median()) if not out.empty else float("nan")
    return out


def shorten_country_names(df: pd.DataFrame, short_names: dict) -> pd.DataFrame:
    out = df.copy()
    out["country"] = out["country"].replace(short_names)
    return out
