from pathlib import Path

import pandas as pd
import pytest

from tb_analysis.analysis.io import load_who, safe_save, save_value_counts_summary
from tb_analysis.analysis.reshape import find_case_columns

SAMPLE_CSV = Path(__file__).resolve().parents[1] / "data" / "who_sample.csv"


def test_load_sample_layout():
    df = load_who(SAMPLE_CSV)
    assert list(df.columns[:4]) == ["country", "iso2", "iso3", "year"]
    cols = find_case_columns(df)
    assert len(cols) == 56
    assert cols[0] == "new_sp_m014" and cols[-1] == "newrel_f65"
    assert df["year"].dtype.kind == "i"


def test_load_keeps_namibia_iso2():
    df = load_who(SAMPLE_CSV)
    assert set(df.loc[df["country"] == "Namibia", "iso2"]) == {"NA"}
    assert df["new_sp_m014"].dtype.kind == "f"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_who(tmp_path / "nope.csv")


def test_load_missing_id_columns(tmp_path):
    path = tmp_path / "who.csv"
    path.write_text("country,year,new_sp_m014\nA,2000,1\n")
    with pytest.raises(ValueError, match="iso2"):
        load_who(path)


def test_load_parses_na_cells(tmp_path):
    path = tmp_path / "who.csv"
    path.write_text("country,iso2,iso3,year,new_sp_m014,newrel_f65\nA,AA,AAA,2000,NA,3\nB,NA,BBB,2001,4,\n")
    df = load_who(path)
    assert df["new_sp_m014"].isna().sum() == 1
    assert df["newrel_f65"].isna().sum() == 1
    assert list(df["iso2"]) == ["AA", "NA"]


def test_safe_save_skips_empty(tmp_path):
    safe_save(None, tmp_path / "a.csv")
    safe_save(pd.DataFrame(), tmp_path / "b.csv")
    safe_save(pd.DataFrame({"x": [1]}), tmp_path / "sub" / "c.csv")
    assert not (tmp_path / "a.csv").exists()
    assert not (tmp_path / "b.csv").exists()
    assert (tmp_path / "sub" / "c.csv").exists()


def test_value_counts_summary(tmp_path):
    df = pd.DataFrame({"new": ["new", "new"], "memo": ["x", "y"]})
    out = save_value_counts_summary(df, tmp_path / "counts.csv", exclude_cols=["memo"])
    assert out.to_dict("records") == [{"Column": "new", "Value": "new", "Count": 2}]
    assert (tmp_path / "counts.csv").exists()


def test_load_drops_r_row_names(tmp_path):
    path = tmp_path / "who.csv"
    path.write_text('"","country","iso2","iso3","year","new_sp_m014"\n"1","A","AA","AAA",2000,NA\n"2","B","BB","BBB",2001,7\n')
    df = load_who(path)
    assert list(df.columns) == ["country", "iso2", "iso3", "year", "new_sp_m014"]
    assert list(df["new_sp_m014"].fillna(-1)) == [-1, 7]


def test_load_header_with_spaces_after_commas(tmp_path):
    path = tmp_path / "who.csv"
    path.write_text("country, iso2, iso3, year, new_sp_m014, newrel_f65\nA, NA, AAA, 2000, NA, 3\nB, BB, BBB, 2001, 4, NA\n")
    df = load_who(path)
    assert list(df.columns) == ["country", "iso2", "iso3", "year", "new_sp_m014", "newrel_f65"]
    assert df["new_sp_m014"].dtype.kind == "f"
    assert df["new_sp_m014"].isna().sum() == 1
    assert df["newrel_f65"].isna().sum() == 1
    assert list(df["iso2"]) == ["NA", "BB"]
    assert list(df["year"]) == [2000, 2001]


def test_load_rejects_non_numeric_counts(tmp_path):
    path = tmp_path / "who.csv"
    path.write_text("country,iso2,iso3,year,new_sp_m014\nA,AA,AAA,2000,lots\n")
    with pytest.raises(ValueError):
        load_who(path)


def test_value_counts_summary_orders_and_keeps_missing(tmp_path):
    df = pd.DataFrame({
        "sex": pd.Categorical(["m", "f", "m", None], categories=["m", "f"]),
        "year": [2000, 2000, 2001, 2001],
    })
    out = save_value_counts_summary(df, tmp_path / "counts.csv")
    sex = out.loc[out["Column"] == "sex"]
    assert list(sex["Count"]) == [2, 1, 1]
    assert list(sex["Value"].iloc[:2]) == ["m", "f"]
    assert sex["Value"].isna().sum() == 1
    assert out.loc[out["Column"] == "year", "Count"].sum() == 4
