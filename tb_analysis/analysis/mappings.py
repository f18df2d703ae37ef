import pandas as pd

ID_COLS = ["country", "iso2", "iso3", "year"]
REDUNDANT_COLS = ["iso2", "iso3", "new"]

# "newrel_m014" lacks the separator the other families have ("new_sp_m014")
KEY_ALIASES = {"newrel": "new_rel"}
KEY_SEP = "_"

TYPE_ORDER = ["sp", "sn", "ep", "rel"]
SEX_ORDER = ["m", "f"]
AGE_ORDER = ["014", "1524", "2534", "3544", "4554", "5564", "65"]

AGE_LABELS = {
    "014": "0-14", "1524": "15-24", "2534": "25-34", "3544": "35-44",
    "4554": "45-54", "5564": "55-64", "65": "65+",
}

ORDERS = {
    "type": TYPE_ORDER,
    "sex": SEX_ORDER,
    "age": AGE_ORDER,
}

YOUNG_AGES = ("1524", "2534", "3544")
MODEL_EXCLUDED_AGES = ("014",)

COUNTRY_SHORT_NAMES = {
    "Democratic Republic of the Congo": "Congo",
}

def apply_orders(df: pd.DataFrame) -> pd.DataFrame:
    """Turn the key columns into ordered categoricals (unknown codes become NaN)."""
    df = df.copy()
    for col, order in ORDERS.items():
        if col in df.columns:
            df[col] = pd.Categorical(df[col], categories=order, ordered=True)
    return df

def age_label(code: str) -> str:
    return AGE_LABELS.get(code, code)
