import logging

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf

from tb_analysis.analysis.mappings import MODEL_EXCLUDED_AGES, YOUNG_AGES

logger = logging.getLogger(__name__)

AGE_GROUP_ORDER = ["old", "young"]

FORMULAS = {
    "model1_age_group": "cases ~ C(age_group)",
    "model2_age_group_sex": "cases ~ C(age_group) + C(sex)",
}


def build_model_data(df: pd.DataFrame, young_ages=YOUNG_AGES, excluded_ages=MODEL_EXCLUDED_AGES) -> pd.DataFrame:
    """Drop the 0-14 bucket and label 15-44 as "young", everything older as "old"."""
    age = df["age"].astype(str)
    out = df.loc[~age.isin(excluded_ages)].copy()
    age = out["age"].astype(str)
    out["age_group"] = np.where(age.isin(young_ages), "young", "old")
    out["age_group"] = pd.Categorical(out["age_group"], categories=AGE_GROUP_ORDER)
    out["sex"] = out["sex"].astype(str)
    return out.reset_index(drop=True)


def fit_ols(df: pd.DataFrame, formula: str):
    if len(df) < 3:
        raise ValueError(f"Not enough observations to fit '{formula}' (n={len(df)}).")
    if "age_group" in formula and df["age_group"].nunique() < 2:
        raise ValueError(f"'{formula}' needs both young and old observations.")
    if "sex" in formula and df["sex"].nunique() < 2:
        raise ValueError(f"'{formula}' needs both sexes.")
    return smf.ols(formula, data=df).fit()


def coefficient_table(result) -> pd.DataFrame:
    """Estimate, std. error, t, p and 95% CI per term of a fitted OLS result."""
    ci = result.conf_int()
    table = pd.DataFrame({
        "term": result.params.index,
        "estimate": result.params.values,
        "std_error": result.bse.values,
        "t_value": result.tvalues.values,
        "p_value": result.pvalues.values,
        "ci_lower": ci[0].values,
        "ci_upper": ci[1].values,
    })
    table["r_squared"] = result.rsquared
    table["n_obs"] = int(result.nobs)
    return table


def fit_age_sex_models(df_model: pd.DataFrame) -> dict:
    """Fit both models; returns {name: fitted result}."""
    results = {}
    for name, formula in FORMULAS.items():
        results[name] = fit_ols(df_model, formula)
        logger.info(f"{name}: {formula} (n={int(results[name].nobs)}, R2={results[name].rsquared:.4f})")
    return results
