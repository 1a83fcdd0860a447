# -*- coding: utf-8 -*-
"""
Created on Tue Dec 16 10:39:27 2025

@author: epicx
"""

# model_utils.py
import re
import pandas as pd


def coeff_table(model, drop_const=False):
    """One row per regressor: coef, std err, t, p, 95% CI and significance stars."""
    ci = model.conf_int()

    df_coef = pd.DataFrame({
        "param": model.params.index,
        "coef": model.params.values,
        "std_err": model.bse.values,
        "t": model.tvalues.values,
        "pvalue": model.pvalues.values,
        "ci_low": ci.iloc[:, 0].values,
        "ci_high": ci.iloc[:, 1].values,
    })
    df_coef["sig"] = df_coef["pvalue"].map(sig_code)

    if drop_const:
        df_coef = df_coef[~df_coef["param"].isin(["const", "Intercept"])]

    return df_coef.reset_index(drop=True)


def sig_code(p):
    if pd.isna(p):
        return ""
    if p < 0.001:
        return "***"
    elif p < 0.01:
        return "**"
    elif p < 0.05:
        return "*"
    elif p < 0.1:
        return "."
    else:
        return ""


def add_to_summary(summary_rows, model, dep_var, label):
    coef_df = coeff_table(model, drop_const=True)

    row = {
        "model_label": label,
        "dep_var": dep_var,
        "r2": model.rsquared,
        "r2_adj": model.rsquared_adj,
        "aic": model.aic,
        "n_obs": int(model.nobs),
    }

    for i, r in enumerate(coef_df.itertuples(index=False), start=1):
        row[f"var_{i}"] = r.param
        row[f"coef_{i}"] = r.coef
        row[f"sig_{i}"] = r.sig
        row[f"p_{i}"] = r.pvalue

    summary_rows.append(row)
    return row


def clean_sheet_name(label: str) -> str:
    # Excel: no []:*?/\ and at most 31 chars
    name = re.sub(r"[\[\]\:\*\?\/\\]", "_", label)
    return name[:31]
