# -*- coding: utf-8 -*-
"""
Created on Tue Dec 16 19:25:52 2025

Daily ridership vs weather: univariate checks plus a calendar-controlled
multivariate OLS, per transit type.

@author: epicx
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import statsmodels.api as sm
import patsy

# import custom utilities
from model_utils import coeff_table, add_to_summary, clean_sheet_name
from config import PROCESSED_DIR, REPORTS_DIR

MODELS_XLSX = REPORTS_DIR / "weather_ridership_models_results.xlsx"

# covid_period = 1 from this day on
COVID_START = pd.Timestamp("2020-03-01")

# PRCP is in inches (NOAA "standard" units)
HEAVY_RAIN_IN = 0.5

DEFAULT_RHS = (
    "temp_avg + precipitation + rain_flag + heavy_rain_flag"
    " + is_weekend + C(month) + C(year) + covid_period"
)


# ------------------------------------------
# Daily frame builder
# ------------------------------------------
def build_daily_frame(df: pd.DataFrame, transit_type: str | None = None) -> pd.DataFrame:
    """
    Collapse readings to one row per day:
      total_count (missing counts as 0), precipitation, temp_avg, new_cases,
      day_of_week, month, year, is_weekend, rain_flag, heavy_rain_flag,
      covid_period
    """
    if "date" not in df.columns:
        raise KeyError("Readings dataframe is missing 'date' column.")

    sub = df
    if transit_type is not None:
        sub = df[df["transitType"] == transit_type]

    daily = (
        sub.assign(count=sub["count"].fillna(0))
        .groupby("date", as_index=False)["count"]
        .sum()
        .rename(columns={"count": "total_count"})
    )

    per_day_cols = [c for c in ("precipitation", "temp_avg", "new_cases") if c in sub.columns]
    if per_day_cols:
        covars = sub.groupby("date", as_index=False)[per_day_cols].first()
        daily = daily.merge(covars, on="date", how="left")

    daily["date"] = pd.to_datetime(daily["date"])
    daily["day_of_week"] = daily["date"].dt.dayofweek
    daily["month"] = daily["date"].dt.month
    daily["year"] = daily["date"].dt.year
    daily["is_weekend"] = (daily["day_of_week"] >= 5).astype(int)
    daily["covid_period"] = (daily["date"] >= COVID_START).astype(int)

    if "precipitation" in daily.columns:
        daily["rain_flag"] = (daily["precipitation"] > 0).astype(int)
        daily["heavy_rain_flag"] = (daily["precipitation"] >= HEAVY_RAIN_IN).astype(int)

    return daily.sort_values("date").reset_index(drop=True)


def run_univariate_regression(df: pd.DataFrame, y_col: str, x_col: str, label: str):
    """
    OLS: y_col ~ x_col (with intercept) on rows where both are present.
    Returns (model, df_used) or (None, None).
    """
    if x_col not in df.columns or y_col not in df.columns:
        print(f"[{label}] Missing {x_col} or {y_col}; skipping.")
        return None, None

    sub = df[[y_col, x_col]].dropna()
    if len(sub) < 3:
        print(f"[{label}] Not enough data ({len(sub)} rows).")
        return None, None

    X = sm.add_constant(sub[x_col])
    y = sub[y_col]

    model = sm.OLS(y, X).fit()

    print("=" * 80)
    print(f"Regression: {y_col} ~ {x_col}   ({label})")
    print(f"Observations used: {len(sub)}")
    print(model.summary().tables[1])  # coefficients table only
    print("=" * 80)

    return model, sub


def fit_weather_model(daily: pd.DataFrame, dep_var: str = "total_count", rhs: str = DEFAULT_RHS):
    """
    patsy formula OLS. Rows with missing weather drop out inside dmatrices.
    Single-level factors (e.g. one year only) are removed from the formula.
    """
    terms = [t.strip() for t in rhs.split("+")]
    kept = []
    for t in terms:
        col = t[2:-1] if t.startswith("C(") else t
        if col not in daily.columns:
            print(f"Dropping term {t}: column not present")
            continue
        if daily[col].nunique(dropna=True) < 2:
            print(f"Dropping term {t}: constant in data")
            continue
        kept.append(t)

    formula = f"{dep_var} ~ " + (" + ".join(kept) if kept else "1")
    y, X = patsy.dmatrices(formula, data=daily, return_type="dataframe")

    model = sm.OLS(y, X).fit()

    print("=" * 80)
    print(formula)
    print(f"Observations used: {int(model.nobs)}   R2 = {model.rsquared:.3f}")
    print("=" * 80)
    return model


def export_results(summary_rows, model_dict, out_path: Path = MODELS_XLSX) -> Path:
    """Summary sheet + one coefficient sheet per model."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    summary_df = pd.DataFrame(summary_rows)

    with pd.ExcelWriter(out_path, engine="xlsxwriter") as writer:
        summary_df.to_excel(writer, sheet_name="Summary", index=False)
        for label, model in model_dict.items():
            sheet = clean_sheet_name(label)
            coef_df = coeff_table(model, drop_const=False)
            coef_df.to_excel(writer, sheet_name=sheet, index=False)

    print(f"\nWeather models written to: {out_path}")
    return out_path


def run_models(df: pd.DataFrame, out_path: Path = MODELS_XLSX):
    summary_rows = []
    model_dict = {}

    for transit_type in ("bike", "pedestrian"):
        daily = build_daily_frame(df, transit_type=transit_type)
        if daily["total_count"].sum() == 0:
            print(f"No {transit_type} counts; skipping.")
            continue

        for x_col in ("temp_avg", "precipitation"):
            label = f"{transit_type} ~ {x_col}"
            model, _ = run_univariate_regression(daily, "total_count", x_col, label)
            if model is not None:
                add_to_summary(summary_rows, model, dep_var="total_count", label=label)
                model_dict[label] = model

        label = f"{transit_type} ~ weather + calendar"
        model = fit_weather_model(daily)
        add_to_summary(summary_rows, model, dep_var="total_count", label=label)
        model_dict[label] = model

    return export_results(summary_rows, model_dict, out_path)


# -----------------------------------------------------------
# MAIN
# -----------------------------------------------------------
if __name__ == "__main__":
    PATH = PROCESSED_DIR / "counter_readings_enriched.parquet"
    df = pd.read_parquet(PATH)
    run_models(df)
