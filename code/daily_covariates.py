# -*- coding: utf-8 -*-
"""
Created on Sun Dec 14 09:51:12 2025

@author: epicx

daily_covariates.py

Daily tables joined onto the counter readings:

  Weather (NOAA GHCN daily-summaries):
      DATE, PRCP, TAVG [, STATION]  ->  date, precipitation, temp_avg

  COVID-19 cases (NYT us-counties):
      date, county, cases [, state]  ->  date, cases, new_cases

Both come back with exactly one row per date.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from config import WEATHER_RAW_DIR, COVID_RAW_DIR, COVID_COUNTY, COVID_STATE


DEFAULT_WEATHER_FILE = WEATHER_RAW_DIR / "daily-summaries_seattle.csv"
DEFAULT_CASES_FILE = COVID_RAW_DIR / "us-counties.csv"

WEATHER_COLUMN_MAP = {
    "PRCP": "precipitation",
    "TAVG": "temp_avg",
}


def load_daily_weather(file_path: Path = DEFAULT_WEATHER_FILE) -> pd.DataFrame:
    """
    Read a NOAA daily-summaries CSV.

    Missing PRCP/TAVG columns come back as NaN; non-numeric cells are coerced
    to NaN. If several stations are present they are averaged per day.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Weather file not found: {file_path}")

    print(f"Processing {file_path.name}")
    df = pd.read_csv(file_path, low_memory=False)

    # Normalize column names (NOAA uses uppercase)
    df.columns = [c.strip().upper() for c in df.columns]

    if "DATE" not in df.columns:
        raise KeyError(f"No DATE column in {file_path}. Columns found: {list(df.columns)}")

    out = pd.DataFrame({"date": pd.to_datetime(df["DATE"], errors="coerce").dt.normalize()})
    for src, dst in WEATHER_COLUMN_MAP.items():
        if src in df.columns:
            out[dst] = pd.to_numeric(df[src], errors="coerce")
        else:
            print(f"[WARN] {file_path.name}: no {src} column, {dst} will be NaN")
            out[dst] = np.nan

    out = out.dropna(subset=["date"])

    if "STATION" in df.columns and df["STATION"].nunique() > 1:
        print(f"Averaging {df['STATION'].nunique()} stations per day")

    daily = (
        out.groupby("date", as_index=False)[list(WEATHER_COLUMN_MAP.values())]
        .mean()
        .sort_values("date")
        .reset_index(drop=True)
    )

    print(f"Weather days: {len(daily):,}")
    return daily


def load_county_cases(
    file_path: Path = DEFAULT_CASES_FILE,
    county: str = COVID_COUNTY,
    state: str | None = COVID_STATE,
) -> pd.DataFrame:
    """
    Read a county-level case CSV and keep one county.

    `cases` is cumulative in the NYT data; `new_cases` is the day-over-day
    difference (first day = its cumulative value, negatives clipped to 0).
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Case file not found: {file_path}")

    df = pd.read_csv(file_path, low_memory=False)
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in ("date", "county", "cases") if c not in df.columns]
    if missing:
        raise KeyError(f"{file_path.name} is missing columns {missing}")

    mask = df["county"].astype(str).str.strip().str.lower() == county.lower()
    if state is not None and "state" in df.columns:
        mask &= df["state"].astype(str).str.strip().str.lower() == state.lower()

    sub = df.loc[mask, ["date", "cases"]].copy()
    if sub.empty:
        print(f"[WARN] No case rows for county '{county}' in {file_path.name}")

    sub["date"] = pd.to_datetime(sub["date"], errors="coerce").dt.normalize()
    sub["cases"] = pd.to_numeric(sub["cases"], errors="coerce")
    sub = sub.dropna(subset=["date"])

    daily = sub.groupby("date", as_index=False)["cases"].sum().sort_values("date")
    daily["new_cases"] = daily["cases"].diff().fillna(daily["cases"]).clip(lower=0)

    print(f"Case days ({county}): {len(daily):,}")
    return daily.reset_index(drop=True)
