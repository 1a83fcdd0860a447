# -*- coding: utf-8 -*-
"""
Created on Mon Dec 15 16:14:41 2025

@author: epicx

data_merge.py

Build the enriched counter readings table:

    counter CSVs -> long readings -> (direction, transitType)
                 -> relativeDirection + calendar fields
                 -> + daily weather + daily cases

Key points:
- Join on readings['date'] (naive local midnight) to the daily tables.
- Left join → every reading is kept; days without weather/cases stay NaN.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from config import COUNTER_RAW_DIR, PROCESSED_DIR
from counter_loader import load_all_counters
from counter_labels import decompose_labels
from counter_enrich import enrich_readings, find_duplicate_readings
from daily_covariates import (
    DEFAULT_CASES_FILE,
    DEFAULT_WEATHER_FILE,
    load_county_cases,
    load_daily_weather,
)


OUTPUT_FILE = PROCESSED_DIR / "counter_readings_enriched.parquet"


def _check_daily(df: pd.DataFrame, name: str) -> pd.DataFrame:
    if "date" not in df.columns:
        raise KeyError(f"{name} dataframe is missing 'date' column.")

    df = df.copy()
    df["date"] = pd.to_datetime(df["date"]).astype("datetime64[ns]")

    dup_count = df["date"].duplicated().sum()
    if dup_count > 0:
        raise ValueError(f"{name}: {dup_count} duplicate dates; expected one row per day.")
    return df


def join_daily_covariates(
    readings: pd.DataFrame,
    weather: pd.DataFrame | None = None,
    cases: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """
    Left join:
        readings: date (column)
        weather:  date -> precipitation, temp_avg
        cases:    date -> cases, new_cases

    Assumes one weather/case row per day; readings are m:1.
    """
    if "date" not in readings.columns:
        raise KeyError("Readings dataframe is missing 'date' column; run enrich_readings first.")

    merged = readings
    for name, daily in (("weather", weather), ("cases", cases)):
        if daily is None:
            continue
        daily = _check_daily(daily, name)
        before = len(merged)
        merged = merged.merge(daily, on="date", how="left", validate="m:1")
        value_cols = [c for c in daily.columns if c != "date"]
        unmatched = merged[value_cols].isna().all(axis=1).sum()

        print(f"Readings rows:  {before:,}")
        print(f"{name.title()} rows:  {len(daily):,}")
        print(f"Merged rows:    {len(merged):,} ({unmatched:,} without {name})")

    return merged


def build_readings(
    counter_dir: Path = COUNTER_RAW_DIR,
    weather_path: Path | None = DEFAULT_WEATHER_FILE,
    cases_path: Path | None = DEFAULT_CASES_FILE,
) -> pd.DataFrame:
    readings = load_all_counters(counter_dir)
    readings = decompose_labels(readings)
    readings = enrich_readings(readings)

    dups = find_duplicate_readings(readings)
    if not dups.empty:
        print(f"WARNING: {len(dups):,} readings share (timestamp, crossing, transitType, direction); "
              "they will sum in aggregation.")

    weather = load_daily_weather(weather_path) if weather_path is not None else None
    cases = load_county_cases(cases_path) if cases_path is not None else None

    merged = join_daily_covariates(readings, weather, cases)

    if not merged.empty:
        print(
            "Merged range:",
            merged["timestamp"].min(),
            "→",
            merged["timestamp"].max(),
        )
    return merged


def save_output(df_merged: pd.DataFrame, out_path: Path = OUTPUT_FILE) -> Path:
    """
    Save enriched readings.
    """
    df_merged.to_parquet(out_path, index=False)
    print(f"Saved merged file to: {out_path}")
    return out_path


def main() -> None:
    df_merged = build_readings()
    save_output(df_merged)


if __name__ == "__main__":
    main()
