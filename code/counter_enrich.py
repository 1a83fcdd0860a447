# -*- coding: utf-8 -*-
"""
Created on Sat Dec 13 14:18:55 2025

@author: epicx

counter_enrich.py

Reading-level derived columns:
  - relativeDirection: 'Towards' / 'Away' from the city center
  - calendar fields in Seattle local time: timestamp, year, month, day,
    weekday, hour, date (date-only join key)
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from config import PACIFIC_TZ, TOWARDS_CITY_CENTER


TOWARDS = "Towards"
AWAY = "Away"

READING_KEY = ["timestamp", "crossing", "transitType", "direction"]


def add_relative_direction(df: pd.DataFrame, towards=TOWARDS_CITY_CENTER) -> pd.DataFrame:
    """
    'Towards' iff (crossing, direction) is in the allow-list, else 'Away'.
    """
    out = df.copy()
    pairs = zip(out["crossing"], out["direction"])
    mask = [(c, d) in towards for c, d in pairs]
    out["relativeDirection"] = np.where(mask, TOWARDS, AWAY)
    return out


def localize_timestamps(s: pd.Series, tz=PACIFIC_TZ, ambiguous=None) -> pd.Series:
    """
    Naive -> tz-aware local time; aware -> converted.

    ambiguous: bool array, True = read the fall-back hour as daylight time.
    Default reads it as standard time. The missing spring-forward hour is
    shifted forward.
    """
    s = pd.to_datetime(s, errors="coerce")
    if s.dt.tz is not None:
        return s.dt.tz_convert(tz)

    if ambiguous is None:
        ambiguous = np.zeros(len(s), dtype=bool)

    return s.dt.tz_localize(
        tz,
        ambiguous=np.asarray(ambiguous, dtype=bool),
        nonexistent="shift_forward",
    )


def fall_back_mask(df: pd.DataFrame, time_col: str = "Date") -> np.ndarray:
    """
    True for the first of a repeated wall-clock time within one series
    (crossing + label). On the fall-back day that first 01:xx is daylight
    time and the repeat is standard time. Times seen once stay False.
    """
    keys = [c for c in ("crossing", "label") if c in df.columns] + [time_col]
    repeated = df.duplicated(subset=keys, keep=False)
    first = ~df.duplicated(subset=keys, keep="first")
    return (repeated & first).to_numpy()


def add_calendar_fields(df: pd.DataFrame, time_col: str = "Date") -> pd.DataFrame:
    out = df.copy()

    if time_col not in out.columns:
        raise KeyError(f"Dataframe is missing '{time_col}' column.")

    naive = pd.to_datetime(out[time_col], errors="coerce")
    ts = localize_timestamps(naive, ambiguous=fall_back_mask(out.assign(**{time_col: naive}), time_col))
    out["timestamp"] = ts
    out["year"] = ts.dt.year
    out["month"] = ts.dt.month
    out["day"] = ts.dt.day
    out["weekday"] = ts.dt.day_name()
    out["hour"] = ts.dt.hour

    # naive local midnight; matches the daily weather / case tables
    out["date"] = ts.dt.tz_localize(None).dt.normalize().astype("datetime64[ns]")

    return out


def enrich_readings(df: pd.DataFrame, time_col: str = "Date") -> pd.DataFrame:
    out = add_relative_direction(df)
    out = add_calendar_fields(out, time_col=time_col)
    return out


def find_duplicate_readings(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rows sharing (timestamp, crossing, transitType, direction). These are not
    removed; they sum together in any aggregation.
    """
    key = [c for c in READING_KEY if c in df.columns]
    dup_mask = df.duplicated(subset=key, keep=False)
    return df[dup_mask]
