# -*- coding: utf-8 -*-
"""
Created on Sat Dec 13 10:02:41 2025

@author: epicx

counter_loader.py

Load the per-crossing Seattle counter exports and stack them into one
long-format table.

Each raw file looks like:

    Date, <Crossing> Total, <label 1>, <label 2>, ...

The second column is the crossing total; its header (minus the trailing
"Total") names the crossing. Every other column is one direction/mode series.

Output columns (LONG_COLUMNS):
    Date, crossing, label, count, crossing_total
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import pandas as pd

from config import COUNTER_RAW_DIR


DATE_COL = "Date"
TOTAL_COL = "crossing_total"

# len(".Total") / len(" Total")
TOTAL_SUFFIX_LEN = 6

LONG_COLUMNS = [DATE_COL, "crossing", "label", "count", TOTAL_COL]

_WHITESPACE = re.compile(r"\s+")


def _clean_header(text: str) -> str:
    """Periods to spaces, collapse whitespace."""
    return _WHITESPACE.sub(" ", str(text).replace(".", " ")).strip()


def infer_crossing_name(header: str) -> str:
    """
    'Fremont.Bridge.Total' -> 'Fremont Bridge'
    'Spokane St. Bridge Total' -> 'Spokane St Bridge'
    """
    header = str(header).strip()
    if len(header) > TOTAL_SUFFIX_LEN:
        header = header[:-TOTAL_SUFFIX_LEN]
    return _clean_header(header)


def _strip_crossing_prefix(label: str, crossing: str) -> str:
    cleaned = _clean_header(label)
    if crossing and cleaned.lower().startswith(crossing.lower() + " "):
        cleaned = cleaned[len(crossing):].strip()
    return cleaned


def load_counter_csv(path: Path) -> pd.DataFrame:
    """
    Read one raw counter export. Header whitespace is stripped and Date is
    parsed (invalid -> NaT); all other columns are left untouched.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Counter file not found: {path}")

    df = pd.read_csv(path, low_memory=False)
    df.columns = [str(c).strip() for c in df.columns]

    if DATE_COL not in df.columns:
        raise KeyError(f"{path.name} has no '{DATE_COL}' column. Columns found: {list(df.columns)}")

    df[DATE_COL] = pd.to_datetime(df[DATE_COL], errors="coerce")
    return df


def normalize_counter_table(raw: pd.DataFrame, crossing: str | None = None) -> pd.DataFrame:
    """
    Reshape one wide counter table to long format.

    If crossing is None the name comes from the second column header and that
    column becomes `crossing_total`. Otherwise an existing `crossing_total`
    column is carried along and every other non-Date column is a reading.

    Rows out = rows in x number of reading columns.
    """
    df = raw.copy()

    if crossing is None:
        if len(df.columns) < 2:
            raise ValueError("Cannot infer crossing name: table has fewer than two columns.")
        total_header = df.columns[1]
        crossing = infer_crossing_name(total_header)
        df = df.rename(columns={total_header: TOTAL_COL})

    if DATE_COL not in df.columns:
        df[DATE_COL] = pd.NaT
    if TOTAL_COL not in df.columns:
        df[TOTAL_COL] = float("nan")

    reading_cols = [c for c in df.columns if c not in (DATE_COL, TOTAL_COL)]
    if not reading_cols:
        print(f"[WARN] {crossing}: no reading columns; nothing to reshape.")
        return pd.DataFrame(columns=LONG_COLUMNS)

    long_df = df.melt(
        id_vars=[DATE_COL, TOTAL_COL],
        value_vars=reading_cols,
        var_name="label",
        value_name="count",
    )

    long_df["crossing"] = crossing
    long_df["label"] = long_df["label"].map(lambda s: _strip_crossing_prefix(s, crossing))
    long_df["count"] = pd.to_numeric(long_df["count"], errors="coerce")
    long_df[TOTAL_COL] = pd.to_numeric(long_df[TOTAL_COL], errors="coerce")

    return long_df[LONG_COLUMNS]


def combine_counter_files(files: Iterable[Path]) -> pd.DataFrame:
    """
    Load + normalize each file and stack them into a single long table.
    """
    frames = []
    for fp in files:
        fp = Path(fp)
        print(f"Reading {fp.name} ...")
        raw = load_counter_csv(fp)
        if raw.empty:
            print(f"[WARN] {fp.name} is empty, skipping")
            continue

        long_df = normalize_counter_table(raw)
        print(f"  {long_df['crossing'].iloc[0] if len(long_df) else fp.stem}: "
              f"{len(raw):,} rows -> {len(long_df):,} readings")
        frames.append(long_df)

    if not frames:
        raise ValueError("No non-empty counter files were found to combine.")

    combined = pd.concat(frames, ignore_index=True)
    combined = combined.sort_values(["crossing", DATE_COL], kind="stable").reset_index(drop=True)
    return combined


def load_all_counters(counter_dir: Path = COUNTER_RAW_DIR) -> pd.DataFrame:
    """Every *.csv in counter_dir, combined."""
    counter_dir = Path(counter_dir)
    files = sorted(counter_dir.glob("*.csv"))
    if not files:
        raise FileNotFoundError(f"No counter CSVs found in {counter_dir}")
    return combine_counter_files(files)


if __name__ == "__main__":
    readings = load_all_counters()
    print(readings.head())
    print(readings.groupby("crossing")["count"].sum())
