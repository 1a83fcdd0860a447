# -*- coding: utf-8 -*-
"""
Created on Thu Dec  4 21:45:27 2025

@author: epicx
"""

from pathlib import Path

import pytz

# Project root = parent of this file
PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = PROJECT_ROOT / "data"
RAW_DIR = DATA_DIR / "raw"
INTERIM_DIR = DATA_DIR / "interim"
PROCESSED_DIR = DATA_DIR / "processed"

# Raw subdirectories
COUNTER_RAW_DIR = RAW_DIR / "counters"
WEATHER_RAW_DIR = RAW_DIR / "weather"
COVID_RAW_DIR = RAW_DIR / "covid"

# Outputs
PLOTS_DIR = PROJECT_ROOT / "plots"
REPORTS_DIR = PROJECT_ROOT / "reports"

# Ensure directory creation
for p in [
    COUNTER_RAW_DIR,
    WEATHER_RAW_DIR,
    COVID_RAW_DIR,
    INTERIM_DIR,
    PROCESSED_DIR,
]:
    p.mkdir(parents=True, exist_ok=True)

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

# Counter timestamps are Seattle wall-clock time
PACIFIC_TZ = pytz.timezone("America/Los_Angeles")

# (crossing, direction) pairs heading towards downtown; everything else is "Away"
TOWARDS_CITY_CENTER = {
    ("Fremont Bridge", "West"),
    ("Spokane St Bridge", "East"),
    ("BGT North of NE 70th", "South"),
    ("Broadway Cycle Track North Of E Union St", "South"),
}

COVID_COUNTY = "King"
COVID_STATE = "Washington"

# CHAZ / CHOP occupation on Capitol Hill
CHOP_START = "2020-06-08"
CHOP_END = "2020-07-01"
