# -*- coding: utf-8 -*-
"""
Created on Fri Dec 12 23:13:58 2025

@author: epicx
"""

import os
from pathlib import Path
from typing import Optional
import requests

from config import WEATHER_RAW_DIR

NOAA_BASE_URL = "https://www.ncei.noaa.gov/access/services/data/v1"

# Seattle-Tacoma Intl (SeaTac)
SEATTLE_STATIONS = "USW00024233"


def download_noaa_daily(
    stations: str = SEATTLE_STATIONS,
    start_date: str = "2014-01-01",
    end_date: str = "2021-12-31",
    token: Optional[str] = None,
    out_name: Optional[str] = "daily-summaries_seattle.csv",
    dataset: str = "daily-summaries",
) -> Path:
    """
    stations: comma-separated GHCN station IDs
    dates: 'YYYY-MM-DD'
    token: NOAA token (or read from NOAA_TOKEN env)

    Only PRCP (inches) and TAVG (°F) are requested.
    """
    if token is None:
        token = os.getenv("NOAA_TOKEN")
    if token is None:
        raise ValueError("NOAA token not provided; set NOAA_TOKEN env or pass token=")

    params = {
        "dataset": dataset,
        "stations": stations,
        "startDate": start_date,
        "endDate": end_date,
        "dataTypes": "PRCP,TAVG",
        "format": "csv",
        "units": "standard",  # Fahrenheit, inches
    }

    headers = {"token": token}
    resp = requests.get(NOAA_BASE_URL, params=params, headers=headers, timeout=60)
    resp.raise_for_status()

    WEATHER_RAW_DIR.mkdir(parents=True, exist_ok=True)

    if out_name is None:
        out_name = f"{dataset}_{stations}_{start_date}_{end_date}.csv".replace(",", "_")

    out_path = WEATHER_RAW_DIR / out_name
    out_path.write_text(resp.text, encoding="utf-8")
    print(f"Saved NOAA data to {out_path}")
    return out_path


if __name__ == "__main__":
    download_noaa_daily(
        start_date="2014-01-01",
        end_date="2021-12-31",
    )
