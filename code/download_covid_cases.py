# -*- coding: utf-8 -*-
"""
Created on Fri Dec 12 23:40:12 2025

@author: epicx

Fetch the NYT county-level COVID-19 case file (cumulative cases per county/day).
"""

from pathlib import Path

from config import COVID_RAW_DIR
from download_counters import download_file

NYT_COUNTIES_URL = "https://raw.githubusercontent.com/nytimes/covid-19-data/master/us-counties.csv"


def download_county_cases(
    url: str = NYT_COUNTIES_URL,
    out_name: str = "us-counties.csv",
    overwrite: bool = False,
) -> Path:
    dest = COVID_RAW_DIR / out_name
    if dest.exists() and not overwrite:
        print(f"Already exists, skipping: {dest}")
        return dest

    download_file(url, dest)
    return dest


if __name__ == "__main__":
    download_county_cases()
