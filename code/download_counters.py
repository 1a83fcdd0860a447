# -*- coding: utf-8 -*-
"""
Created on Fri Dec 12 22:43:59 2025

@author: epicx
"""

import sys
from pathlib import Path
from typing import Iterable
import requests

from config import COUNTER_RAW_DIR

SEATTLE_OPEN_DATA = "https://data.seattle.gov/api/views"

# short name -> Socrata dataset id
COUNTER_DATASETS = {
    "fremont_bridge": "65db-xm6k",
    "burke_gilman_trail": "2z5v-ecg8",
    "spokane_st_bridge": "upms-nr8w",
    "broadway_cycle_track": "j4vh-b42a",
    "second_ave_cycletrack": "avwm-i8ym",
    "elliott_bay_trail": "4qej-qvrz",
}


def counter_csv_url(dataset_id: str) -> str:
    return f"{SEATTLE_OPEN_DATA}/{dataset_id}/rows.csv?accessType=DOWNLOAD"


def download_file(url: str, dest_path: Path, chunk_size: int = 1 << 20) -> None:
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    print(f"Downloading {url} -> {dest_path}")
    r = requests.get(url, stream=True, timeout=60)
    r.raise_for_status()

    tmp_path = dest_path.with_suffix(dest_path.suffix + ".part")
    with tmp_path.open("wb") as f:
        for chunk in r.iter_content(chunk_size=chunk_size):
            if chunk:
                f.write(chunk)
    tmp_path.replace(dest_path)
    print(f"Saved {dest_path}")


def download_counter_files(
    names: Iterable[str],
    out_dir: Path = COUNTER_RAW_DIR,
    url_builder=counter_csv_url,
) -> list:
    """
    names: keys of COUNTER_DATASETS, e.g. 'fremont_bridge'
    Existing files are left alone. Returns the paths present afterwards.
    """
    saved = []
    for name in names:
        if name not in COUNTER_DATASETS:
            raise ValueError(f"Unknown counter: '{name}'. Options: {sorted(COUNTER_DATASETS)}")

        url = url_builder(COUNTER_DATASETS[name])
        dest = Path(out_dir) / f"{name}.csv"

        if dest.exists():
            print(f"Already exists, skipping: {dest}")
            saved.append(dest)
            continue

        try:
            download_file(url, dest)
            saved.append(dest)
        except requests.HTTPError as e:
            print(f"HTTP error for {url}: {e}")
        except requests.RequestException as e:
            print(f"Error downloading {url}: {e}")

    return saved


if __name__ == "__main__":
    # Quick CLI usage: python code/download_counters.py fremont_bridge spokane_st_bridge
    # No arguments → every known counter
    names = sys.argv[1:] or list(COUNTER_DATASETS)
    download_counter_files(names)
