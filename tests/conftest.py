import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


FREMONT_CSV = """Date,Fremont Bridge Total,Fremont Bridge East Sidewalk,Fremont Bridge West Sidewalk
2020-06-01 07:00:00,30,10,20
2020-06-01 08:00:00,45,15,30
2020-06-02 07:00:00,12,,12
"""

BGT_CSV = """Date,BGT North of NE 70th Total,Ped South,Ped North,Bike North,Bike South
2020-06-01 07:00:00,20,1,2,7,10
2020-06-02 07:00:00,11,0,1,4,6
"""

WEATHER_CSV = """STATION,DATE,PRCP,TAVG
USW00024233,2020-06-01,0.00,61
USW00024233,2020-06-03,0.30,55
"""

CASES_CSV = """date,county,state,fips,cases,deaths
2020-06-01,King,Washington,53033,8000,570
2020-06-02,King,Washington,53033,8050,571
2020-06-01,King,Texas,48269,0,0
"""


@pytest.fixture
def raw_dir(tmp_path):
    counters = tmp_path / "counters"
    counters.mkdir()
    (counters / "fremont_bridge.csv").write_text(FREMONT_CSV)
    (counters / "burke_gilman_trail.csv").write_text(BGT_CSV)

    weather = tmp_path / "weather.csv"
    weather.write_text(WEATHER_CSV)

    cases = tmp_path / "us-counties.csv"
    cases.write_text(CASES_CSV)

    return {"counters": counters, "weather": weather, "cases": cases}


@pytest.fixture
def enriched_readings():
    """Two months of hourly-ish readings with weather and cases attached."""
    rng = np.random.default_rng(7)
    dates = pd.date_range("2020-05-01", "2020-06-30", freq="D")

    rows = []
    for d in dates:
        temp = 50 + 15 * rng.random()
        precip = 0.0 if rng.random() < 0.6 else round(rng.random(), 2)
        for hour in (7, 8, 17):
            ts = d + pd.Timedelta(hours=hour)
            for crossing, direction, transit in (
                ("Fremont Bridge", "West", "bike"),
                ("Fremont Bridge", "East", "bike"),
                ("BGT North of NE 70th", "South", "pedestrian"),
            ):
                rows.append({
                    "Date": ts,
                    "crossing": crossing,
                    "direction": direction,
                    "transitType": transit,
                    "count": float(rng.integers(0, 50)) + 2 * temp - 40 * precip,
                    "relativeDirection": "Towards" if direction in ("West", "South") else "Away",
                    "year": ts.year,
                    "month": ts.month,
                    "day": ts.day,
                    "weekday": ts.day_name(),
                    "hour": ts.hour,
                    "date": d,
                    "temp_avg": temp,
                    "precipitation": precip,
                    "cases": 1000.0 + d.dayofyear,
                    "new_cases": float(rng.integers(5, 40)),
                })
    return pd.DataFrame(rows)
