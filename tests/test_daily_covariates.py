import numpy as np
import pandas as pd
import pytest

from daily_covariates import load_county_cases, load_daily_weather


def test_weather_columns_renamed(raw_dir):
    weather = load_daily_weather(raw_dir["weather"])

    assert list(weather.columns) == ["date", "precipitation", "temp_avg"]
    assert weather["date"].tolist() == [pd.Timestamp("2020-06-01"), pd.Timestamp("2020-06-03")]
    assert weather["precipitation"].tolist() == [0.0, 0.3]


def test_weather_stations_averaged_per_day(tmp_path):
    fp = tmp_path / "w.csv"
    fp.write_text(
        "station,date,prcp,tavg\n"
        "A,2020-06-01,0.2,60\n"
        "B,2020-06-01,0.4,\n"
        "A,2020-06-02,M,50\n"
    )

    weather = load_daily_weather(fp)

    assert len(weather) == 2
    first = weather.iloc[0]
    assert first["precipitation"] == pytest.approx(0.3)
    assert first["temp_avg"] == 60
    assert np.isnan(weather.iloc[1]["precipitation"])


def test_weather_missing_value_column(tmp_path):
    fp = tmp_path / "w.csv"
    fp.write_text("DATE,PRCP\n2020-06-01,0.1\n")

    weather = load_daily_weather(fp)

    assert weather["temp_avg"].isna().all()


def test_weather_requires_date(tmp_path):
    fp = tmp_path / "w.csv"
    fp.write_text("DAY,PRCP\n2020-06-01,0.1\n")

    with pytest.raises(KeyError):
        load_daily_weather(fp)


def test_weather_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_daily_weather(tmp_path / "nope.csv")


def test_cases_filtered_to_county_and_state(raw_dir):
    cases = load_county_cases(raw_dir["cases"], county="King", state="Washington")

    assert cases["date"].tolist() == [pd.Timestamp("2020-06-01"), pd.Timestamp("2020-06-02")]
    assert cases["cases"].tolist() == [8000, 8050]
    assert cases["new_cases"].tolist() == [8000, 50]


def test_new_cases_never_negative(tmp_path):
    fp = tmp_path / "c.csv"
    fp.write_text(
        "date,county,cases\n"
        "2020-06-01,King,10\n"
        "2020-06-02,King,15\n"
        "2020-06-03,King,14\n"
        "2020-06-03,Pierce,99\n"
    )

    cases = load_county_cases(fp, county="King", state=None)

    assert cases["new_cases"].tolist() == [10, 5, 0]


def test_cases_require_columns(tmp_path):
    fp = tmp_path / "c.csv"
    fp.write_text("date,county\n2020-06-01,King\n")

    with pytest.raises(KeyError):
        load_county_cases(fp)
