import pandas as pd
import pytest

from counter_loader import (
    LONG_COLUMNS,
    combine_counter_files,
    infer_crossing_name,
    load_all_counters,
    load_counter_csv,
    normalize_counter_table,
)


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Fremont.Bridge.Total", "Fremont Bridge"),
        ("Fremont Bridge Total", "Fremont Bridge"),
        ("Spokane St. Bridge Total", "Spokane St Bridge"),
        ("BGT.North.of.NE.70th.Total", "BGT North of NE 70th"),
    ],
)
def test_infer_crossing_name(header, expected):
    assert infer_crossing_name(header) == expected


def test_wide_row_becomes_one_reading_per_column():
    raw = pd.DataFrame({
        "Date": [pd.Timestamp("2014-03-01 00:00")],
        "North": [5],
        "South": [3],
    })

    long_df = normalize_counter_table(raw, crossing="X")

    assert list(long_df.columns) == LONG_COLUMNS
    assert len(long_df) == 2
    assert set(long_df["crossing"]) == {"X"}
    got = dict(zip(long_df["label"], long_df["count"]))
    assert got == {"North": 5, "South": 3}


def test_crossing_inferred_from_second_column():
    raw = pd.DataFrame({
        "Date": pd.to_datetime(["2014-03-01 00:00", "2014-03-01 01:00"]),
        "Fremont Bridge Total": [8, 4],
        "Fremont Bridge East Sidewalk": [5, 1],
        "Fremont Bridge West Sidewalk": [3, 3],
    })

    long_df = normalize_counter_table(raw)

    assert len(long_df) == 4
    assert set(long_df["crossing"]) == {"Fremont Bridge"}
    assert set(long_df["label"]) == {"East Sidewalk", "West Sidewalk"}
    assert long_df["crossing_total"].tolist() == [8, 4, 8, 4]


def test_non_numeric_counts_become_nan():
    raw = pd.DataFrame({
        "Date": [pd.Timestamp("2014-03-01")],
        "NB": ["n/a"],
        "SB": ["7"],
    })

    long_df = normalize_counter_table(raw, crossing="Broadway")

    by_label = long_df.set_index("label")["count"]
    assert pd.isna(by_label["NB"])
    assert by_label["SB"] == 7


def test_row_count_is_rows_times_reading_columns(raw_dir):
    files = sorted(raw_dir["counters"].glob("*.csv"))

    combined = combine_counter_files(files)

    # BGT: 2 rows x 4 readings, Fremont: 3 rows x 2 readings
    assert len(combined) == 2 * 4 + 3 * 2
    assert set(combined["crossing"]) == {"Fremont Bridge", "BGT North of NE 70th"}


def test_load_counter_csv_requires_date(tmp_path):
    fp = tmp_path / "bad.csv"
    fp.write_text("When,X Total,North\n2020-01-01,1,1\n")

    with pytest.raises(KeyError):
        load_counter_csv(fp)


def test_load_counter_csv_parses_dates(raw_dir):
    df = load_counter_csv(raw_dir["counters"] / "fremont_bridge.csv")

    assert pd.api.types.is_datetime64_any_dtype(df["Date"])
    assert df["Date"].iloc[0] == pd.Timestamp("2020-06-01 07:00")


def test_load_all_counters_empty_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_all_counters(tmp_path)


def test_all_empty_files_raise(tmp_path):
    (tmp_path / "a.csv").write_text("Date,A Total,North\n")

    with pytest.raises(ValueError):
        load_all_counters(tmp_path)
