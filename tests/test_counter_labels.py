import pandas as pd
import pytest

from counter_labels import LABEL_RULES, decompose_label, decompose_labels, label_rule


@pytest.mark.parametrize(
    "label, expected",
    [
        ("North", ("North", "bike")),
        ("south", ("South", "bike")),
        ("East Sidewalk", ("East", "bike")),
        ("Westbound", ("West", "bike")),
        ("NB", ("North", "bike")),
        ("SB", ("South", "bike")),
        ("Ped South", ("South", "pedestrian")),
        ("Bike.North", ("North", "bike")),
        ("North.bike", ("North", "bike")),
        ("Ped_North", ("North", "pedestrian")),
        ("Scooter.East", ("East", "scooter")),
        ("Total", ("Total", None)),
    ],
)
def test_decompose_label(label, expected):
    assert decompose_label(label) == expected


@pytest.mark.parametrize("label", [None, "", "   ", float("nan")])
def test_blank_labels_give_nulls(label):
    assert decompose_label(label) == (None, None)


def test_rules_are_an_ordered_priority_list():
    assert [name for name, _ in LABEL_RULES] == ["cardinal", "abbreviation", "split"]


@pytest.mark.parametrize(
    "label, rule",
    [
        ("North", "cardinal"),
        ("North Sidewalk", "cardinal"),
        ("NB", "abbreviation"),
        ("Bike North", "split"),
        ("Total", "fallback"),
        ("", None),
    ],
)
def test_first_matching_rule_wins(label, rule):
    assert label_rule(label) == rule


def test_non_empty_labels_never_fully_null():
    labels = ["North", "NB", "Ped South", "Bike.North", "Total", "x", "East.West.Ped", "??"]
    for lab in labels:
        direction, transit = decompose_label(lab)
        assert not (direction is None and transit is None), lab


def test_decompose_labels_adds_columns():
    df = pd.DataFrame({"label": ["North", "SB", "Ped South", None]})

    out = decompose_labels(df)

    assert out["direction"].tolist()[:3] == ["North", "South", "South"]
    assert out["transitType"].tolist()[:3] == ["bike", "bike", "pedestrian"]
    assert pd.isna(out["direction"].iloc[3])
    assert "direction" not in df.columns


def test_decompose_labels_requires_label_column():
    with pytest.raises(KeyError):
        decompose_labels(pd.DataFrame({"other": ["North"]}))
