# -*- coding: utf-8 -*-
"""
Created on Sat Dec 13 11:40:08 2025

@author: epicx

counter_labels.py

Split the reading labels into (direction, transitType).

The label vocabulary differs per counter:
    'North', 'East Sidewalk'       -> cardinal only, bike counter
    'NB', 'SB'                     -> abbreviations, bike counter
    'Ped South', 'Bike.North'      -> transit type + direction
    'North.bike'                   -> same, either order

Rules are tried in LABEL_RULES order and the first match wins.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

import pandas as pd


BIKE = "bike"
PEDESTRIAN = "pedestrian"

_CARDINAL_RE = re.compile(
    r"^(north|south|east|west)(?:bound)?(?:[\s._]+sidewalk)?$",
    re.IGNORECASE,
)

DIRECTION_ABBREVIATIONS = {
    "NB": "North",
    "SB": "South",
    "EB": "East",
    "WB": "West",
}

TRANSIT_TOKENS = {
    "bike": BIKE,
    "bikes": BIKE,
    "bicycle": BIKE,
    "ped": PEDESTRIAN,
    "peds": PEDESTRIAN,
    "pedestrian": PEDESTRIAN,
    "pedestrians": PEDESTRIAN,
}

_SEPARATOR_RE = re.compile(r"[\s._]+")

Parsed = Optional[tuple]


def match_cardinal(label: str) -> Parsed:
    m = _CARDINAL_RE.match(label)
    if m is None:
        return None
    return m.group(1).title(), BIKE


def match_abbreviation(label: str) -> Parsed:
    direction = DIRECTION_ABBREVIATIONS.get(label.upper())
    if direction is None:
        return None
    return direction, BIKE


def match_split(label: str) -> Parsed:
    """
    Split on '.', '_' or whitespace. A token naming a transit type wins
    wherever it sits; otherwise the first token is the transit type.
    """
    tokens = [t for t in _SEPARATOR_RE.split(label) if t]
    if len(tokens) < 2:
        return None

    for i, tok in enumerate(tokens):
        transit = TRANSIT_TOKENS.get(tok.lower())
        if transit is not None:
            rest = tokens[:i] + tokens[i + 1:]
            return " ".join(rest).title(), transit

    return " ".join(tokens[1:]).title(), tokens[0].lower()


# First match wins. 'North Sidewalk' must resolve via the cardinal rule.
LABEL_RULES: list[tuple[str, Callable[[str], Parsed]]] = [
    ("cardinal", match_cardinal),
    ("abbreviation", match_abbreviation),
    ("split", match_split),
]


def _resolve(label) -> tuple:
    """Return (rule_name, direction, transitType)."""
    if label is None or pd.isna(label):
        return None, None, None

    s = str(label).strip()
    if not s:
        return None, None, None

    for name, matcher in LABEL_RULES:
        parsed = matcher(s)
        if parsed is not None:
            return (name,) + tuple(parsed)

    return "fallback", s, None


def decompose_label(label) -> tuple:
    """
    'North' -> ('North', 'bike')
    'SB' -> ('South', 'bike')
    'Ped.South' -> ('South', 'pedestrian')
    """
    _, direction, transit = _resolve(label)
    return direction, transit


def label_rule(label) -> str | None:
    """Name of the rule that decides this label (None for blank labels)."""
    return _resolve(label)[0]


def decompose_labels(df: pd.DataFrame, label_col: str = "label") -> pd.DataFrame:
    """
    Add `direction` and `transitType` columns. Each distinct label is parsed once.
    """
    if label_col not in df.columns:
        raise KeyError(f"Dataframe is missing '{label_col}' column.")

    out = df.copy()
    parsed = {lab: decompose_label(lab) for lab in out[label_col].dropna().unique()}

    out["direction"] = out[label_col].map(lambda lab: parsed.get(lab, (None, None))[0])
    out["transitType"] = out[label_col].map(lambda lab: parsed.get(lab, (None, None))[1])

    unparsed = out.loc[out["transitType"].isna() & out[label_col].notna(), label_col].unique()
    if len(unparsed) > 0:
        print(f"[WARN] No transit type found for labels: {sorted(map(str, unparsed))}")

    return out
