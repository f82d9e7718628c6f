import math

import numpy as np
import pytest

from models.color_scheme import TRAVEL_TIME_SCHEME
from models.travel_time import (
    NOT_APPLICABLE, SelectionState, aggregate, apply_selection,
    default_selection, destination_fields, format_label, format_travel_time,
    info_lines,
)

RECORD = {"GEOID": "001", "population": 50, "a": 12.0, "b": 7.5, "c": None, "d": math.nan}


def test_empty_selection_returns_sentinel():
    assert aggregate(RECORD, []) == NOT_APPLICABLE
    assert aggregate({}, set()) == 999


def test_single_selection_returns_field():
    assert aggregate(RECORD, {"a"}) == 12.0


def test_max_over_selection():
    assert aggregate(RECORD, {"a", "b"}) == 12.0
    assert aggregate({"a": 3, "b": 40}, ["a", "b"]) == 40


def test_missing_fields_are_skipped():
    assert aggregate(RECORD, ["b", "c", "d", "nope"]) == 7.5


def test_all_selected_missing_is_none():
    assert aggregate(RECORD, ["c", "d", "nope"]) is None


def test_aggregate_is_deterministic():
    results = {aggregate(RECORD, ["a", "b"]) for _ in range(5)}
    assert results == {12.0}


@pytest.mark.parametrize(
    "raw,label",
    [
        ("supermarkets", "Supermarkets"),
        ("fire_stations", "Fire stations"),
        ("public_K_12_schools", "Public K 12 schools"),
        ("", ""),
    ],
)
def test_format_label(raw, label):
    assert format_label(raw) == label


@pytest.mark.parametrize(
    "minutes,text",
    [
        (0, "<5 min."),
        (4.99, "<5 min."),
        (5, "5 min."),
        (12.4, "12 min."),
        (12.5, "13 min."),
        (30, "30 min."),
        (30.2, ">30 min."),
        (None, "No data"),
        (math.nan, "No data"),
    ],
)
def test_format_travel_time(minutes, text):
    assert format_travel_time(minutes) == text


def test_info_lines_follow_selection_order():
    labels = {"a": "Alpha", "b": "Beta"}
    assert info_lines(RECORD, ["b", "a"], labels) == ["Beta: 8 min.", "Alpha: 12 min."]


def test_destination_fields_skip_ids_and_geometry():
    cols = ["GEOID", "population", "supermarkets", "pharmacies", "geometry", "tt"]
    assert destination_fields(cols) == ["supermarkets", "pharmacies"]


def test_default_selection():
    assert default_selection(["pharmacies", "supermarkets"]) == ["supermarkets"]
    assert default_selection(["pharmacies", "libraries"]) == ["pharmacies"]
    assert default_selection([]) == []


def test_selection_state_keeps_destination_order():
    state = SelectionState.from_destinations(
        ["supermarkets", "fire_stations", "pharmacies"], ["pharmacies", "supermarkets"]
    )
    assert state.selected == ("supermarkets", "pharmacies")
    assert state.labels["fire_stations"] == "Fire stations"
    assert not state.is_empty


def test_selection_state_rejects_unknown():
    with pytest.raises(KeyError):
        SelectionState.from_destinations(["a"], ["b"])


def test_empty_selection_state():
    assert SelectionState.from_destinations(["a"]).is_empty


def test_apply_selection(tracts):
    out = apply_selection(tracts, ["supermarkets", "fire_stations"])
    assert list(out["tt"]) == [12.4, 17.9, 14.6, 44.0]
    assert "tt" not in tracts.columns


def test_apply_selection_empty(tracts):
    out = apply_selection(tracts, [])
    assert (out["tt"] == NOT_APPLICABLE).all()


def test_apply_selection_all_missing_is_nan(tracts):
    out = apply_selection(tracts, ["fire_stations"])
    assert out["tt"].isna().sum() == 1
    assert out["tt"].dtype == "float64"


@pytest.mark.parametrize("value", ["45", "inf", b"12", True])
def test_numeric_strings_are_not_minutes(value):
    assert aggregate({"a": value}, ["a"]) is None
    assert aggregate({"a": value, "b": 6.0}, ["a", "b"]) == 6.0


def test_format_travel_time_matches_classifier_on_strings():
    assert format_travel_time("12") == "No data"
    assert TRAVEL_TIME_SCHEME.classify("12") == TRAVEL_TIME_SCHEME.na_color


def test_numpy_minutes_are_accepted():
    assert aggregate({"a": np.float64(7.5), "b": np.int64(9)}, ["a", "b"]) == 9.0
    assert format_travel_time(np.float64(12.4)) == "12 min."
