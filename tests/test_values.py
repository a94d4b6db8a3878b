from datetime import datetime

from utils.merge import deep_merge
from utils.values import (
    from_yes_no, join_multi, split_multi, to_date_cell, to_positive_int, to_text, to_yes_no,
)


def test_to_text_trims_and_truncates():
    assert to_text("  hello  ") == "hello"
    assert to_text("abcdef", 3) == "abc"
    assert to_text(None) == ""
    assert to_text(float("nan")) == ""


def test_to_text_renders_dates_and_integral_floats():
    assert to_text(datetime(2030, 1, 5)) == "01/05/2030"
    assert to_text(12.0) == "12"
    assert to_text(True) == "Yes"


def test_yes_no():
    assert to_yes_no(True) == "Yes"
    assert to_yes_no(False) == "No"
    assert to_yes_no(None) == ""
    assert from_yes_no(" yes ") is True
    assert from_yes_no("No") is False
    assert from_yes_no("maybe") is None
    assert from_yes_no(None) is None


def test_multi_entry_round_trip():
    assert join_multi(["a", "", "b"]) == "a | b"
    assert split_multi(" a |b|| c ") == ["a", "b", "c"]
    assert split_multi(None) == []


def test_to_date_cell():
    assert to_date_cell("12/31/2030") == datetime(2030, 12, 31)
    assert to_date_cell("next year") == "next year"
    assert to_date_cell("") is None


def test_to_positive_int():
    assert to_positive_int("1,200") == 1200
    assert to_positive_int(5.0) == 5
    assert to_positive_int(0) is None
    assert to_positive_int("-3") is None
    assert to_positive_int("many") is None
    assert to_positive_int(True) is None


def test_to_positive_int_rejects_non_finite_numbers():
    assert to_positive_int("inf") is None
    assert to_positive_int("-inf") is None
    assert to_positive_int("1e999") is None
    assert to_positive_int(float("inf")) is None
    assert to_positive_int("1e3") == 1000


def test_deep_merge_recurses_into_dicts_and_replaces_lists():
    target = {"study": {"name": "A", "funding": [1]}, "species": ["x"]}
    source = {"study": {"abbreviation": "B", "funding": [2, 3]}, "species": []}
    merged = deep_merge(target, source)
    assert merged is target
    assert merged == {
        "study": {"name": "A", "abbreviation": "B", "funding": [2, 3]},
        "species": [],
    }


def test_deep_merge_copies_source_values():
    source = {"files": [{"type": "a"}]}
    merged = deep_merge({}, source)
    source["files"][0]["type"] = "changed"
    assert merged["files"][0]["type"] == "a"
