from datetime import date, timedelta

import pytest
from openpyxl import Workbook

from utils.formulas import (
    AND, CELL, COLUMN_RANGE, DATE_NOT_BEFORE_TODAY, EMAIL, IN, LIST_FORMULA, OR, ORCID, PHS,
    REQUIRED, SHEET, SHEET_RANGE, STR_EQ, SUB, TEXT_MAX, UUIDV4, abs_address, q,
)
from formula_eval import evaluate

TODAY = date(2026, 10, 19)


def test_text_max_uses_absolute_address():
    assert TEXT_MAX("A1", 50) == "LEN($A$1)<=50"


def test_and_joins_without_spaces():
    assert AND("A1>0", "B1<10") == "AND(A1>0,B1<10)"
    assert OR("A1>0", "B1<10") == "OR(A1>0,B1<10)"


def test_list_formula_is_only_builder_with_leading_equals():
    assert LIST_FORMULA("Sheet", "B", 1, 10) == "='Sheet'!$B$1:$B$10"
    assert not TEXT_MAX("A1", 5).startswith("=")


def test_list_formula_never_ends_before_start():
    assert LIST_FORMULA("Sheet", "A", 1, 0) == "='Sheet'!$A$1:$A$1"


def test_abs_address():
    assert abs_address("D2") == "$D$2"
    assert abs_address("$D$2") == "$D$2"
    assert abs_address("") == ""


def test_cell_accepts_cell_handles():
    ws = Workbook().active
    assert CELL(ws["H2"]) == "$H$2"


def test_sheet_names_with_quotes_are_escaped():
    assert SHEET("Bob's List") == "'Bob''s List'"
    assert SHEET_RANGE("Bob's List", "A1", "A3") == "'Bob''s List'!$A$1:$A$3"
    assert COLUMN_RANGE("ProgramList", "e") == "'ProgramList'!$E:$E"


def test_string_literals_double_internal_quotes():
    assert q('say "hi"') == '"say ""hi"""'
    assert SUB("A1", '"', "") == 'SUBSTITUTE(A1,"""","")'
    assert STR_EQ("H2", "Yes") == '$H$2="Yes"'


def test_required_and_in():
    assert REQUIRED("B3") == "LEN(TRIM($B$3))>0"
    assert IN("C2", ["Yes", "No"]) == 'OR($C$2="Yes",$C$2="No")'


@pytest.mark.parametrize("value, expected", [
    ("a@b.co", True),
    ("first.last@example.org", True),
    ("a.b.co", False),
    ("a@b", False),
    ("a@@b.co", False),
    ("", False),
])
def test_email_rule(value, expected):
    assert evaluate(EMAIL("A1"), {"A1": value}) is expected


@pytest.mark.parametrize("value, expected", [
    ("1234-5678-9012-3456", True),
    ("1234-5678-9012-345X", True),
    ("1234-5678-9012-345x", True),
    ("1234-5678-9012-34567", False),
    ("1234 5678-9012-3456", False),
    ("1234-5678+9012-3456", False),
    ("abcd-5678-9012-3456", False),
])
def test_orcid_rule(value, expected):
    assert evaluate(ORCID("A1"), {"A1": value}) is expected


@pytest.mark.parametrize("value, expected", [
    ("123e4567-e89b-42d3-a456-426614174000", True),
    ("123e4567-e89b-42d3-B456-426614174000", True),
    ("123e4567-e89b-12d3-a456-426614174000", False),
    ("123e4567-e89b-42d3-c456-426614174000", False),
    ("123e4567e89b42d3a456426614174000", False),
])
def test_uuid_v4_rule(value, expected):
    assert evaluate(UUIDV4("A1"), {"A1": value}) is expected


def test_phs_rule_ignores_case_and_spaces():
    assert evaluate(PHS("A1"), {"A1": "  phs000001.v1.p1"}) is True
    assert evaluate(PHS("A1"), {"A1": "000001"}) is False


def test_date_not_before_today():
    rule = DATE_NOT_BEFORE_TODAY("A1")
    assert evaluate(rule, {"A1": TODAY}, TODAY) is True
    assert evaluate(rule, {"A1": TODAY + timedelta(days=30)}, TODAY) is True
    assert evaluate(rule, {"A1": TODAY - timedelta(days=1)}, TODAY) is False
    assert evaluate(rule, {"A1": "10/19/2026"}, TODAY) is False
    assert evaluate(rule, {"A1": None}, TODAY) is False


def test_date_not_before_today_allowing_blank():
    rule = DATE_NOT_BEFORE_TODAY("A1", allow_blank=True)
    assert evaluate(rule, {"A1": None}, TODAY) is True
    assert evaluate(rule, {"A1": "   "}, TODAY) is True
    assert evaluate(rule, {"A1": TODAY - timedelta(days=1)}, TODAY) is False
