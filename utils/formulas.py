"""Spreadsheet formula fragments used by validation rules and autofill cells.

Every builder returns a plain string without a leading ``=``; the only
exception is :func:`LIST_FORMULA`, which is a list source for dropdowns.
Function names mirror the spreadsheet functions they emit.
"""

import re
from typing import Iterable, Union

from openpyxl.cell.cell import Cell

CellRef = Union[Cell, str]

_ADDRESS = re.compile(r"^\$?([A-Z]+)\$?(\d+)$", re.IGNORECASE)


def q(text: str) -> str:
    """Quote a string literal, doubling embedded quotes"""
    return '"' + str(text).replace('"', '""') + '"'


def abs_address(address: str) -> str:
    """Convert ``D2`` into ``$D$2``; anything else is returned unchanged"""
    if not address:
        return address
    match = _ADDRESS.match(address)
    if not match:
        return address
    return f"${match.group(1).upper()}${match.group(2)}"


# ─────────────────────────────────────────────────────────────
# Combinators and comparisons
# ─────────────────────────────────────────────────────────────

def AND(*parts: str) -> str:
    return f"AND({','.join(parts)})"


def OR(*parts: str) -> str:
    return f"OR({','.join(parts)})"


def NOT(part: str) -> str:
    return f"NOT({part})"


def IF(condition: str, when_true: str, when_false: str) -> str:
    return f"IF({condition},{when_true},{when_false})"


def IFERROR(value: str, fallback: str) -> str:
    return f"IFERROR({value},{fallback})"


def EQ(a: str, b: str) -> str:
    return f"{a}={b}"


def NEQ(a: str, b: str) -> str:
    return f"{a}<>{b}"


def LT(a: str, b: str) -> str:
    return f"{a}<{b}"


def LTE(a: str, b: str) -> str:
    return f"{a}<={b}"


def GT(a: str, b: str) -> str:
    return f"{a}>{b}"


def GTE(a: str, b: str) -> str:
    return f"{a}>={b}"


# ─────────────────────────────────────────────────────────────
# String and lookup functions
# ─────────────────────────────────────────────────────────────

def LEN(x: str) -> str:
    return f"LEN({x})"


def TRIM(x: str) -> str:
    return f"TRIM({x})"


def LEFT(x: str, count: int) -> str:
    return f"LEFT({x},{count})"


def MID(x: str, start: int, count: int) -> str:
    return f"MID({x},{start},{count})"


def RIGHT(x: str, count: int) -> str:
    return f"RIGHT({x},{count})"


def SUB(x: str, find: str, replacement: str) -> str:
    """SUBSTITUTE with literal search and replacement strings"""
    return f"SUBSTITUTE({x},{q(find)},{q(replacement)})"


def UPPER(x: str) -> str:
    return f"UPPER({x})"


def VALUE(x: str) -> str:
    return f"VALUE({x})"


def ISNUMBER(x: str) -> str:
    return f"ISNUMBER({x})"


def SEARCH(needle: str, haystack: str) -> str:
    return f"SEARCH({q(needle)},{haystack})"


def INDEX(source: str, row: str) -> str:
    return f"INDEX({source},{row})"


def MATCH(value: str, source: str, match_type: int = 0) -> str:
    return f"MATCH({value},{source},{match_type})"


def TODAY() -> str:
    return "TODAY()"


# ─────────────────────────────────────────────────────────────
# References
# ─────────────────────────────────────────────────────────────

def CELL(cell: CellRef) -> str:
    """Absolute address of a cell handle or an ``A1`` string"""
    address = cell if isinstance(cell, str) else cell.coordinate
    return abs_address(address)


def A1(column: str, row: int) -> str:
    return f"{column.upper()}{row}"


def ABS_ADDR(column: str, row: int) -> str:
    return abs_address(A1(column, row))


def RANGE(start: CellRef, end: CellRef) -> str:
    return f"{CELL(start)}:{CELL(end)}"


def SHEET(name: str) -> str:
    """Quoted sheet name, safe for names with spaces or quotes"""
    return "'" + name.replace("'", "''") + "'"


def SHEET_RANGE(name: str, start: CellRef, end: CellRef) -> str:
    return f"{SHEET(name)}!{RANGE(start, end)}"


def COLUMN_RANGE(name: str, column: str) -> str:
    """Whole-column reference such as ``'Sheet'!$B:$B``"""
    column = column.upper()
    return f"{SHEET(name)}!${column}:${column}"


def LIST_FORMULA(name: str, column: str, start_row: int, end_row: int) -> str:
    """List source for a dropdown, e.g. ``='Sheet'!$B$1:$B$10``"""
    end_row = max(end_row, start_row)
    return "=" + SHEET_RANGE(name, A1(column, start_row), A1(column, end_row))


# ─────────────────────────────────────────────────────────────
# Field rules
# ─────────────────────────────────────────────────────────────

def STR_EQ(cell: CellRef, value: str) -> str:
    return EQ(CELL(cell), q(value))


def IN(cell: CellRef, values: Iterable[str]) -> str:
    return OR(*[STR_EQ(cell, value) for value in values])


def REQUIRED(cell: CellRef) -> str:
    return f"{LEN(TRIM(CELL(cell)))}>0"


def TEXT_MAX(cell: CellRef, limit: int) -> str:
    return f"{LEN(CELL(cell))}<={limit}"


def TEXT_MIN(cell: CellRef, limit: int) -> str:
    return f"{LEN(CELL(cell))}>={limit}"


def EMAIL(cell: CellRef) -> str:
    """Exactly one ``@`` and at least one ``.``, in any order"""
    x = CELL(cell)
    return AND(
        ISNUMBER(SEARCH("@", x)),
        ISNUMBER(SEARCH(".", x)),
        f"{LEN(x)}-{LEN(SUB(x, '.', ''))}>=1",
        f"{LEN(x)}-{LEN(SUB(x, '@', ''))}=1",
    )


def ORCID(cell: CellRef) -> str:
    """Four dash separated groups of 4/4/4/3 digits plus a digit or ``X``"""
    x = CELL(cell)
    return AND(
        f"{LEN(x)}=19",
        EQ(MID(x, 5, 1), q("-")),
        EQ(MID(x, 10, 1), q("-")),
        EQ(MID(x, 15, 1), q("-")),
        ISNUMBER(VALUE(LEFT(x, 4))),
        ISNUMBER(VALUE(MID(x, 6, 4))),
        ISNUMBER(VALUE(MID(x, 11, 4))),
        ISNUMBER(VALUE(MID(x, 16, 3))),
        OR(ISNUMBER(VALUE(RIGHT(x, 1))), EQ(UPPER(RIGHT(x, 1)), q("X"))),
    )


def UUIDV4(cell: CellRef) -> str:
    x = CELL(cell)
    variant = UPPER(MID(x, 20, 1))
    return AND(
        f"{LEN(x)}=36",
        EQ(MID(x, 9, 1), q("-")),
        EQ(MID(x, 14, 1), q("-")),
        EQ(MID(x, 19, 1), q("-")),
        EQ(MID(x, 24, 1), q("-")),
        EQ(MID(x, 15, 1), q("4")),
        OR(*[EQ(variant, q(nibble)) for nibble in ("8", "9", "A", "B")]),
    )


def PHS(cell: CellRef) -> str:
    """Value starts with ``phs``, ignoring case and surrounding spaces"""
    return EQ(LEFT(UPPER(TRIM(CELL(cell))), 3), q("PHS"))


def DATE_NOT_BEFORE_TODAY(cell: CellRef, allow_blank: bool = False) -> str:
    x = CELL(cell)
    rule = AND(ISNUMBER(x), GTE(x, TODAY()))
    if allow_blank:
        return OR(NOT(REQUIRED(x)), rule)
    return rule
