"""Instructions sheet, export only"""

from typing import Set

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.properties import PageSetupProperties
from openpyxl.worksheet.worksheet import Worksheet

from core.enums import SectionId
from ..engine import SectionContext, SectionSpec
from .content import (
    DEPENDENT_CELLS, DEPENDENT_CELLS_ROW, FAQ, FAQ_ROW, GET_STARTED, GET_STARTED_ROW, INTRO,
    INTRO_ROW, SHEET_NAME, SPACING_ROW, TITLE, TITLE_ROW,
)

BLACK = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
HEADER_FILL = PatternFill(start_color="627EB6", end_color="627EB6", fill_type="solid")
WHITE = "FFFFFF"
TABLE_EDGE = Side(style="thin", color="DDDDDD")

BODY_FONT = Font(size=14, color="000000")
WRAPPED = Alignment(horizontal="left", vertical="top", wrap_text=True)


def _text(ws: Worksheet, ref: str, value: str, indent: int = 0) -> None:
    ws.merge_cells(ref)
    cell = ws[ref.split(":")[0]]
    cell.value = value
    cell.font = BODY_FONT
    cell.alignment = Alignment(horizontal="left", vertical="top", wrap_text=True, indent=indent)


def _block_header(ws: Worksheet, row: int, text: str) -> None:
    ws.merge_cells(f"B{row}:L{row}")
    cell = ws[f"B{row}"]
    cell.value = text
    cell.font = Font(bold=True, size=20, color=WHITE)
    cell.alignment = Alignment(horizontal="left", vertical="center", indent=1)
    cell.fill = HEADER_FILL
    ws.row_dimensions[row].height = 40


def _title(ws: Worksheet) -> None:
    ws.merge_cells(f"B{TITLE_ROW}:M{TITLE_ROW}")
    title = ws[f"B{TITLE_ROW}"]
    title.value = TITLE
    title.font = Font(bold=True, size=26, color=WHITE)
    title.alignment = Alignment(horizontal="left", vertical="center")
    title.fill = BLACK
    ws[f"A{TITLE_ROW}"].fill = BLACK
    ws.row_dimensions[TITLE_ROW].height = 60


def _get_started(ws: Worksheet) -> None:
    _block_header(ws, GET_STARTED_ROW, GET_STARTED["title"])
    row = GET_STARTED_ROW + 1
    _text(ws, f"B{row}:L{row}", GET_STARTED["description"])
    ws.row_dimensions[row].height = 60

    table = GET_STARTED["table"]
    for offset, (kind, description) in enumerate(table):
        current = row + 1 + offset
        ws.merge_cells(f"C{current}:D{current}")
        ws.merge_cells(f"E{current}:L{current}")
        ws.row_dimensions[current].height = 60
        last_row = offset == len(table) - 1
        for letter, value in (("C", kind), ("E", description)):
            cell = ws[f"{letter}{current}"]
            cell.value = value
            cell.font = BODY_FONT
            cell.alignment = Alignment(horizontal="left", vertical="center", wrap_text=True)
            cell.border = Border(
                bottom=None if last_row else TABLE_EDGE,
                right=TABLE_EDGE if letter == "C" else None,
            )


def _dependent_cells(ws: Worksheet) -> None:
    _block_header(ws, DEPENDENT_CELLS_ROW, DEPENDENT_CELLS["title"])
    row = DEPENDENT_CELLS_ROW + 2
    ws[f"C{row}"].fill = BLACK
    for offset, description in enumerate(DEPENDENT_CELLS["descriptions"]):
        _text(ws, f"D{row + offset}:L{row + offset}", description, indent=1 if offset == 0 else 2)


def _faq(ws: Worksheet) -> None:
    _block_header(ws, FAQ_ROW, FAQ["title"])
    row = FAQ_ROW + 2
    for index, (question, answer, height) in enumerate(FAQ["questions"]):
        start = row + index * 3
        ws.merge_cells(f"B{start}:L{start}")
        cell = ws[f"B{start}"]
        cell.value = question
        cell.font = Font(size=16, color="000000", bold=True)
        cell.alignment = WRAPPED
        _text(ws, f"B{start + 1}:L{start + 1}", answer, indent=2)
        ws.row_dimensions[start + 1].height = height


def write(ctx: SectionContext, ws: Worksheet) -> Set[int]:
    ws.sheet_view.showGridLines = False
    ws.page_setup.orientation = "portrait"
    ws.page_setup.fitToWidth = 1
    ws.page_setup.fitToHeight = 0
    ws.sheet_properties.pageSetUpPr = PageSetupProperties(fitToPage=True)
    ws.row_dimensions[1].hidden = True
    ws.row_dimensions[1].height = 4
    for letter in "ABCDEFGHIJKLM":
        ws.column_dimensions[letter].width = 10

    _title(ws)
    ws.row_dimensions[SPACING_ROW].height = 40

    _block_header(ws, INTRO_ROW, INTRO["title"])
    _text(ws, f"B{INTRO_ROW + 1}:L{INTRO_ROW + 1}", INTRO["description"])
    ws.row_dimensions[INTRO_ROW + 1].height = 60

    _get_started(ws)
    _dependent_cells(ws)
    _faq(ws)
    return {TITLE_ROW}


SECTION_INSTRUCTIONS = SectionSpec(
    id=SectionId.INSTRUCTIONS,
    sheet_name=SHEET_NAME,
    write=write,
)
