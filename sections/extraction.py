"""Reading section worksheets back into column values"""

from typing import Dict, Iterable, List

import pandas as pd
from openpyxl.worksheet.worksheet import Worksheet

from core.interfaces import ColumnValues, HeaderValues
from core.models import ColumnDef
from utils.values import is_blank
from .engine import HEADER_ROW


def extract_header_values(ws: Worksheet) -> HeaderValues:
    """
    Collect the values below each header cell

    Formula cells are read as empty: the codec never evaluates formulas,
    and autofilled cells are rebuilt from lookup data instead.

    Returns:
        ``(header text, values from row 2 down)`` per non-blank header, in
        physical column order
    """
    max_row = ws.max_row or 0
    max_col = ws.max_column or 0
    rows = []
    for row in ws.iter_rows(min_row=HEADER_ROW, max_row=max_row, max_col=max_col):
        rows.append([
            None if cell.data_type == "f" or is_blank(cell.value) else cell.value
            for cell in row
        ])

    if not rows:
        return []

    headers = rows[0]
    df = pd.DataFrame(rows[1:], columns=range(len(headers)), dtype=object)

    result: HeaderValues = []
    for index, header in enumerate(headers):
        if is_blank(header):
            continue
        column = df[index]
        # Trailing blanks are dropped; gaps before the last value keep their position
        last = column.last_valid_index()
        values = [] if last is None else column.loc[:last].tolist()
        result.append((str(header).strip(), values))
    return result


def rekey(header_values: HeaderValues, columns: Iterable[ColumnDef]) -> ColumnValues:
    """
    Map header text back to column keys

    Repeated header text is matched by occurrence: the n-th column with a
    given header takes the n-th physical column carrying that header.
    Columns whose header is missing from the sheet are omitted.
    """
    occurrences: Dict[str, List[List]] = {}
    for header, values in header_values:
        occurrences.setdefault(header, []).append(values)

    used: Dict[str, int] = {}
    result: ColumnValues = {}
    for column in columns:
        index = used.get(column.header, 0)
        used[column.header] = index + 1
        found = occurrences.get(column.header, [])
        if index < len(found):
            result[column.key] = found[index]
    return result


def extract_column_values(ws: Worksheet, columns: Iterable[ColumnDef]) -> ColumnValues:
    return rekey(extract_header_values(ws), columns)
