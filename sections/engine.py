"""Generic section engine

A section is a worksheet described by a ``SectionSpec``: an ordered column
schema, character limits and three callbacks (write, validate, map_values).
``Section`` applies the shared steps around those callbacks.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Set, Tuple

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.comments import Comment
from openpyxl.formatting.rule import FormulaRule
from openpyxl.styles import Alignment, Font, PatternFill, Protection
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from config import settings
from core.enums import LookupKind, SectionId, ValidationKind
from core.error_catalog import ErrorCatalog
from core.exceptions import SectionError
from core.interfaces import MiddlewareDependencies, SectionValidator, SectionWriter, ValueMapper
from core.models import ColumnDef, QuestionnaireData, ValidationRule
from utils.values import DATE_NUMBER_FORMAT

logger = logging.getLogger(__name__)

HEADER_ROW = 1
START_ROW = 2
ANNOTATION_AUTHOR = "CRDC Submission Portal"


def write_literal(cell: Cell, value: Any) -> None:
    """Store ``value`` as data; text starting with "=" stays text, not a formula"""
    cell.value = None if value == "" else value
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"


@dataclass(frozen=True)
class SectionSpec:
    """Static description of one worksheet"""
    id: SectionId
    sheet_name: str
    columns: Tuple[ColumnDef, ...] = ()
    character_limits: Dict[str, int] = field(default_factory=dict)
    header_color: str = "D9EAD3"
    hidden: bool = False
    lookups: Tuple[LookupKind, ...] = ()
    write: Optional[SectionWriter] = None
    validate: Optional[SectionValidator] = None
    map_values: Optional[ValueMapper] = None

    def __post_init__(self):
        keys = [column.key for column in self.columns]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Duplicate column keys in section {self.id.value}")


@dataclass
class SectionContext:
    """Exclusive view of the export handed to one section at a time"""
    workbook: Workbook
    data: QuestionnaireData
    lookups: Any
    dependencies: MiddlewareDependencies
    exported_at: str = ""
    section: Optional["Section"] = None


class Section:
    """Runs the shared serialize steps around a section's callbacks"""

    def __init__(self, spec: SectionSpec):
        self.spec = spec
        self.written_rows: Set[int] = set()
        self._letters = {
            column.key: get_column_letter(index)
            for index, column in enumerate(spec.columns, start=1)
        }

    @property
    def id(self) -> SectionId:
        return self.spec.id

    @property
    def sheet_name(self) -> str:
        return self.spec.sheet_name

    async def serialize(self, ctx: SectionContext) -> Worksheet:
        """Create (or replace) the worksheet and run write, validate and annotate"""
        try:
            for kind in self.spec.lookups:
                await ctx.lookups.get_or_create(kind)
        except Exception as e:
            raise SectionError(self.spec.id.value, f"lookup sheets unavailable: {e}") from e

        workbook = ctx.workbook
        if self.spec.sheet_name in workbook.sheetnames:
            workbook.remove(workbook[self.spec.sheet_name])
        ws = workbook.create_sheet(self.spec.sheet_name)
        if self.spec.hidden:
            ws.sheet_state = "hidden"

        self._apply_columns(ws)

        section_ctx = replace(ctx, section=self)
        try:
            self.written_rows = set(self.spec.write(section_ctx, ws)) if self.spec.write else set()
            if self.spec.validate:
                self.spec.validate(section_ctx, ws)
        except Exception as e:
            raise SectionError(self.spec.id.value, str(e)) from e

        self._annotate(ws)
        logger.debug(
            "Serialized sheet '%s' with %d data rows", self.spec.sheet_name, len(self.written_rows)
        )
        return ws

    # ─────────────────────────────────────────────────────────
    # Schema helpers
    # ─────────────────────────────────────────────────────────

    def letter(self, key: str) -> str:
        return self._letters[key]

    def limit(self, key: str) -> Optional[int]:
        return self.spec.character_limits.get(key)

    def cell(self, ws: Worksheet, key: str, row: int = START_ROW) -> Cell:
        return ws[f"{self.letter(key)}{row}"]

    def set_row_values(
        self,
        ws: Worksheet,
        row: int,
        values: Dict[str, Any],
        formulas: Optional[Dict[str, str]] = None,
    ) -> int:
        """
        Write one row of cells

        Args:
            ws: Target worksheet
            row: Row number
            values: ``key -> value`` pairs, always stored as literals; empty
                strings stay empty cells
            formulas: ``key -> formula`` pairs stored as live formulas
        """
        for key, value in values.items():
            target = self.cell(ws, key, row)
            write_literal(target, value)
            if isinstance(value, datetime):
                target.number_format = DATE_NUMBER_FORMAT
            target.protection = Protection(locked=self._column(key).locked)
        for key, formula in (formulas or {}).items():
            target = self.cell(ws, key, row)
            target.value = "=" + formula.lstrip("=")
            target.protection = Protection(locked=self._column(key).locked)
        return row

    def write_records(
        self, ws: Worksheet, records: Iterable[Any], to_values: Callable[[Any], Dict[str, Any]]
    ) -> Set[int]:
        """Expand a repeating group into consecutive rows starting at row 2"""
        rows = set()
        for offset, record in enumerate(records):
            rows.add(self.set_row_values(ws, START_ROW + offset, to_values(record)))
        return rows

    def validation_rows(self) -> range:
        """Rows of a repeating column that receive validation"""
        last = max(
            max(self.written_rows, default=START_ROW),
            START_ROW + settings.RECORD_VALIDATION_ROWS - 1,
        )
        return range(START_ROW, last + 1)

    def column_range(self, key: str, rows: Optional[range] = None) -> str:
        rows = rows or range(START_ROW, START_ROW + 1)
        letter = self.letter(key)
        if len(rows) == 1:
            return f"{letter}{rows[0]}"
        return f"{letter}{rows[0]}:{letter}{rows[-1]}"

    # ─────────────────────────────────────────────────────────
    # Validation helpers
    # ─────────────────────────────────────────────────────────

    def add_rule(self, ws: Worksheet, ref: str, rule: ValidationRule) -> DataValidation:
        """Attach a rule to a cell or range"""
        formula1 = rule.formula1
        if rule.kind == ValidationKind.LIST and formula1.startswith("="):
            formula1 = formula1[1:]
        validation = DataValidation(
            type=rule.kind.value,
            operator=rule.operator,
            formula1=formula1,
            formula2=rule.formula2,
            allow_blank=rule.allow_blank,
            showErrorMessage=rule.error is not None,
            errorStyle=None if rule.strict else "information",
            error=rule.error,
        )
        ws.add_data_validation(validation)
        validation.add(ref)
        return validation

    def add_cell_rules(
        self,
        ws: Worksheet,
        key: str,
        rows: Iterable[int],
        build: Callable[[str], ValidationRule],
    ) -> None:
        """One rule per cell, for formulas that reference the cell itself"""
        for row in rows:
            address = f"{self.letter(key)}{row}"
            self.add_rule(ws, address, build(address))

    def text_limit_rule(self, key: str, required: bool = False) -> ValidationRule:
        limit = self.limit(key)
        return ValidationRule(
            kind=ValidationKind.TEXT_LENGTH,
            operator="lessThanOrEqual",
            formula1=str(limit),
            error=ErrorCatalog.get("requiredMax" if required else "max", max=limit),
            allow_blank=not required,
        )

    def black_out(self, ws: Worksheet, ref: str, formula: str) -> None:
        """Paint ``ref`` black while ``formula`` holds"""
        fill = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
        ws.conditional_formatting.add(ref, FormulaRule(formula=[formula], fill=fill, stopIfTrue=True))

    # ─────────────────────────────────────────────────────────
    # Shared serialize steps
    # ─────────────────────────────────────────────────────────

    def _column(self, key: str) -> ColumnDef:
        for column in self.spec.columns:
            if column.key == key:
                return column
        raise KeyError(key)

    def _apply_columns(self, ws: Worksheet) -> None:
        if not self.spec.columns:
            return
        fill = PatternFill(
            start_color=self.spec.header_color, end_color=self.spec.header_color, fill_type="solid"
        )
        for column in self.spec.columns:
            letter = self.letter(column.key)
            header = ws[f"{letter}{HEADER_ROW}"]
            header.value = column.header
            header.font = Font(bold=True)
            header.fill = fill
            header.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
            header.protection = Protection(locked=True)
            ws.column_dimensions[letter].width = column.width
        ws.freeze_panes = f"A{START_ROW}"

    def _annotate(self, ws: Worksheet) -> None:
        for column in self.spec.columns:
            if column.annotation:
                header = ws[f"{self.letter(column.key)}{HEADER_ROW}"]
                header.comment = Comment(column.annotation, ANNOTATION_AUTHOR, width=300, height=120)

