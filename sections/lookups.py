"""Hidden reference sheets shared by several sections"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet
from pydantic import BaseModel, ValidationError

from core.enums import LookupKind
from core.exceptions import LookupSheetError
from core.interfaces import LookupData, MiddlewareDependencies
from core.models import FileTypeOption, Institution, Program
from utils.formulas import CELL, IF, LIST_FORMULA, REQUIRED
from utils.values import to_text
from .engine import write_literal
from .options import DEFAULT_CANCER_TYPES, DEFAULT_SPECIES, FIXED_PROGRAMS

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SHEET_NAMES: Dict[LookupKind, str] = {
    LookupKind.INSTITUTIONS: "InstitutionList",
    LookupKind.PROGRAMS: "ProgramList",
    LookupKind.FUNDING_AGENCIES: "FundingAgencyList",
    LookupKind.FILE_TYPES: "FileTypeList",
    LookupKind.CANCER_TYPES: "CancerTypeList",
    LookupKind.SPECIES: "SpeciesList",
}

# Column holding the values offered by dropdowns
DROPDOWN_COLUMNS: Dict[LookupKind, str] = {
    LookupKind.INSTITUTIONS: "B",
    LookupKind.PROGRAMS: "E",
    LookupKind.FUNDING_AGENCIES: "A",
    LookupKind.FILE_TYPES: "A",
    LookupKind.CANCER_TYPES: "A",
    LookupKind.SPECIES: "A",
}

_DEFAULTS: Dict[LookupKind, List[str]] = {
    LookupKind.CANCER_TYPES: DEFAULT_CANCER_TYPES,
    LookupKind.SPECIES: DEFAULT_SPECIES,
}


async def fetch_lookup(kind: LookupKind, dependencies: MiddlewareDependencies) -> List[Any]:
    """
    Call the host's fetcher for ``kind``

    A missing fetcher yields the built-in list (if any); a failing fetcher
    yields an empty list.
    """
    fetch = dependencies.fetcher(kind)
    if fetch is None:
        return list(_DEFAULTS.get(kind, []))

    try:
        result = fetch()
        # Handle both sync and async fetchers
        if hasattr(result, "__await__"):
            result = await result
        return list(result or [])
    except Exception as e:
        logger.warning(
            "Unable to fetch the %s lookup, continuing with an empty list: %s", kind.value, e
        )
        return []


# ─────────────────────────────────────────────────────────────
# Normalization of fetched items
# ─────────────────────────────────────────────────────────────

def _as_name(item: Any) -> str:
    if isinstance(item, dict):
        return to_text(item.get("name"))
    if hasattr(item, "name"):
        return to_text(item.name)
    return to_text(item)


def _fields(item: Dict[str, Any]) -> Dict[str, Any]:
    """Drop null fields so defaults apply; numbers become text"""
    fields = {}
    for key, value in item.items():
        if value is None:
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = to_text(value)
        fields[key] = value
    return fields


def _validated(
    items: List[Any],
    model: Type[ModelT],
    from_text: Optional[Callable[[str], ModelT]] = None,
) -> List[ModelT]:
    """
    Validate fetched records one at a time

    Malformed records are logged and skipped. Plain values are passed to
    ``from_text`` when given, otherwise ignored.
    """
    result = []
    for item in items:
        if isinstance(item, model):
            result.append(item)
        elif isinstance(item, dict):
            try:
                result.append(model.model_validate(_fields(item)))
            except ValidationError as e:
                logger.warning("Skipping malformed %s record %r: %s", model.__name__, item, e)
        elif from_text is not None:
            result.append(from_text(to_text(item)))
    return result


def _institutions(items: List[Any]) -> List[Institution]:
    return _validated(items, Institution, lambda name: Institution(name=name))


def _programs(items: List[Any]) -> List[Program]:
    fixed_ids = {option["_id"] for option in FIXED_PROGRAMS}
    programs = [program for program in _validated(items, Program) if program.id not in fixed_ids]
    return programs + [Program.model_validate(option) for option in FIXED_PROGRAMS]


def _file_types(items: List[Any]) -> List[FileTypeOption]:
    return _validated(items, FileTypeOption, lambda name: FileTypeOption(name=name))


def program_display(program_id: str, name: str) -> str:
    """Name shown in the program dropdown, falling back to the id"""
    return name.strip() or program_id.strip()


# ─────────────────────────────────────────────────────────────
# Sheet population
# ─────────────────────────────────────────────────────────────

def _write_institutions(sheet: Worksheet, items: List[Any]) -> int:
    institutions = _institutions(items)
    for row, institution in enumerate(institutions, start=1):
        write_literal(sheet[f"A{row}"], institution.id)
        write_literal(sheet[f"B{row}"], institution.name)
    return len(institutions)


def _write_programs(sheet: Worksheet, items: List[Any]) -> int:
    programs = _programs(items)
    for row, program in enumerate(programs, start=1):
        write_literal(sheet[f"A{row}"], program.id)
        write_literal(sheet[f"B{row}"], program.name)
        write_literal(sheet[f"C{row}"], program.abbreviation)
        write_literal(sheet[f"D{row}"], program.description)
        sheet[f"E{row}"] = "=" + IF(REQUIRED(f"B{row}"), CELL(f"B{row}"), CELL(f"A{row}"))
    return len(programs)


def _write_file_types(sheet: Worksheet, items: List[Any]) -> int:
    file_types = _file_types(items)
    for row, option in enumerate(file_types, start=1):
        write_literal(sheet[f"A{row}"], option.name)
        write_literal(sheet[f"B{row}"], ", ".join(option.extensions))
    return len(file_types)


def _write_names(sheet: Worksheet, items: List[Any]) -> int:
    names = [name for name in (_as_name(item) for item in items) if name]
    for row, name in enumerate(names, start=1):
        write_literal(sheet[f"A{row}"], name)
    return len(names)


_WRITERS: Dict[LookupKind, Callable[[Worksheet, List[Any]], int]] = {
    LookupKind.INSTITUTIONS: _write_institutions,
    LookupKind.PROGRAMS: _write_programs,
    LookupKind.FUNDING_AGENCIES: _write_names,
    LookupKind.FILE_TYPES: _write_file_types,
    LookupKind.CANCER_TYPES: _write_names,
    LookupKind.SPECIES: _write_names,
}


def _used_rows(sheet: Worksheet) -> int:
    if sheet.max_row == 1 and sheet["A1"].value is None and sheet["B1"].value is None:
        return 0
    return sheet.max_row


class LookupRegistry:
    """Per-workbook registry of lookup sheets, created at most once per kind"""

    def __init__(self, workbook: Workbook, dependencies: MiddlewareDependencies):
        self.workbook = workbook
        self.dependencies = dependencies
        self._sheets: Dict[LookupKind, Worksheet] = {}
        self._rows: Dict[LookupKind, int] = {}

    async def get_or_create(self, kind: LookupKind) -> Worksheet:
        """Return the sheet for ``kind``, building it on first use"""
        if kind in self._sheets:
            return self._sheets[kind]

        name = SHEET_NAMES[kind]
        if name in self.workbook.sheetnames:
            sheet = self.workbook[name]
            rows = _used_rows(sheet)
        else:
            sheet = self.workbook.create_sheet(name)
            sheet.sheet_state = "hidden"
            items = await fetch_lookup(kind, self.dependencies)
            rows = _WRITERS[kind](sheet, items)
            logger.debug("Created lookup sheet '%s' with %d rows", name, rows)

        self._sheets[kind] = sheet
        self._rows[kind] = rows
        return sheet

    def require(self, kind: LookupKind) -> Worksheet:
        if kind not in self._sheets:
            raise LookupSheetError(kind.value)
        return self._sheets[kind]

    def row_count(self, kind: LookupKind) -> int:
        self.require(kind)
        return self._rows[kind]

    def list_formula(self, kind: LookupKind) -> str:
        """Dropdown source covering every populated row of the lookup"""
        sheet = self.require(kind)
        return LIST_FORMULA(sheet.title, DROPDOWN_COLUMNS[kind], 1, max(self._rows[kind], 1))

    def sheet_name(self, kind: LookupKind) -> str:
        return self.require(kind).title

    def programs(self) -> List[Program]:
        """Programs listed on the program lookup sheet, fixed options included"""
        return _sheet_programs(self.require(LookupKind.PROGRAMS))


# ─────────────────────────────────────────────────────────────
# Parse side
# ─────────────────────────────────────────────────────────────

def _read_rows(sheet: Worksheet, width: int) -> List[List[str]]:
    rows = []
    for row in sheet.iter_rows(min_row=1, max_row=sheet.max_row, max_col=width):
        values = ["" if cell.data_type == "f" else to_text(cell.value) for cell in row]
        if any(values):
            rows.append(values)
    return rows


def _sheet_programs(sheet: Worksheet) -> List[Program]:
    return [
        Program(id=row[0], name=row[1], abbreviation=row[2], description=row[3])
        for row in _read_rows(sheet, 4)
    ]


def _program_dicts(programs: List[Program]) -> List[Dict[str, str]]:
    return [
        {
            "_id": program.id,
            "name": program.name,
            "abbreviation": program.abbreviation,
            "description": program.description,
            "display": program_display(program.id, program.name),
        }
        for program in programs
    ]


async def load_lookup_data(workbook: Workbook, dependencies: MiddlewareDependencies) -> LookupData:
    """
    Build foreign-key maps for a parse

    Hidden sheets shipped inside the uploaded workbook are preferred; the
    host's fetchers are only called for kinds whose sheet is missing.
    """
    raw: Dict[LookupKind, Optional[List[List[str]]]] = {}
    for kind, name in SHEET_NAMES.items():
        if name in workbook.sheetnames:
            raw[kind] = _read_rows(workbook[name], 4)
        else:
            raw[kind] = None

    if raw[LookupKind.INSTITUTIONS] is not None:
        institutions = [Institution(id=row[0], name=row[1]) for row in raw[LookupKind.INSTITUTIONS]]
    else:
        institutions = _institutions(await fetch_lookup(LookupKind.INSTITUTIONS, dependencies))

    if raw[LookupKind.PROGRAMS] is not None:
        programs = _sheet_programs(workbook[SHEET_NAMES[LookupKind.PROGRAMS]])
    else:
        programs = _programs(await fetch_lookup(LookupKind.PROGRAMS, dependencies))

    names: Dict[LookupKind, List[str]] = {}
    for kind in (
        LookupKind.FUNDING_AGENCIES,
        LookupKind.FILE_TYPES,
        LookupKind.CANCER_TYPES,
        LookupKind.SPECIES,
    ):
        if raw[kind] is not None:
            names[kind] = [row[0] for row in raw[kind] if row[0]]
        else:
            fetched = await fetch_lookup(kind, dependencies)
            names[kind] = [name for name in (_as_name(item) for item in fetched) if name]

    institution_ids: Dict[str, str] = {}
    for institution in institutions:
        name = institution.name.strip()
        if name and name not in institution_ids:
            institution_ids[name] = institution.id.strip()

    return LookupData(
        institutions=institution_ids,
        programs=_program_dicts(programs),
        funding_agencies=names[LookupKind.FUNDING_AGENCIES],
        file_types=names[LookupKind.FILE_TYPES],
        cancer_types=names[LookupKind.CANCER_TYPES],
        species=names[LookupKind.SPECIES],
    )
