"""Program and Study section"""

import logging
from typing import Any, Dict, Optional, Set, Tuple

from openpyxl.worksheet.worksheet import Worksheet

from core.enums import LookupKind, SectionId, ValidationKind
from core.error_catalog import ErrorCatalog
from core.interfaces import ColumnValues, LookupData
from core.models import Program, ValidationRule
from utils.formulas import (
    AND, COLUMN_RANGE, DATE_NOT_BEFORE_TODAY, IF, IFERROR, INDEX, MATCH, REQUIRED, STR_EQ,
    TEXT_MAX, CELL, q,
)
from utils.values import join_multi, split_multi, to_date_cell
from ..engine import START_ROW, SectionContext, SectionSpec
from ..lookups import DROPDOWN_COLUMNS, program_display
from ..mapping import records, scalar
from ..options import FIXED_PROGRAMS, NOT_APPLICABLE, OTHER
from .columns import (
    CHARACTER_LIMITS, COLUMNS, FUNDING_FIELDS, PLANNED_PUBLICATION_FIELDS, PUBLICATION_FIELDS,
    REPOSITORY_FIELDS, SHEET_NAME,
)

logger = logging.getLogger(__name__)

FIXED_PROGRAM_IDS = {option["_id"] for option in FIXED_PROGRAMS}

# Lookup column feeding each autofilled program cell
_AUTOFILL = {
    "program.name": "B",
    "program.abbreviation": "C",
    "program.description": "D",
}


def _autofill(sheet_name: str, selection: str, column: str) -> str:
    display = COLUMN_RANGE(sheet_name, DROPDOWN_COLUMNS[LookupKind.PROGRAMS])
    source = COLUMN_RANGE(sheet_name, column)
    return IFERROR(INDEX(source, MATCH(selection, display)), q(""))


def _program_values(
    ctx: SectionContext, program: Program
) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Literal values and autofill formulas for cells A2:D2"""
    literal = {
        "program.name": program.name,
        "program.abbreviation": program.abbreviation,
        "program.description": program.description,
    }
    if not program.id and not program.name:
        return {"program._id": "", **literal}, {}
    if program.id in FIXED_PROGRAM_IDS:
        return {"program._id": program.id, **literal}, {}

    known = {option.id: option for option in ctx.lookups.programs()}
    match = known.get(program.id)
    if match is None:
        logger.info(
            "Program '%s' is not in the program list, exporting it as '%s'.", program.id, OTHER
        )
        return {"program._id": OTHER, **literal}, {}

    sheet_name = ctx.lookups.sheet_name(LookupKind.PROGRAMS)
    selection = CELL(f"{ctx.section.letter('program._id')}{START_ROW}")
    formulas = {
        key: _autofill(sheet_name, selection, column) for key, column in _AUTOFILL.items()
    }
    return {"program._id": program_display(match.id, match.name)}, formulas


def write(ctx: SectionContext, ws: Worksheet) -> Set[int]:
    section = ctx.section
    study = ctx.data.study

    values, formulas = _program_values(ctx, ctx.data.program)
    values.update({
        "study.name": study.name,
        "study.abbreviation": study.abbreviation,
        "study.description": study.description,
    })
    rows = {section.set_row_values(ws, START_ROW, values, formulas)}

    rows |= section.write_records(ws, study.funding, lambda f: {
        "study.funding.agency": f.agency,
        "study.funding.grantNumbers": f.grant_numbers,
        "study.funding.nciProgramOfficer": f.nci_program_officer,
    })
    rows |= section.write_records(ws, study.publications, lambda p: {
        "study.publications.title": p.title,
        "study.publications.pubmedID": p.pubmed_id,
        "study.publications.DOI": p.doi,
    })
    rows |= section.write_records(ws, study.planned_publications, lambda p: {
        "study.plannedPublications.title": p.title,
        "study.plannedPublications.expectedDate": to_date_cell(p.expected_date) or "",
    })
    rows |= section.write_records(ws, study.repositories, lambda r: {
        "study.repositories.name": r.name,
        "study.repositories.studyID": r.study_id,
        "study.repositories.dataTypesSubmitted": join_multi(r.data_types_submitted),
        "study.repositories.otherDataTypesSubmitted": r.other_data_types_submitted,
    })
    return rows


def validate(ctx: SectionContext, ws: Worksheet) -> None:
    section = ctx.section
    program = section.cell(ws, "program._id")

    section.add_rule(ws, program.coordinate, ValidationRule(
        kind=ValidationKind.LIST,
        formula1=ctx.lookups.list_formula(LookupKind.PROGRAMS),
        error=ErrorCatalog.get("fromDropdown", label="a program"),
        allow_blank=True,
    ))

    # Program details are not needed when no program applies
    for key in _AUTOFILL:
        limit = section.limit(key)
        section.add_cell_rules(ws, key, [START_ROW], lambda address, limit=limit: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=IF(
                STR_EQ(program, NOT_APPLICABLE),
                "TRUE",
                AND(REQUIRED(address), TEXT_MAX(address, limit)),
            ),
            error=ErrorCatalog.get("requiredMax", max=limit),
        ))

    for key in ("study.name", "study.description"):
        limit = section.limit(key)
        section.add_cell_rules(ws, key, [START_ROW], lambda address, limit=limit: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=AND(REQUIRED(address), TEXT_MAX(address, limit)),
            error=ErrorCatalog.get("requiredMax", max=limit),
        ))
    abbreviation = "study.abbreviation"
    section.add_rule(ws, section.column_range(abbreviation), section.text_limit_rule(abbreviation))

    rows = section.validation_rows()
    section.add_rule(ws, section.column_range("study.funding.agency", rows), ValidationRule(
        kind=ValidationKind.LIST,
        formula1=ctx.lookups.list_formula(LookupKind.FUNDING_AGENCIES),
        error=ErrorCatalog.get("fromDropdown", label="a funding agency"),
        allow_blank=True,
        strict=False,
    ))
    for key in (
        "study.funding.grantNumbers",
        "study.funding.nciProgramOfficer",
        "study.publications.title",
        "study.publications.pubmedID",
        "study.publications.DOI",
        "study.plannedPublications.title",
        "study.repositories.name",
        "study.repositories.studyID",
        "study.repositories.otherDataTypesSubmitted",
    ):
        section.add_rule(ws, section.column_range(key, rows), section.text_limit_rule(key))

    section.add_cell_rules(
        ws,
        "study.plannedPublications.expectedDate",
        rows,
        lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=DATE_NOT_BEFORE_TODAY(address, allow_blank=True),
            error=ErrorCatalog.get("dateMMDDYYYY"),
            allow_blank=True,
        ),
    )


def _find_program(selection: str, lookups: LookupData) -> Optional[Dict[str, str]]:
    for option in lookups.programs:
        if selection in (option["display"], option["_id"]):
            return option
    return None


def _map_program(values: ColumnValues, lookups: LookupData) -> Dict[str, str]:
    selection = scalar(values, "program._id")
    literal = {
        field: scalar(values, f"program.{field}", CHARACTER_LIMITS[f"program.{field}"])
        for field in ("name", "abbreviation", "description")
    }
    if not selection:
        return {"_id": "", **literal}

    option = _find_program(selection, lookups)
    if option is None:
        logger.info("Program '%s' was not found in the program list.", selection)
        return {"_id": "", **literal}
    if option["_id"] in FIXED_PROGRAM_IDS:
        return {"_id": option["_id"], **literal}

    # Autofilled cells hold formulas, so listed programs take the lookup values
    return {
        "_id": option["_id"],
        "name": literal["name"] or option["name"],
        "abbreviation": literal["abbreviation"] or option["abbreviation"],
        "description": literal["description"] or option["description"],
    }


def map_values(values: ColumnValues, lookups: LookupData) -> Dict[str, Any]:
    study = {
        field: scalar(values, f"study.{field}", CHARACTER_LIMITS[f"study.{field}"])
        for field in ("name", "abbreviation", "description")
    }
    study.update({
        "funding": records(values, FUNDING_FIELDS, CHARACTER_LIMITS),
        "publications": records(values, PUBLICATION_FIELDS, CHARACTER_LIMITS),
        "plannedPublications": records(values, PLANNED_PUBLICATION_FIELDS, CHARACTER_LIMITS),
        "repositories": records(
            values,
            REPOSITORY_FIELDS,
            CHARACTER_LIMITS,
            converters={"study.repositories.dataTypesSubmitted": split_multi},
        ),
    })
    return {"program": _map_program(values, lookups), "study": study}


SECTION_B = SectionSpec(
    id=SectionId.B,
    sheet_name=SHEET_NAME,
    columns=COLUMNS,
    character_limits=CHARACTER_LIMITS,
    lookups=(LookupKind.PROGRAMS, LookupKind.FUNDING_AGENCIES),
    write=write,
    validate=validate,
    map_values=map_values,
)
