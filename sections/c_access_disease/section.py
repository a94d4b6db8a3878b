"""Data Access and Disease section"""

import logging
from typing import Any, Dict, List, Set

from openpyxl.worksheet.worksheet import Worksheet

from core.enums import LookupKind, SectionId, ValidationKind
from core.error_catalog import ErrorCatalog
from core.interfaces import ColumnValues, LookupData
from core.models import ValidationRule
from utils.formulas import AND, LEN, OR, PHS, REQUIRED, STR_EQ, TEXT_MAX, TRIM, CELL, EQ
from utils.values import first, from_yes_no, to_positive_int, to_yes_no
from ..engine import START_ROW, SectionContext, SectionSpec
from ..mapping import column_entries, scalar
from ..options import ACCESS_TYPES, NOT_APPLICABLE, YES_NO_LIST
from .columns import CHARACTER_LIMITS, COLUMNS, PARTICIPANTS_MAX, PARTICIPANTS_MIN, SHEET_NAME

logger = logging.getLogger(__name__)

_ACCESS_COLUMNS = {
    "Open Access": "accessTypes.openAccess",
    "Controlled Access": "accessTypes.controlledAccess",
}


def write(ctx: SectionContext, ws: Worksheet) -> Set[int]:
    section = ctx.section
    data = ctx.data

    values = {
        key: to_yes_no(access in data.access_types) for access, key in _ACCESS_COLUMNS.items()
    }
    values.update({
        "study.isDbGapRegistered": to_yes_no(data.study.is_db_gap_registered),
        "study.dbGaPPPHSNumber": data.study.db_gap_phs_number,
        "study.GPAName": data.study.gpa_name,
        "otherCancerTypes": data.other_cancer_types,
        "preCancerTypes": data.pre_cancer_types,
        "otherSpeciesOfSubjects": data.other_species_of_subjects,
        "numberOfParticipants": data.number_of_participants or "",
    })
    rows = {section.set_row_values(ws, START_ROW, values)}

    cancer_types = [value for value in data.cancer_types if value]
    rows |= section.write_records(ws, cancer_types, lambda c: {"cancerTypes": c})
    species = [value for value in data.species if value]
    rows |= section.write_records(ws, species, lambda s: {"species": s})
    return rows


def validate(ctx: SectionContext, ws: Worksheet) -> None:
    section = ctx.section
    registered = section.cell(ws, "study.isDbGapRegistered")
    phs = section.cell(ws, "study.dbGaPPPHSNumber")

    yes_no = ValidationRule(
        kind=ValidationKind.LIST, formula1=YES_NO_LIST, error=ErrorCatalog.get("yesNo")
    )
    for key in ("accessTypes.openAccess", "accessTypes.controlledAccess", "study.isDbGapRegistered"):
        section.add_rule(ws, section.column_range(key), yes_no)

    # PHS number only applies to registered studies
    section.black_out(
        ws, phs.coordinate, OR(STR_EQ(registered, "No"), EQ(LEN(TRIM(CELL(registered))), "0"))
    )
    phs_limit = section.limit("study.dbGaPPPHSNumber")
    section.add_cell_rules(ws, "study.dbGaPPPHSNumber", [START_ROW], lambda address: ValidationRule(
        kind=ValidationKind.CUSTOM,
        formula1=OR(
            STR_EQ(registered, "No"),
            AND(REQUIRED(address), TEXT_MAX(address, phs_limit), PHS(address)),
        ),
        error=ErrorCatalog.get("dbGaPPHSNumber"),
    ))

    rows = section.validation_rows()
    for key, kind in (("cancerTypes", LookupKind.CANCER_TYPES), ("species", LookupKind.SPECIES)):
        section.add_rule(ws, section.column_range(key, rows), ValidationRule(
            kind=ValidationKind.LIST,
            formula1=ctx.lookups.list_formula(kind),
            error=ErrorCatalog.get("fromDropdown"),
            allow_blank=True,
        ))

    for key in ("otherCancerTypes", "preCancerTypes", "otherSpeciesOfSubjects"):
        section.add_rule(ws, section.column_range(key), section.text_limit_rule(key))

    section.add_rule(ws, section.column_range("numberOfParticipants"), ValidationRule(
        kind=ValidationKind.WHOLE,
        operator="between",
        formula1=str(PARTICIPANTS_MIN),
        formula2=str(PARTICIPANTS_MAX),
        error=ErrorCatalog.get("between", min=PARTICIPANTS_MIN, max=PARTICIPANTS_MAX),
        allow_blank=True,
    ))


def _allowed(entries: List[str], allowed: List[str], label: str) -> List[str]:
    if not entries:
        return []
    if not allowed:
        logger.error("The %s list is empty, no %s can be imported.", label, label)
        return []
    valid = set(allowed)
    kept = [entry for entry in entries if entry in valid]
    for entry in entries:
        if entry not in valid:
            logger.info("Dropping unknown %s '%s'.", label, entry)
    return kept


def map_values(values: ColumnValues, lookups: LookupData) -> Dict[str, Any]:
    access_types = [
        access for access in ACCESS_TYPES
        if from_yes_no(first(values.get(_ACCESS_COLUMNS[access]))) is True
    ]

    registered = from_yes_no(first(values.get("study.isDbGapRegistered"))) is True
    phs_number = ""
    if registered:
        phs_number = scalar(values, "study.dbGaPPPHSNumber", CHARACTER_LIMITS["study.dbGaPPPHSNumber"])

    cancer_types = _allowed(column_entries(values, "cancerTypes"), lookups.cancer_types, "cancer type")
    if NOT_APPLICABLE in cancer_types:
        cancer_types = [NOT_APPLICABLE]
    species = _allowed(column_entries(values, "species"), lookups.species, "species")

    other_cancer_types = scalar(values, "otherCancerTypes", CHARACTER_LIMITS["otherCancerTypes"])
    other_species = scalar(values, "otherSpeciesOfSubjects", CHARACTER_LIMITS["otherSpeciesOfSubjects"])

    return {
        "accessTypes": access_types,
        "study": {
            "isDbGapRegistered": registered,
            "dbGaPPPHSNumber": phs_number,
            "GPAName": scalar(values, "study.GPAName"),
        },
        "cancerTypes": cancer_types,
        "otherCancerTypesEnabled": bool(other_cancer_types),
        "otherCancerTypes": other_cancer_types,
        "preCancerTypes": scalar(values, "preCancerTypes", CHARACTER_LIMITS["preCancerTypes"]),
        "species": species,
        "otherSpeciesEnabled": bool(other_species),
        "otherSpeciesOfSubjects": other_species,
        "numberOfParticipants": to_positive_int(first(values.get("numberOfParticipants"))),
    }


SECTION_C = SectionSpec(
    id=SectionId.C,
    sheet_name=SHEET_NAME,
    columns=COLUMNS,
    character_limits=CHARACTER_LIMITS,
    lookups=(LookupKind.CANCER_TYPES, LookupKind.SPECIES),
    write=write,
    validate=validate,
    map_values=map_values,
)
