"""Data Types section"""

import logging
from typing import Any, Dict, List, Set

from openpyxl.worksheet.worksheet import Worksheet

from core.enums import LookupKind, SectionId, ValidationKind
from core.error_catalog import ErrorCatalog
from core.interfaces import ColumnValues, LookupData
from core.models import ValidationRule
from utils.formulas import DATE_NOT_BEFORE_TODAY
from utils.values import first, from_yes_no, to_date_cell, to_positive_int, to_yes_no
from ..engine import START_ROW, SectionContext, SectionSpec
from ..mapping import records, scalar
from ..options import CLINICAL_DATA_TYPES, DATA_TYPES, YES_NO_LIST
from .columns import (
    CHARACTER_LIMITS, COLUMNS, DATE_KEYS, FILE_COUNT_MAX, FILE_COUNT_MIN, FILE_FIELDS, SHEET_NAME,
)

logger = logging.getLogger(__name__)

_DATA_TYPE_KEYS = {name: f"dataTypes.{name}" for name in DATA_TYPES}
_CLINICAL_KEYS = {name: f"clinicalData.dataTypes.{name}" for name in CLINICAL_DATA_TYPES}

_YES_NO_KEYS = (
    *_DATA_TYPE_KEYS.values(),
    "imagingDataDeIdentified",
    *_CLINICAL_KEYS.values(),
    "clinicalData.futureDataTypes",
    "dataDeIdentified",
    "cellLines",
    "modelSystems",
)


def write(ctx: SectionContext, ws: Worksheet) -> Set[int]:
    section = ctx.section
    data = ctx.data

    values: Dict[str, Any] = {
        "targetedSubmissionDate": to_date_cell(data.targeted_submission_date) or "",
        "targetedReleaseDate": to_date_cell(data.targeted_release_date) or "",
        "imagingDataDeIdentified": to_yes_no(data.imaging_data_de_identified),
        "otherDataTypes": data.other_data_types,
        "clinicalData.otherDataTypes": data.clinical_data.other_data_types,
        "clinicalData.futureDataTypes": to_yes_no(data.clinical_data.future_data_types),
        "dataDeIdentified": to_yes_no(data.data_de_identified),
        "cellLines": to_yes_no(data.cell_lines),
        "modelSystems": to_yes_no(data.model_systems),
        "submitterComment": data.submitter_comment,
    }
    for name, key in _DATA_TYPE_KEYS.items():
        values[key] = to_yes_no(name in data.data_types)
    for name, key in _CLINICAL_KEYS.items():
        values[key] = to_yes_no(name in data.clinical_data.data_types)
    rows = {section.set_row_values(ws, START_ROW, values)}

    rows |= section.write_records(ws, data.files, lambda f: {
        "files.type": f.type,
        "files.extension": f.extension,
        "files.count": f.count if f.count is not None else "",
        "files.amount": f.amount,
    })
    return rows


def validate(ctx: SectionContext, ws: Worksheet) -> None:
    section = ctx.section

    for key in DATE_KEYS:
        section.add_cell_rules(ws, key, [START_ROW], lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=DATE_NOT_BEFORE_TODAY(address),
            error=ErrorCatalog.get("dateMMDDYYYY"),
        ))

    yes_no = ValidationRule(
        kind=ValidationKind.LIST, formula1=YES_NO_LIST, error=ErrorCatalog.get("yesNo")
    )
    for key in _YES_NO_KEYS:
        section.add_rule(ws, section.column_range(key), yes_no)

    for key in ("otherDataTypes", "clinicalData.otherDataTypes", "submitterComment"):
        section.add_rule(ws, section.column_range(key), section.text_limit_rule(key))

    rows = section.validation_rows()
    section.add_rule(ws, section.column_range("files.type", rows), ValidationRule(
        kind=ValidationKind.LIST,
        formula1=ctx.lookups.list_formula(LookupKind.FILE_TYPES),
        error=ErrorCatalog.get("fromDropdown", label="a file type"),
        allow_blank=True,
        strict=False,
    ))
    for key in ("files.extension", "files.amount"):
        section.add_rule(ws, section.column_range(key, rows), section.text_limit_rule(key))
    section.add_rule(ws, section.column_range("files.count", rows), ValidationRule(
        kind=ValidationKind.WHOLE,
        operator="between",
        formula1=str(FILE_COUNT_MIN),
        formula2=str(FILE_COUNT_MAX),
        error=ErrorCatalog.get("between", min=FILE_COUNT_MIN, max=FILE_COUNT_MAX),
        allow_blank=True,
    ))


def _flagged(values: ColumnValues, keys: Dict[str, str]) -> List[str]:
    """Names whose Yes/No column reads Yes, in column order"""
    return [name for name, key in keys.items() if from_yes_no(first(values.get(key))) is True]


def map_values(values: ColumnValues, lookups: LookupData) -> Dict[str, Any]:
    files = records(
        values,
        FILE_FIELDS,
        CHARACTER_LIMITS,
        converters={"files.count": to_positive_int},
    )
    for entry in files:
        if lookups.file_types and entry["type"] and entry["type"] not in lookups.file_types:
            logger.info(
                "File type '%s' is not in the file type list, keeping it as entered.", entry["type"]
            )

    return {
        "targetedSubmissionDate": scalar(values, "targetedSubmissionDate"),
        "targetedReleaseDate": scalar(values, "targetedReleaseDate"),
        "dataTypes": _flagged(values, _DATA_TYPE_KEYS),
        "imagingDataDeIdentified": from_yes_no(first(values.get("imagingDataDeIdentified"))),
        "otherDataTypes": scalar(values, "otherDataTypes", CHARACTER_LIMITS["otherDataTypes"]),
        "clinicalData": {
            "dataTypes": _flagged(values, _CLINICAL_KEYS),
            "otherDataTypes": scalar(
                values, "clinicalData.otherDataTypes", CHARACTER_LIMITS["clinicalData.otherDataTypes"]
            ),
            "futureDataTypes": from_yes_no(first(values.get("clinicalData.futureDataTypes"))) is True,
        },
        "files": files,
        "dataDeIdentified": from_yes_no(first(values.get("dataDeIdentified"))),
        "cellLines": from_yes_no(first(values.get("cellLines"))) is True,
        "modelSystems": from_yes_no(first(values.get("modelSystems"))) is True,
        "submitterComment": scalar(values, "submitterComment", CHARACTER_LIMITS["submitterComment"]),
    }


SECTION_D = SectionSpec(
    id=SectionId.D,
    sheet_name=SHEET_NAME,
    columns=COLUMNS,
    character_limits=CHARACTER_LIMITS,
    lookups=(LookupKind.FILE_TYPES,),
    write=write,
    validate=validate,
    map_values=map_values,
)
