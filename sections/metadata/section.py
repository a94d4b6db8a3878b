"""Metadata section: who exported the workbook, from which record and tier"""

import logging
from typing import Any, Dict, Set

from openpyxl import Workbook
from openpyxl.styles import Alignment
from openpyxl.worksheet.worksheet import Worksheet

from config import settings
from core.enums import SectionId
from core.interfaces import MiddlewareDependencies
from core.models import ApplicationInfo
from utils.values import first, to_text
from ..engine import START_ROW, SectionContext, SectionSpec
from ..extraction import extract_column_values
from .columns import COLUMNS, COMPARED_KEYS, SHEET_NAME, TEMPLATE_VERSION

logger = logging.getLogger(__name__)


def expected_metadata(dependencies: MiddlewareDependencies) -> Dict[str, Any]:
    """Row 2 values derived from the caller's application record"""
    application = dependencies.application or ApplicationInfo()
    return {
        "submissionId": application.id,
        "applicantName": application.applicant.applicant_name,
        "applicantId": application.applicant.applicant_id,
        "lastStatus": application.status,
        "formVersion": application.version,
        "createdAt": application.created_at,
        "updatedAt": application.updated_at,
        "devTier": dependencies.dev_tier or settings.DEV_TIER,
        "templateVersion": TEMPLATE_VERSION,
    }


def write(ctx: SectionContext, ws: Worksheet) -> Set[int]:
    values = expected_metadata(ctx.dependencies)
    values["exportedAt"] = ctx.exported_at
    row = ctx.section.set_row_values(ws, START_ROW, values)
    ctx.section.cell(ws, "lastStatus").alignment = Alignment(horizontal="center")
    return {row}


def parse_metadata(workbook: Workbook, dependencies: MiddlewareDependencies) -> bool:
    """
    Compare the Metadata sheet with the caller's record

    Mismatches are informational only and never block an import.

    Returns:
        True if the sheet was present
    """
    if SHEET_NAME not in workbook.sheetnames:
        logger.info("No %s sheet found, skipping metadata checks.", SHEET_NAME)
        return False

    values = extract_column_values(workbook[SHEET_NAME], COLUMNS)
    expected = expected_metadata(dependencies)
    for key in COMPARED_KEYS:
        found = to_text(first(values.get(key)))
        if found != to_text(expected[key]):
            logger.info("Received mismatched %s.", key)
    return True


SECTION_METADATA = SectionSpec(
    id=SectionId.METADATA,
    sheet_name=SHEET_NAME,
    columns=COLUMNS,
    header_color="FFFFFF",
    hidden=True,
    write=write,
)
