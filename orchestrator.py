"""Workbook orchestrator: questionnaire data to xlsx and back"""

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Dict, List, Optional, Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from config import settings
from core.enums import SectionStatus
from core.exceptions import SectionError, WorkbookLoadError
from core.interfaces import LookupData, MiddlewareDependencies
from core.models import QuestionnaireData, SectionState
from sections import DATA_SECTIONS, ORDER, Section, SectionContext, parse_metadata
from sections.extraction import extract_column_values
from sections.lookups import LookupRegistry, load_lookup_data
from ui.progress import ProgressTracker
from utils.merge import deep_merge

logger = logging.getLogger(__name__)


@dataclass
class ExportContext:
    """State owned by one in-flight export"""
    workbook: Workbook
    data: QuestionnaireData
    lookups: LookupRegistry
    exported_at: str
    sheets: List[str] = field(default_factory=list)


@dataclass
class ParseContext:
    """State owned by one in-flight parse"""
    workbook: Workbook
    lookups: LookupData
    accumulator: Dict[str, Any]
    statuses: Dict[str, SectionStatus] = field(default_factory=dict)
    metadata_found: bool = False


def is_started(value: Any) -> bool:
    """
    Whether a parsed fragment carries any user input

    Non-empty strings and positive numbers count. Booleans never do,
    since every Yes/No column parses to a definite value.
    """
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, dict):
        return any(is_started(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return any(is_started(item) for item in value)
    return False


def set_section_status(data: QuestionnaireData, name: str, status: SectionStatus) -> None:
    """Record a section status, replacing an earlier entry with the same name"""
    data.sections = [state for state in data.sections if state.name != name]
    data.sections.append(SectionState(name=name, status=status))


class Orchestrator:
    """Export and parse coordinator"""

    def __init__(
        self,
        dependencies: Optional[MiddlewareDependencies] = None,
        progress: Optional[ProgressTracker] = None,
    ):
        self.dependencies = dependencies or MiddlewareDependencies()
        self.progress = progress

    # ─────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────

    async def export(
        self, data: Union[QuestionnaireData, Dict[str, Any], None] = None
    ) -> bytes:
        """Render questionnaire data into an xlsx buffer"""
        workbook = Workbook()
        workbook.remove(workbook.active)
        self._set_properties(workbook)

        ctx = ExportContext(
            workbook=workbook,
            data=self._snapshot(data),
            lookups=LookupRegistry(workbook, self.dependencies),
            exported_at=datetime.now(timezone.utc).isoformat(),
        )

        await self._notify("start", "Export", len(ORDER))
        # Sections run one at a time; later ones reuse lookup sheets created earlier
        for index, spec in enumerate(ORDER):
            section = Section(spec)
            await self._notify("start_section", index, spec.sheet_name)
            try:
                await section.serialize(SectionContext(
                    workbook=workbook,
                    data=ctx.data,
                    lookups=ctx.lookups,
                    dependencies=self.dependencies,
                    exported_at=ctx.exported_at,
                ))
            except SectionError as e:
                await self._notify("fail", index, str(e))
                raise
            ctx.sheets.append(spec.sheet_name)
            await self._notify("complete_section", index)

        workbook.active = self._first_visible(workbook)

        buffer = BytesIO()
        workbook.save(buffer)
        await self._notify("complete")
        logger.info("Exported %d sections", len(ctx.sheets))
        return buffer.getvalue()

    def _snapshot(self, data: Union[QuestionnaireData, Dict[str, Any], None]) -> QuestionnaireData:
        """Deep copy of the caller's data, so later mutation cannot leak into the export"""
        if data is None:
            return QuestionnaireData()
        if isinstance(data, QuestionnaireData):
            return data.model_copy(deep=True)
        return QuestionnaireData.model_validate(copy.deepcopy(data))

    def _set_properties(self, workbook: Workbook) -> None:
        now = datetime.now()
        properties = workbook.properties
        properties.creator = settings.WORKBOOK_CREATOR
        properties.lastModifiedBy = settings.WORKBOOK_CREATOR
        properties.title = settings.WORKBOOK_TITLE
        properties.subject = settings.WORKBOOK_SUBJECT
        properties.category = settings.WORKBOOK_COMPANY
        properties.created = now
        properties.modified = now

    def _first_visible(self, workbook: Workbook) -> int:
        for index, sheet in enumerate(workbook.worksheets):
            if sheet.sheet_state == "visible":
                return index
        return 0

    # ─────────────────────────────────────────────────────────
    # Parse
    # ─────────────────────────────────────────────────────────

    async def parse(self, buffer: bytes) -> QuestionnaireData:
        """
        Rebuild questionnaire data from an xlsx buffer

        Only an unreadable buffer raises; missing sheets and bad values are
        logged and skipped.

        Raises:
            WorkbookLoadError: If the buffer is not a valid xlsx workbook
        """
        try:
            workbook = load_workbook(BytesIO(buffer))
        except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError, TypeError) as e:
            raise WorkbookLoadError(f"Unable to read workbook: {e}", source=type(e).__name__) from e

        ctx = ParseContext(
            workbook=workbook,
            lookups=await load_lookup_data(workbook, self.dependencies),
            accumulator=QuestionnaireData().model_dump(by_alias=True),
        )
        ctx.metadata_found = parse_metadata(workbook, self.dependencies)

        await self._notify("start", "Import", len(DATA_SECTIONS))
        for index, spec in enumerate(DATA_SECTIONS):
            await self._notify("start_section", index, spec.sheet_name)
            if spec.sheet_name not in workbook.sheetnames:
                logger.info("No sheet found for section %s, skipping.", spec.id.value)
                await self._notify("complete_section", index)
                continue

            try:
                values = extract_column_values(workbook[spec.sheet_name], spec.columns)
                partial = spec.map_values(values, ctx.lookups)
                merged = deep_merge(copy.deepcopy(ctx.accumulator), partial)
                QuestionnaireData.model_validate(merged)
            except Exception as e:
                logger.warning("Unable to parse section %s, skipping: %s", spec.id.value, e)
                await self._notify("fail", index, str(e))
                continue

            ctx.accumulator = merged
            started = is_started(partial)
            ctx.statuses[spec.id.value] = (
                SectionStatus.IN_PROGRESS if started else SectionStatus.NOT_STARTED
            )
            await self._notify("complete_section", index)

        result = QuestionnaireData.model_validate(ctx.accumulator)
        for name, status in ctx.statuses.items():
            set_section_status(result, name, status)

        await self._notify("complete")
        logger.info("Parsed %d of %d sections", len(ctx.statuses), len(DATA_SECTIONS))
        return result

    async def _notify(self, method: str, *args) -> None:
        if self.progress is None:
            return
        result = getattr(self.progress, method)(*args)
        # Handle both sync and async progress trackers
        if hasattr(result, '__await__'):
            await result
