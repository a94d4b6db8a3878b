import logging
from dataclasses import replace
from io import BytesIO

import pytest
from openpyxl import load_workbook

from core.enums import SectionStatus
from core.exceptions import SectionError, WorkbookLoadError
from core.interfaces import MiddlewareDependencies
from core.models import ApplicationInfo, QuestionnaireData
import orchestrator
from orchestrator import Orchestrator, is_started, set_section_status
from sections import SECTION_A, SECTION_B, SECTION_C, SECTION_D, Section
from ui.progress import ProgressTracker

INSTITUTIONS = [{"_id": "inst-1", "name": "Foo University"}]
PROGRAMS = [{"_id": "p1", "name": "Program One", "abbreviation": "P1", "description": "Desc"}]


def _deps(**overrides) -> MiddlewareDependencies:
    values = {
        "get_institutions": lambda: INSTITUTIONS,
        "get_programs": lambda: PROGRAMS,
    }
    values.update(overrides)
    return MiddlewareDependencies(**values)


def _questionnaire() -> QuestionnaireData:
    return QuestionnaireData.model_validate({
        "pi": {
            "firstName": "Jane",
            "lastName": "Doe",
            "position": "Professor",
            "email": "jane@example.org",
            "ORCID": "0000-0002-1825-0097",
            "institution": "Foo University",
            "institutionID": "inst-1",
            "address": "1 Main St",
        },
        "piAsPrimaryContact": False,
        "primaryContact": {
            "firstName": "Sam",
            "lastName": "Roe",
            "position": "Coordinator",
            "email": "sam@example.org",
            "institution": "Foo University",
            "institutionID": "inst-1",
            "phone": "555-0100",
        },
        "additionalContacts": [
            {"firstName": "Ann", "lastName": "Lee", "email": "ann@example.org",
             "institution": "Elsewhere", "institutionID": ""},
        ],
        "program": PROGRAMS[0],
        "study": {
            "name": "Study One",
            "abbreviation": "S1",
            "description": "A study",
            "publications": [{"title": "Paper", "pubmedID": "123", "DOI": "10.1/x"}],
            "plannedPublications": [{"title": "Next paper", "expectedDate": "12/31/2030"}],
            "repositories": [{
                "name": "dbGaP",
                "studyID": "phs000001",
                "dataTypesSubmitted": ["genomics", "imaging"],
                "otherDataTypesSubmitted": "",
            }],
            "funding": [{"agency": "NCI", "grantNumbers": "R01", "nciProgramOfficer": "Pat"}],
            "isDbGapRegistered": True,
            "dbGaPPPHSNumber": "phs000001",
            "GPAName": "Gee",
        },
        "accessTypes": ["Open Access", "Controlled Access"],
        "targetedSubmissionDate": "01/15/2031",
        "targetedReleaseDate": "06/30/2031",
        "cancerTypes": ["Breast", "Lung"],
        "otherCancerTypes": "Rare sarcoma",
        "otherCancerTypesEnabled": True,
        "preCancerTypes": "Polyps",
        "numberOfParticipants": 250,
        "species": ["Homo sapiens"],
        "cellLines": True,
        "modelSystems": False,
        "imagingDataDeIdentified": True,
        "dataDeIdentified": False,
        "dataTypes": ["genomics", "imaging"],
        "otherDataTypes": "Spatial",
        "clinicalData": {
            "dataTypes": ["demographicData", "diagnosisData"],
            "otherDataTypes": "",
            "futureDataTypes": True,
        },
        "files": [
            {"type": "BAM", "extension": ".bam", "count": 12, "amount": "2 TB"},
            {"type": "VCF", "extension": ".vcf", "count": 3, "amount": "10 GB"},
        ],
        "submitterComment": "Thanks",
    })


class RecordingProgress(ProgressTracker):
    def __init__(self):
        self.events = []

    def start(self, operation, total):
        self.events.append(("begin", operation, total))

    def start_section(self, index, name):
        self.events.append(("start", index, name))

    def complete_section(self, index):
        self.events.append(("done", index))

    def fail(self, index, message):
        self.events.append(("fail", index))

    def complete(self):
        self.events.append(("complete",))


# ─────────────────────────────────────────────────────────────
# Export
# ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_export_sheet_layout():
    buffer = await Orchestrator(_deps()).export(_questionnaire())
    workbook = load_workbook(BytesIO(buffer))

    visible = [ws.title for ws in workbook.worksheets if ws.sheet_state == "visible"]
    assert visible == [
        "Instructions", "PI and Contact", "Program and Study", "Data Access and Disease", "Data Types",
    ]
    assert workbook.sheetnames[0] == "Metadata"
    assert workbook["Metadata"].sheet_state == "hidden"
    assert workbook["InstitutionList"].sheet_state == "hidden"
    assert workbook.sheetnames.count("InstitutionList") == 1
    assert workbook.active.title == "Instructions"


@pytest.mark.asyncio
async def test_export_does_not_mutate_its_input():
    data = _questionnaire()
    before = data.model_dump()

    await Orchestrator(_deps()).export(data)

    assert data.model_dump() == before


@pytest.mark.asyncio
async def test_export_accepts_plain_dicts():
    buffer = await Orchestrator().export({"pi": {"firstName": "Jane"}})
    workbook = load_workbook(BytesIO(buffer))
    assert workbook["PI and Contact"]["A2"].value == "Jane"


@pytest.mark.asyncio
async def test_export_reports_progress_per_section():
    progress = RecordingProgress()
    await Orchestrator(progress=progress).export()

    assert progress.events[0] == ("begin", "Export", 6)
    starts = [event for event in progress.events if event[0] == "start"]
    assert [event[2] for event in starts][:2] == ["Metadata", "Instructions"]
    assert len(starts) == 6
    assert progress.events[-1] == ("complete",)


@pytest.mark.asyncio
async def test_export_failure_marks_section_failed(monkeypatch):
    def broken(ctx, ws):
        raise RuntimeError("boom")

    order = tuple(
        replace(spec, write=broken) if spec is SECTION_A else spec for spec in orchestrator.ORDER
    )
    monkeypatch.setattr(orchestrator, "ORDER", order)

    progress = RecordingProgress()
    with pytest.raises(SectionError):
        await Orchestrator(progress=progress).export()
    assert progress.events[-1] == ("fail", 2)


# ─────────────────────────────────────────────────────────────
# Parse
# ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_round_trip_preserves_questionnaire():
    original = _questionnaire()
    codec = Orchestrator(_deps())

    parsed = await codec.parse(await codec.export(original))

    assert parsed.model_dump(exclude={"sections"}) == original.model_dump(exclude={"sections"})
    for name in ("A", "B", "C", "D"):
        assert parsed.section_status(name) == SectionStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_blank_export_parses_as_not_started():
    codec = Orchestrator()
    parsed = await codec.parse(await codec.export())

    for name in ("A", "B", "C", "D"):
        assert parsed.section_status(name) == SectionStatus.NOT_STARTED
    assert parsed.primary_contact is None


@pytest.mark.asyncio
async def test_missing_sheet_keeps_defaults_and_status_unset():
    codec = Orchestrator(_deps())
    buffer = await codec.export(_questionnaire())

    workbook = load_workbook(BytesIO(buffer))
    workbook.remove(workbook["Data Types"])
    stripped = BytesIO()
    workbook.save(stripped)

    parsed = await codec.parse(stripped.getvalue())

    assert parsed.files == []
    assert parsed.submitter_comment == ""
    assert parsed.section_status("D") is None
    assert parsed.section_status("C") == SectionStatus.IN_PROGRESS
    assert parsed.pi.first_name == "Jane"


@pytest.mark.asyncio
async def test_metadata_mismatch_is_logged_not_raised(caplog):
    exported = Orchestrator(_deps(application=ApplicationInfo(id="app-1")))
    buffer = await exported.export(_questionnaire())

    parsing = Orchestrator(_deps(application=ApplicationInfo(id="app-2")))
    with caplog.at_level(logging.INFO, logger="sections.metadata.section"):
        parsed = await parsing.parse(buffer)

    assert "Received mismatched submissionId." in caplog.messages
    assert parsed.pi.first_name == "Jane"


@pytest.mark.asyncio
async def test_unreadable_buffer_raises_load_error():
    with pytest.raises(WorkbookLoadError):
        await Orchestrator().parse(b"not a workbook")


def _edited(buffer: bytes, sheet: str, edits) -> bytes:
    workbook = load_workbook(BytesIO(buffer))
    for address, value in edits.items():
        workbook[sheet][address] = value
    output = BytesIO()
    workbook.save(output)
    return output.getvalue()


@pytest.mark.asyncio
async def test_text_starting_with_equals_survives_round_trip():
    original = _questionnaire()
    original.study.description = "=Phase II trial, see notes"
    original.pi.first_name = "=Jane"
    codec = Orchestrator(_deps())

    buffer = await codec.export(original)
    workbook = load_workbook(BytesIO(buffer))
    description = workbook["Program and Study"][f"{Section(SECTION_B).letter('study.description')}2"]
    assert description.data_type == "s"

    parsed = await codec.parse(buffer)

    assert parsed.study.description == "=Phase II trial, see notes"
    assert parsed.pi.first_name == "=Jane"
    assert parsed.program.name == "Program One"


@pytest.mark.asyncio
async def test_non_finite_counts_parse_as_empty():
    codec = Orchestrator(_deps())
    buffer = await codec.export(_questionnaire())
    participants = f"{Section(SECTION_C).letter('numberOfParticipants')}2"
    file_count = f"{Section(SECTION_D).letter('files.count')}2"
    buffer = _edited(buffer, SECTION_C.sheet_name, {participants: "inf"})
    buffer = _edited(buffer, SECTION_D.sheet_name, {file_count: "1e999"})

    parsed = await codec.parse(buffer)

    assert parsed.number_of_participants is None
    assert parsed.cancer_types == ["Breast", "Lung"]
    assert parsed.files[0].count is None
    assert parsed.files[0].type == "BAM"
    assert parsed.files[1].count == 3
    assert parsed.section_status("C") == SectionStatus.IN_PROGRESS
    assert parsed.section_status("D") == SectionStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_unexpected_mapping_error_skips_only_that_section(monkeypatch, caplog):
    def broken(values, lookups):
        raise OverflowError("cannot convert float infinity to integer")

    codec = Orchestrator(_deps())
    buffer = await codec.export(_questionnaire())

    sections = tuple(
        replace(spec, map_values=broken) if spec is SECTION_C else spec
        for spec in orchestrator.DATA_SECTIONS
    )
    monkeypatch.setattr(orchestrator, "DATA_SECTIONS", sections)
    progress = RecordingProgress()
    codec.progress = progress

    with caplog.at_level(logging.WARNING, logger="orchestrator"):
        parsed = await codec.parse(buffer)

    assert progress.events[0] == ("begin", "Import", 4)
    assert ("fail", 2) in progress.events
    assert progress.events[-1] == ("complete",)
    assert any("Unable to parse section C" in message for message in caplog.messages)
    assert parsed.section_status("C") is None
    assert parsed.number_of_participants is None
    assert parsed.pi.first_name == "Jane"
    assert len(parsed.files) == 2


# ─────────────────────────────────────────────────────────────
# Status helpers
# ─────────────────────────────────────────────────────────────

def test_is_started_ignores_booleans_and_blanks():
    assert not is_started({"flag": True, "other": False, "text": "  ", "count": None})
    assert not is_started({"count": 0, "items": []})
    assert is_started({"nested": {"items": ["x"]}})
    assert is_started({"count": 3})


def test_set_section_status_replaces_existing_entry():
    data = QuestionnaireData()
    set_section_status(data, "A", SectionStatus.NOT_STARTED)
    set_section_status(data, "A", SectionStatus.IN_PROGRESS)

    assert [state.name for state in data.sections] == ["A"]
    assert data.section_status("A") == SectionStatus.IN_PROGRESS
