import pytest
from openpyxl import Workbook

from core.enums import LookupKind
from core.exceptions import LookupSheetError
from core.interfaces import MiddlewareDependencies
from sections.lookups import LookupRegistry, fetch_lookup, load_lookup_data
from sections.options import DEFAULT_CANCER_TYPES, FIXED_PROGRAMS


def _workbook():
    workbook = Workbook()
    workbook.remove(workbook.active)
    return workbook


@pytest.mark.asyncio
async def test_get_or_create_is_idempotent():
    calls = []

    def institutions():
        calls.append(1)
        return [{"_id": "1", "name": "Foo"}, {"_id": "2", "name": "Bar"}]

    workbook = _workbook()
    registry = LookupRegistry(workbook, MiddlewareDependencies(get_institutions=institutions))

    first = await registry.get_or_create(LookupKind.INSTITUTIONS)
    second = await registry.get_or_create(LookupKind.INSTITUTIONS)

    assert first is second
    assert calls == [1]
    assert workbook.sheetnames == ["InstitutionList"]
    assert first.sheet_state == "hidden"
    assert first.max_row == 2
    assert registry.row_count(LookupKind.INSTITUTIONS) == 2
    assert registry.list_formula(LookupKind.INSTITUTIONS) == "='InstitutionList'!$B$1:$B$2"


@pytest.mark.asyncio
async def test_existing_sheet_is_reused():
    workbook = _workbook()
    sheet = workbook.create_sheet("SpeciesList")
    sheet["A1"] = "Homo sapiens"

    registry = LookupRegistry(workbook, MiddlewareDependencies(get_species=lambda: ["Mus musculus"]))
    reused = await registry.get_or_create(LookupKind.SPECIES)

    assert reused is sheet
    assert reused["A1"].value == "Homo sapiens"
    assert registry.row_count(LookupKind.SPECIES) == 1


@pytest.mark.asyncio
async def test_async_fetcher_is_awaited():
    async def agencies():
        return ["NCI", "NIH"]

    registry = LookupRegistry(_workbook(), MiddlewareDependencies(get_funding_agencies=agencies))
    sheet = await registry.get_or_create(LookupKind.FUNDING_AGENCIES)

    assert [sheet["A1"].value, sheet["A2"].value] == ["NCI", "NIH"]


@pytest.mark.asyncio
async def test_failing_fetcher_yields_empty_list():
    def broken():
        raise ConnectionError("offline")

    assert await fetch_lookup(LookupKind.PROGRAMS, MiddlewareDependencies(get_programs=broken)) == []


@pytest.mark.asyncio
async def test_missing_fetcher_uses_built_in_list():
    deps = MiddlewareDependencies()
    assert await fetch_lookup(LookupKind.CANCER_TYPES, deps) == DEFAULT_CANCER_TYPES
    assert await fetch_lookup(LookupKind.INSTITUTIONS, deps) == []


@pytest.mark.asyncio
async def test_program_sheet_has_display_formula_and_fixed_options():
    programs = [
        {"_id": "p1", "name": "Program One", "abbreviation": "P1", "description": "First"},
        {"_id": "p2", "name": "", "abbreviation": "P2", "description": ""},
    ]
    registry = LookupRegistry(_workbook(), MiddlewareDependencies(get_programs=lambda: programs))
    sheet = await registry.get_or_create(LookupKind.PROGRAMS)

    assert sheet["A1"].value == "p1"
    assert sheet["E1"].value == "=IF(LEN(TRIM($B$1))>0,$B$1,$A$1)"
    assert sheet["A3"].value == FIXED_PROGRAMS[0]["_id"]
    assert sheet["A4"].value == FIXED_PROGRAMS[1]["_id"]
    assert registry.row_count(LookupKind.PROGRAMS) == 4

    ids = [program.id for program in registry.programs()]
    assert ids == ["p1", "p2", "Not Applicable", "Other"]


@pytest.mark.asyncio
async def test_malformed_lookup_records_are_skipped():
    institutions = [
        {"_id": "i1", "name": None},
        {"_id": None, "name": "Foo"},
        {"_id": 42, "name": "Numbered"},
        {"_id": "i4", "name": ["not", "text"]},
        "Plain Name",
    ]
    registry = LookupRegistry(_workbook(), MiddlewareDependencies(get_institutions=lambda: institutions))
    sheet = await registry.get_or_create(LookupKind.INSTITUTIONS)

    rows = [(row[0].value, row[1].value) for row in sheet.iter_rows(max_col=2)]
    assert rows == [("i1", None), (None, "Foo"), ("42", "Numbered"), (None, "Plain Name")]
    assert registry.row_count(LookupKind.INSTITUTIONS) == 4


@pytest.mark.asyncio
async def test_program_text_starting_with_equals_stays_literal():
    programs = [{"_id": "p1", "name": "=Program", "abbreviation": None, "description": "=x"}]
    registry = LookupRegistry(_workbook(), MiddlewareDependencies(get_programs=lambda: programs))
    sheet = await registry.get_or_create(LookupKind.PROGRAMS)

    assert sheet["B1"].value == "=Program"
    assert sheet["B1"].data_type == "s"
    assert sheet["C1"].value is None
    assert sheet["E1"].data_type == "f"
    assert registry.programs()[0].name == "=Program"


def test_require_before_create_raises():
    registry = LookupRegistry(_workbook(), MiddlewareDependencies())
    with pytest.raises(LookupSheetError):
        registry.list_formula(LookupKind.FILE_TYPES)


@pytest.mark.asyncio
async def test_load_lookup_data_prefers_sheets_in_the_workbook():
    calls = []

    def institutions():
        calls.append("institutions")
        return [{"_id": "999", "name": "Fetched"}]

    def species():
        calls.append("species")
        return ["Danio rerio"]

    workbook = _workbook()
    sheet = workbook.create_sheet("InstitutionList")
    sheet["A1"] = "123"
    sheet["B1"] = "Foo"

    deps = MiddlewareDependencies(get_institutions=institutions, get_species=species)
    lookups = await load_lookup_data(workbook, deps)

    assert lookups.institutions == {"Foo": "123"}
    assert lookups.species == ["Danio rerio"]
    assert calls == ["species"]
    assert [option["_id"] for option in lookups.programs] == ["Not Applicable", "Other"]
