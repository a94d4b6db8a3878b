"""Column schema for the Program and Study sheet"""

from core.models import ColumnDef

SHEET_NAME = "Program and Study"

_REPEAT_NOTE = (
    "If there is more than one entry, you may use additional rows for the details of each entry."
)

COLUMNS = (
    ColumnDef(
        key="program._id",
        header="Program",
        width=30,
        annotation=(
            "Select a program from the list. Choose 'Other' to describe a program that is not "
            "listed, or 'Not Applicable' if the study has no program."
        ),
    ),
    ColumnDef(
        key="program.name",
        header="Program Title",
        width=30,
        annotation="Filled in automatically for listed programs.",
    ),
    ColumnDef(key="program.abbreviation", header="Program Abbreviation", width=20),
    ColumnDef(key="program.description", header="Program Description", width=50),
    ColumnDef(
        key="study.name",
        header="Study Title",
        width=30,
        annotation="A descriptive name that will be used to identify the study.",
    ),
    ColumnDef(
        key="study.abbreviation",
        header="Study Abbreviation",
        width=20,
        annotation="A short name or acronym for the study.",
    ),
    ColumnDef(
        key="study.description",
        header="Study Description",
        width=50,
        annotation="Describe the study and its goals.",
    ),
    ColumnDef(
        key="study.funding.agency",
        header="Funding Agency/Organization",
        width=40,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(
        key="study.funding.grantNumbers",
        header="Grant or Contract Number(s)",
        width=30,
        annotation="Separate multiple numbers with commas.",
    ),
    ColumnDef(key="study.funding.nciProgramOfficer", header="NCI Program Officer", width=30),
    ColumnDef(
        key="study.publications.title",
        header="Existing Publication Title",
        width=30,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(key="study.publications.pubmedID", header="PubMed ID (PMID)", width=30),
    ColumnDef(key="study.publications.DOI", header="DOI", width=30),
    ColumnDef(
        key="study.plannedPublications.title",
        header="Planned Publication Title",
        width=30,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(
        key="study.plannedPublications.expectedDate",
        header="Expected Publication Date",
        width=30,
        annotation="Enter the date as MM/DD/YYYY. The date cannot be in the past.",
    ),
    ColumnDef(
        key="study.repositories.name",
        header="Repository Name",
        width=30,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(
        key="study.repositories.studyID",
        header="Study ID",
        width=30,
        annotation="The identifier of the study within the repository.",
    ),
    ColumnDef(
        key="study.repositories.dataTypesSubmitted",
        header="Data Type(s) Submitted",
        width=50,
        annotation='Separate multiple data types with pipes ("|").',
    ),
    ColumnDef(
        key="study.repositories.otherDataTypesSubmitted",
        header="Other Data Type(s)",
        width=50,
    ),
)

CHARACTER_LIMITS = {
    "program.name": 100,
    "program.abbreviation": 100,
    "program.description": 500,
    "study.name": 100,
    "study.abbreviation": 20,
    "study.description": 2500,
    "study.funding.agency": 100,
    "study.funding.grantNumbers": 250,
    "study.funding.nciProgramOfficer": 50,
    "study.publications.title": 500,
    "study.publications.pubmedID": 20,
    "study.publications.DOI": 20,
    "study.plannedPublications.title": 500,
    "study.repositories.name": 50,
    "study.repositories.studyID": 50,
    "study.repositories.otherDataTypesSubmitted": 100,
}

FUNDING_FIELDS = {
    "study.funding.agency": "agency",
    "study.funding.grantNumbers": "grantNumbers",
    "study.funding.nciProgramOfficer": "nciProgramOfficer",
}

PUBLICATION_FIELDS = {
    "study.publications.title": "title",
    "study.publications.pubmedID": "pubmedID",
    "study.publications.DOI": "DOI",
}

PLANNED_PUBLICATION_FIELDS = {
    "study.plannedPublications.title": "title",
    "study.plannedPublications.expectedDate": "expectedDate",
}

REPOSITORY_FIELDS = {
    "study.repositories.name": "name",
    "study.repositories.studyID": "studyID",
    "study.repositories.dataTypesSubmitted": "dataTypesSubmitted",
    "study.repositories.otherDataTypesSubmitted": "otherDataTypesSubmitted",
}
