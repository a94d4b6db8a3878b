"""Column schema for the Data Access and Disease sheet"""

from core.models import ColumnDef

SHEET_NAME = "Data Access and Disease"

_REPEAT_NOTE = (
    "If there is more than one entry, you may use additional rows for the details of each entry."
)

COLUMNS = (
    ColumnDef(key="accessTypes.openAccess", header="Access Types: Open Access", width=30, locked=True),
    ColumnDef(
        key="accessTypes.controlledAccess",
        header="Access Types: Controlled Access",
        width=30,
        locked=True,
    ),
    ColumnDef(
        key="study.isDbGapRegistered",
        header="Has your study been registered in dbGaP?",
        width=45,
        locked=True,
    ),
    ColumnDef(
        key="study.dbGaPPPHSNumber",
        header="If yes, provide dbGaP PHS number with the version number",
        width=50,
        locked=True,
        annotation="For example phs000001.v1.p1",
    ),
    ColumnDef(key="study.GPAName", header="GPA Name", width=30, locked=True),
    ColumnDef(
        key="cancerTypes",
        header="Cancer Types",
        width=30,
        locked=True,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(
        key="otherCancerTypes",
        header="Other cancer type(s)",
        width=50,
        locked=True,
        annotation='Enter additional Cancer Types, separated by pipes ("|").',
    ),
    ColumnDef(
        key="preCancerTypes",
        header="Pre-Cancer types (provide all that apply)",
        width=50,
        locked=True,
        annotation='Enter additional Pre-Cancer Types, separated by pipes ("|").',
    ),
    ColumnDef(
        key="species",
        header="Species of subjects",
        width=30,
        locked=True,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(key="otherSpeciesOfSubjects", header="Other Specie(s) involved", width=30, locked=True),
    ColumnDef(
        key="numberOfParticipants",
        header="Number of subjects included in the submission",
        width=45,
        locked=True,
    ),
)

CHARACTER_LIMITS = {
    "study.dbGaPPPHSNumber": 50,
    "otherCancerTypes": 1000,
    "preCancerTypes": 500,
    "otherSpeciesOfSubjects": 500,
    "numberOfParticipants": 10,
}

PARTICIPANTS_MIN = 1
PARTICIPANTS_MAX = 2_000_000_000
