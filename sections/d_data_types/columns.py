"""Column schema for the Data Types sheet"""

from core.models import ColumnDef

SHEET_NAME = "Data Types"

COLUMNS = (
    ColumnDef(
        key="targetedSubmissionDate",
        header="Targeted Data Submission Delivery Date",
        width=40,
        locked=True,
        annotation=(
            "The date that transfer of data from the submitter to CRDC Submission Portal is "
            "expected to begin."
        ),
    ),
    ColumnDef(
        key="targetedReleaseDate",
        header="Expected Publication Date",
        width=30,
        locked=True,
        annotation="The date that submitters expect any paper using this data will be published.",
    ),
    ColumnDef(
        key="dataTypes.clinicalTrial",
        header="Clinical",
        width=15,
        locked=True,
        annotation=(
            "A research study in which one or more subjects are prospectively assigned to one or "
            "more interventions to evaluate the effects of those interventions on health-related "
            "biomedical outcomes."
        ),
    ),
    ColumnDef(
        key="dataTypes.genomics",
        header="Genomics",
        width=15,
        locked=True,
        annotation=(
            "The branch of molecular biology concerned with the structure, function, evolution, "
            "and mapping of genomes."
        ),
    ),
    ColumnDef(
        key="dataTypes.imaging",
        header="Imaging",
        width=15,
        locked=True,
        annotation=(
            "Medical and experimental images from disciplines such as radiology, pathology, and "
            "microscopy."
        ),
    ),
    ColumnDef(
        key="imagingDataDeIdentified",
        header="Confirm the imaging data you plan to submit are de-identified",
        width=50,
        locked=True,
    ),
    ColumnDef(
        key="dataTypes.proteomics",
        header="Proteomics",
        width=15,
        locked=True,
        annotation="Data from the study of the large scale expression and use of proteins.",
    ),
    ColumnDef(
        key="otherDataTypes",
        header="Other Data Type(s)",
        width=50,
        locked=True,
        annotation=(
            "Data that do not fit in any of the other categories. Enter additional Data Types, "
            'separated by pipes ("|").'
        ),
    ),
    ColumnDef(
        key="clinicalData.dataTypes.demographicData",
        header="Demographic Data",
        width=20,
        locked=True,
        annotation="Indicate whether demographics information is available for the study.",
    ),
    ColumnDef(
        key="clinicalData.dataTypes.relapseRecurrenceData",
        header="Relapse/Recurrence Data",
        width=20,
        locked=True,
        annotation="Indicate whether relapse/recurrence data is available for the study.",
    ),
    ColumnDef(
        key="clinicalData.dataTypes.diagnosisData",
        header="Diagnosis Data",
        width=15,
        locked=True,
        annotation="Indicate whether diagnosis information is available for the study.",
    ),
    ColumnDef(
        key="clinicalData.dataTypes.outcomeData",
        header="Outcome Data",
        width=15,
        locked=True,
        annotation="Indicate whether outcome data is available for the study.",
    ),
    ColumnDef(
        key="clinicalData.dataTypes.treatmentData",
        header="Treatment Data",
        width=15,
        locked=True,
        annotation="Indicate whether treatment data is available for the study.",
    ),
    ColumnDef(
        key="clinicalData.dataTypes.biospecimenData",
        header="Biospecimen Data",
        width=15,
        locked=True,
        annotation="Indicate whether biospecimen data is available for the study.",
    ),
    ColumnDef(
        key="clinicalData.otherDataTypes",
        header="Other Clinical Data Types",
        width=50,
        locked=True,
        annotation=(
            "Any additional types of clinical data not already specified above. Enter additional "
            'Clinical Data Types, separated by pipes ("|").'
        ),
    ),
    ColumnDef(
        key="clinicalData.futureDataTypes",
        header="Additional Data Types with a future submission?",
        width=40,
        locked=True,
        annotation="Indicate if there will be additional types of data included with a future submission.",
    ),
    ColumnDef(
        key="files.type",
        header="File Type",
        width=30,
        locked=True,
        annotation=(
            "If there is more than one entry, you may use additional rows for the details of each entry."
        ),
    ),
    ColumnDef(key="files.extension", header="File Extension", width=15, locked=True),
    ColumnDef(key="files.count", header="Number of files", width=15, locked=True),
    ColumnDef(key="files.amount", header="Estimated data size", width=20, locked=True),
    ColumnDef(
        key="dataDeIdentified",
        header="Confirm the data you plan to submit are de-identified",
        width=50,
        locked=True,
    ),
    ColumnDef(
        key="cellLines",
        header="Cell lines",
        width=10,
        locked=True,
        annotation="An established cell culture that can be propagated.",
    ),
    ColumnDef(
        key="modelSystems",
        header="Model systems",
        width=15,
        locked=True,
        annotation="An experimental system that shows similarity to human tumors.",
    ),
    ColumnDef(
        key="submitterComment",
        header="Additional Comments or Information about this submission.",
        width=80,
        locked=True,
    ),
)

CHARACTER_LIMITS = {
    "otherDataTypes": 200,
    "clinicalData.otherDataTypes": 200,
    "files.type": 100,
    "files.extension": 50,
    "files.amount": 50,
    "submitterComment": 500,
}

DATE_KEYS = ("targetedSubmissionDate", "targetedReleaseDate")

FILE_FIELDS = {
    "files.type": "type",
    "files.extension": "extension",
    "files.count": "count",
    "files.amount": "amount",
}

FILE_COUNT_MIN = 1
FILE_COUNT_MAX = 2_000_000_000
