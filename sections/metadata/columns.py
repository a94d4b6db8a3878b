"""Column schema for the hidden Metadata sheet"""

from core.models import ColumnDef

SHEET_NAME = "Metadata"

TEMPLATE_VERSION = "1.0"

COLUMNS = (
    ColumnDef(key="submissionId", header="Submission ID", width=35, locked=True),
    ColumnDef(key="applicantName", header="Applicant", width=30, locked=True),
    ColumnDef(key="applicantId", header="Applicant ID", width=35, locked=True),
    ColumnDef(key="lastStatus", header="Last Status", width=10, locked=True),
    ColumnDef(key="formVersion", header="Form Version", width=15, locked=True),
    ColumnDef(key="createdAt", header="Created Date", width=30, locked=True),
    ColumnDef(key="updatedAt", header="Last Modified", width=30, locked=True),
    ColumnDef(key="devTier", header="Tier", width=10, locked=True),
    ColumnDef(key="templateVersion", header="Template Version", width=15, locked=True),
    ColumnDef(key="exportedAt", header="Export Date", width=30, locked=True),
)

# Keys compared against the caller's application record on import
COMPARED_KEYS = (
    "submissionId",
    "applicantName",
    "applicantId",
    "lastStatus",
    "formVersion",
    "templateVersion",
    "devTier",
)
