"""Core abstractions for the questionnaire workbook codec"""

from .models import *
from .enums import *
from .exceptions import *
from .interfaces import *
from .error_catalog import ErrorCatalog

__all__ = [
    # Models
    "QuestionnaireData",
    "SectionState",
    "PrincipalInvestigator",
    "Contact",
    "Program",
    "Funding",
    "Publication",
    "PlannedPublication",
    "Repository",
    "Study",
    "ClinicalData",
    "FileInfo",
    "Applicant",
    "ApplicationInfo",
    "Institution",
    "FileTypeOption",
    "ColumnDef",
    "ValidationRule",
    # Enums
    "SectionStatus",
    "SectionId",
    "ValidationKind",
    "LookupKind",
    # Exceptions
    "WorkbookCodecError",
    "WorkbookLoadError",
    "LookupSheetError",
    "SectionError",
    # Interfaces
    "LookupFetcher",
    "HeaderValues",
    "ColumnValues",
    "SectionWriter",
    "SectionValidator",
    "ValueMapper",
    "LookupData",
    "MiddlewareDependencies",
    # Messages
    "ErrorCatalog",
]
