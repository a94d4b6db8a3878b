"""Core enumerations for the questionnaire workbook codec"""

from enum import Enum


class SectionStatus(str, Enum):
    """Per-section completion status stored on the questionnaire"""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class SectionId(str, Enum):
    """Internal section identifiers"""
    METADATA = "META"
    INSTRUCTIONS = "INSTRUCTIONS"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class ValidationKind(str, Enum):
    """Data validation types understood by the spreadsheet engine"""
    LIST = "list"
    CUSTOM = "custom"
    TEXT_LENGTH = "textLength"
    WHOLE = "whole"


class LookupKind(str, Enum):
    """Reference lists rendered as hidden lookup sheets"""
    INSTITUTIONS = "institutions"
    PROGRAMS = "programs"
    FUNDING_AGENCIES = "fundingAgencies"
    FILE_TYPES = "fileTypes"
    CANCER_TYPES = "cancerTypes"
    SPECIES = "species"
