"""Custom exceptions for the questionnaire workbook codec"""


class WorkbookCodecError(Exception):
    """Base exception for all codec errors"""
    pass


class WorkbookLoadError(WorkbookCodecError):
    """The uploaded buffer is not a readable workbook"""
    def __init__(self, message: str, source: str = None):
        super().__init__(message)
        self.source = source


class LookupSheetError(WorkbookCodecError):
    """A lookup sheet was referenced before it was created"""
    def __init__(self, kind: str):
        super().__init__(f"Lookup sheet for '{kind}' has not been created")
        self.kind = kind


class SectionError(WorkbookCodecError):
    """Error while serializing a specific section"""
    def __init__(self, section_id: str, message: str):
        super().__init__(f"Section {section_id}: {message}")
        self.section_id = section_id
        self.message = message
