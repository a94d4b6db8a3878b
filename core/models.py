"""Core data models for the questionnaire workbook codec"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from .enums import SectionStatus, ValidationKind


class CamelModel(BaseModel):
    """Snake case attributes, camelCase on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=(),
    )


# ─────────────────────────────────────────────────────────────
# Questionnaire
# ─────────────────────────────────────────────────────────────

class SectionState(CamelModel):
    name: str
    status: SectionStatus = SectionStatus.NOT_STARTED


class PrincipalInvestigator(CamelModel):
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    email: str = ""
    orcid: str = Field("", alias="ORCID")
    institution: str = ""
    institution_id: str = Field("", alias="institutionID")
    address: str = ""


class Contact(CamelModel):
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    email: str = ""
    institution: str = ""
    institution_id: str = Field("", alias="institutionID")
    phone: str = ""


class Program(CamelModel):
    id: str = Field("", alias="_id")
    name: str = ""
    abbreviation: str = ""
    description: str = ""


class Funding(CamelModel):
    agency: str = ""
    grant_numbers: str = ""
    nci_program_officer: str = ""
    nci_gpa: str = Field("", alias="nciGPA")


class Publication(CamelModel):
    title: str = ""
    pubmed_id: str = Field("", alias="pubmedID")
    doi: str = Field("", alias="DOI")


class PlannedPublication(CamelModel):
    title: str = ""
    expected_date: str = ""


class Repository(CamelModel):
    name: str = ""
    study_id: str = Field("", alias="studyID")
    data_types_submitted: list[str] = []
    other_data_types_submitted: str = ""


class Study(CamelModel):
    name: str = ""
    abbreviation: str = ""
    description: str = ""
    publications: list[Publication] = []
    planned_publications: list[PlannedPublication] = []
    repositories: list[Repository] = []
    funding: list[Funding] = []
    is_db_gap_registered: bool = Field(False, alias="isDbGapRegistered")
    db_gap_phs_number: str = Field("", alias="dbGaPPPHSNumber")
    gpa_name: str = Field("", alias="GPAName")


class ClinicalData(CamelModel):
    data_types: list[str] = []
    other_data_types: str = ""
    future_data_types: bool = False


class FileInfo(CamelModel):
    type: str = ""
    extension: str = ""
    count: Optional[int] = None
    amount: str = ""


class QuestionnaireData(CamelModel):
    """Hierarchical application data rendered into the workbook"""
    sections: list[SectionState] = []
    pi: PrincipalInvestigator = PrincipalInvestigator()
    pi_as_primary_contact: bool = False
    primary_contact: Optional[Contact] = None
    additional_contacts: list[Contact] = []
    program: Program = Program()
    study: Study = Study()
    access_types: list[str] = []
    targeted_submission_date: str = ""
    targeted_release_date: str = ""
    cancer_types: list[str] = []
    other_cancer_types: str = ""
    other_cancer_types_enabled: bool = False
    pre_cancer_types: str = ""
    number_of_participants: Optional[int] = None
    species: list[str] = []
    other_species_enabled: bool = False
    other_species_of_subjects: str = ""
    cell_lines: bool = False
    model_systems: bool = False
    imaging_data_de_identified: Optional[bool] = None
    data_de_identified: Optional[bool] = None
    data_types: list[str] = []
    other_data_types: str = ""
    clinical_data: ClinicalData = ClinicalData()
    files: list[FileInfo] = []
    submitter_comment: str = ""

    def section_status(self, name: str) -> Optional[SectionStatus]:
        """Status recorded for a section, or None when it was never derived"""
        for state in self.sections:
            if state.name == name:
                return state.status
        return None


# ─────────────────────────────────────────────────────────────
# Application record and lookup data
# ─────────────────────────────────────────────────────────────

class Applicant(CamelModel):
    applicant_id: str = Field("", alias="applicantID")
    applicant_name: str = ""


class ApplicationInfo(CamelModel):
    """Owning application record, minus the questionnaire itself"""
    id: str = Field("", alias="_id")
    status: str = ""
    version: str = ""
    created_at: str = ""
    updated_at: str = ""
    applicant: Applicant = Applicant()


class Institution(CamelModel):
    id: str = Field("", alias="_id")
    name: str = ""


class FileTypeOption(CamelModel):
    name: str = ""
    extensions: list[str] = []


# ─────────────────────────────────────────────────────────────
# Worksheet schema
# ─────────────────────────────────────────────────────────────

class ColumnDef(BaseModel):
    """One physical column of a section worksheet"""
    model_config = ConfigDict(frozen=True)

    key: str
    header: str
    width: int = 20
    locked: bool = False
    annotation: Optional[str] = None


class ValidationRule(BaseModel):
    """Data validation attached to one cell or range"""
    model_config = ConfigDict(frozen=True)

    kind: ValidationKind
    formula1: str
    formula2: Optional[str] = None
    operator: Optional[str] = None
    error: Optional[str] = None
    allow_blank: bool = False
    strict: bool = True
