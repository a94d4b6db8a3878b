"""Built-in reference lists used when the host supplies none"""

from typing import Dict, List

NOT_APPLICABLE = "Not Applicable"
OTHER = "Other"

YES_NO_LIST = '"Yes,No"'

ACCESS_TYPES = ["Open Access", "Controlled Access"]

# Options appended to every program list
FIXED_PROGRAMS: List[Dict[str, str]] = [
    {"_id": NOT_APPLICABLE, "name": NOT_APPLICABLE, "abbreviation": "", "description": ""},
    {"_id": OTHER, "name": OTHER, "abbreviation": "", "description": ""},
]

DEFAULT_CANCER_TYPES: List[str] = [
    "Bladder",
    "Blood",
    "Bone",
    "Brain",
    "Breast",
    "Cervix",
    "Colon",
    "Esophagus",
    "Eye",
    "Head and Neck",
    "Kidney",
    "Liver",
    "Lung",
    "Lymph Nodes",
    "Ovary",
    "Pancreas",
    "Prostate",
    "Rectum",
    "Skin",
    "Soft Tissue",
    "Stomach",
    "Testis",
    "Thyroid",
    "Uterus",
    NOT_APPLICABLE,
]

DEFAULT_SPECIES: List[str] = [
    "Homo sapiens",
    "Mus musculus",
    "Rattus norvegicus",
    "Canis familiaris",
    "Danio rerio",
]

DATA_TYPES = ["clinicalTrial", "genomics", "imaging", "proteomics"]

CLINICAL_DATA_TYPES = [
    "demographicData",
    "relapseRecurrenceData",
    "diagnosisData",
    "outcomeData",
    "treatmentData",
    "biospecimenData",
]
