"""Workbook sections, in export order"""

from .a_contacts import SECTION_A
from .b_program_study import SECTION_B
from .c_access_disease import SECTION_C
from .d_data_types import SECTION_D
from .engine import Section, SectionContext, SectionSpec
from .instructions import SECTION_INSTRUCTIONS
from .metadata import SECTION_METADATA, TEMPLATE_VERSION, parse_metadata

# Sections holding questionnaire data, parsed back on import
DATA_SECTIONS = (SECTION_A, SECTION_B, SECTION_C, SECTION_D)

ORDER = (SECTION_METADATA, SECTION_INSTRUCTIONS, *DATA_SECTIONS)

__all__ = [
    "Section",
    "SectionContext",
    "SectionSpec",
    "SECTION_METADATA",
    "SECTION_INSTRUCTIONS",
    "SECTION_A",
    "SECTION_B",
    "SECTION_C",
    "SECTION_D",
    "DATA_SECTIONS",
    "ORDER",
    "TEMPLATE_VERSION",
    "parse_metadata",
]
