"""Hidden workbook metadata"""

from .columns import TEMPLATE_VERSION
from .section import SECTION_METADATA, expected_metadata, parse_metadata

__all__ = ["SECTION_METADATA", "TEMPLATE_VERSION", "expected_metadata", "parse_metadata"]
