"""Section C: Data Access and Disease"""

from .section import SECTION_C

__all__ = ["SECTION_C"]
