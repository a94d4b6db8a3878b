"""Section D: Data Types"""

from .section import SECTION_D

__all__ = ["SECTION_D"]
