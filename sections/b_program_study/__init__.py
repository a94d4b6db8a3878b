"""Section B: Program and Study"""

from .section import SECTION_B

__all__ = ["SECTION_B"]
