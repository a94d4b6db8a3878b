"""Section A: PI and Contact"""

from .section import SECTION_A

__all__ = ["SECTION_A"]
