"""Instructions sheet shown as the first tab"""

from .section import SECTION_INSTRUCTIONS

__all__ = ["SECTION_INSTRUCTIONS"]
