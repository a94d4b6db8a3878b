"""Progress reporting for workbook exports and imports"""

from .progress import ProgressTracker, ConsoleProgress

__all__ = [
    "ProgressTracker",
    "ConsoleProgress",
]
