"""Utility modules"""

from .logging_utils import configure_logging
from .merge import deep_merge
from .values import MULTI_DELIMITER, join_multi, split_multi, to_text

__all__ = [
    "configure_logging",
    "deep_merge",
    "MULTI_DELIMITER",
    "join_multi",
    "split_multi",
    "to_text",
]
