"""Helpers for rebuilding questionnaire fragments from column values"""

from typing import Any, Callable, Dict, List, Optional

from core.interfaces import ColumnValues
from utils.values import first, to_text, value_at

Converter = Callable[[Any], Any]


def scalar(values: ColumnValues, key: str, limit: Optional[int] = None) -> str:
    """Single-entry text field, read from row 2"""
    return to_text(first(values.get(key)), limit)


def records(
    values: ColumnValues,
    fields: Dict[str, str],
    limits: Optional[Dict[str, int]] = None,
    converters: Optional[Dict[str, Converter]] = None,
) -> List[Dict[str, Any]]:
    """
    Zip a repeating group back into a list of dicts

    Args:
        values: Extracted column values
        fields: Column key -> field name in the resulting dict
        limits: Character limits per column key
        converters: Per column key overrides of the default text coercion

    Returns:
        One dict per row, skipping rows where every field is empty
    """
    limits = limits or {}
    converters = converters or {}
    length = max((len(values.get(key) or []) for key in fields), default=0)

    result = []
    for index in range(length):
        record = {}
        for key, name in fields.items():
            raw = value_at(values.get(key), index)
            if key in converters:
                record[name] = converters[key](raw)
            else:
                record[name] = to_text(raw, limits.get(key))
        if any(record.values()):
            result.append(record)
    return result


def column_entries(values: ColumnValues, key: str, limit: Optional[int] = None) -> List[str]:
    """Non-empty, de-duplicated entries of a single-column repeating group"""
    entries: List[str] = []
    for raw in values.get(key) or []:
        text = to_text(raw, limit)
        if text and text not in entries:
            entries.append(text)
    return entries
