"""Cell value coercion shared by the section writers and parsers"""

import math
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

MULTI_DELIMITER = " | "
DATE_PATTERN = "%m/%d/%Y"
DATE_NUMBER_FORMAT = "mm/dd/yyyy"


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def to_text(value: Any, limit: Optional[int] = None) -> str:
    """
    Render a raw cell value as trimmed text

    Args:
        value: Raw value read from a worksheet
        limit: Optional character limit, longer text is truncated

    Returns:
        Trimmed (and possibly truncated) text, "" for blanks
    """
    if is_blank(value):
        return ""
    if isinstance(value, (datetime, date)):
        text = value.strftime(DATE_PATTERN)
    elif isinstance(value, bool):
        text = to_yes_no(value)
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value).strip()
    if limit is not None and len(text) > limit:
        text = text[:limit].rstrip()
    return text


def to_yes_no(flag: Optional[bool]) -> str:
    if flag is None:
        return ""
    return "Yes" if flag else "No"


def from_yes_no(value: Any) -> Optional[bool]:
    """'Yes' -> True, 'No' -> False, anything else -> None"""
    if isinstance(value, bool):
        return value
    text = to_text(value).lower()
    if text == "yes":
        return True
    if text == "no":
        return False
    return None


def split_multi(value: Any) -> List[str]:
    """Split a pipe delimited cell into its trimmed, non-empty entries"""
    text = to_text(value)
    if not text:
        return []
    return [part.strip() for part in text.split("|") if part.strip()]


def join_multi(values: Iterable[str]) -> str:
    return MULTI_DELIMITER.join(v for v in values if v)


def to_date_cell(text: Optional[str]) -> Union[datetime, str, None]:
    """Turn ``MM/DD/YYYY`` text into a datetime so date rules can evaluate it"""
    if not text:
        return None
    try:
        return datetime.strptime(text.strip(), DATE_PATTERN)
    except ValueError:
        return text


def to_positive_int(value: Any) -> Optional[int]:
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(str(value).replace(",", "").strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number < 1:
        return None
    return int(number)


def first(values: Optional[List[Any]]) -> Any:
    if not values:
        return None
    return values[0]


def value_at(values: Optional[List[Any]], index: int) -> Any:
    if not values or index >= len(values):
        return None
    return values[index]
