"""Validation failure messages shown by the spreadsheet when a rule rejects input"""

from typing import Any, Callable, Dict, List


def _thousands(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


_MESSAGES: Dict[str, Callable[..., str]] = {
    "min": lambda min, **_: f"Must be at least {min} characters.",
    "max": lambda max, **_: f"Must be less than or equal to {max} characters.",
    "requiredMax": lambda max, **_: (
        f"This field is required and must be less than or equal to {max} characters."
    ),
    "yesNo": lambda **_: "Please select 'Yes' or 'No' from the dropdown",
    "fromDropdown": lambda label="a value", **_: f"Please select {label} from the dropdown.",
    "email": lambda **_: "Please provide a valid email address.",
    "orcid": lambda **_: "Please provide a valid ORCID (e.g. 0000-0002-1825-0097).",
    "dbGaPPHSNumber": lambda **_: "Please provide a valid dbGaP PHS number (e.g. phs000001.v1.p1).",
    "phone": lambda max, **_: f"Must be a valid phone number of at most {max} characters.",
    "dateMMDDYYYY": lambda **_: "Please enter a date in MM/DD/YYYY format that is not in the past.",
    "between": lambda min, max, **_: (
        f"Value must be between {_thousands(min)} and {_thousands(max)}."
    ),
    "invalidOperation": lambda **_: "Invalid operation.",
}


class ErrorCatalog:
    """Keyed, parameterized validation messages"""

    @staticmethod
    def get(key: str, **params: Any) -> str:
        """
        Format the message registered under ``key``

        Raises:
            KeyError: unknown key
            TypeError: a required parameter is missing
        """
        if key not in _MESSAGES:
            raise KeyError(f"Unknown error message key: {key}")
        return _MESSAGES[key](**params)

    @staticmethod
    def keys() -> List[str]:
        return list(_MESSAGES)
