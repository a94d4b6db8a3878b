import pytest

from core.error_catalog import ErrorCatalog


def test_every_key_formats():
    params = {"min": 1, "max": 10}
    for key in ErrorCatalog.keys():
        assert ErrorCatalog.get(key, **params)


def test_messages():
    assert ErrorCatalog.get("max", max=50) == "Must be less than or equal to 50 characters."
    assert ErrorCatalog.get("yesNo") == "Please select 'Yes' or 'No' from the dropdown"
    assert ErrorCatalog.get("fromDropdown") == "Please select a value from the dropdown."
    assert ErrorCatalog.get("fromDropdown", label="a program") == (
        "Please select a program from the dropdown."
    )


def test_between_formats_thousands():
    message = ErrorCatalog.get("between", min=1, max=2_000_000_000)
    assert message == "Value must be between 1 and 2,000,000,000."


def test_unknown_key_raises():
    with pytest.raises(KeyError):
        ErrorCatalog.get("notAKey")


def test_missing_parameter_raises():
    with pytest.raises(TypeError):
        ErrorCatalog.get("requiredMax")
