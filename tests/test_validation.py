import pytest

from bracketeer.exceptions import EmailValidationException, NameValidationException
from bracketeer.utils.validation import (
    validate_age,
    validate_email,
    validate_email_strict,
    validate_name,
    validate_name_strict,
)


def test_name_is_normalized():
    result = validate_name("  Ana   Duval ")
    assert result
    assert result.sanitized_value == "Ana Duval"


@pytest.mark.parametrize("name", ["", "   ", "A", "x" * 101, "Ana, Duval", "<script>"])
def test_bad_names(name):
    assert not validate_name(name)


def test_names_allow_team_punctuation():
    assert validate_name("O'Neil & Smith Jr.")
    assert validate_name("Zoë Müller")


def test_optional_email():
    assert validate_email("").sanitized_value is None
    assert not validate_email("", required=True)
    assert validate_email(" ana@example.com ").sanitized_value == "ana@example.com"
    assert not validate_email("ana@example")


@pytest.mark.parametrize("age, expected", [("34", 34), (1, 1), (119, 119), ("", None), (None, None)])
def test_valid_ages(age, expected):
    result = validate_age(age)
    assert result
    assert result.sanitized_value == expected


@pytest.mark.parametrize("age", ["abc", 0, 120, "-3"])
def test_invalid_ages(age):
    assert not validate_age(age)


def test_strict_variants_raise():
    assert validate_name_strict(" Ben  Okafor") == "Ben Okafor"
    assert validate_email_strict("ben@example.org") == "ben@example.org"

    with pytest.raises(NameValidationException):
        validate_name_strict("B")
    with pytest.raises(EmailValidationException):
        validate_email_strict("")
