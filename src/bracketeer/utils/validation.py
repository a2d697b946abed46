"""Validation utilities for Bracketeer.

This module provides reusable validation functions with consistent error handling.
"""

import re
from typing import Any, Optional

from bracketeer.constants import MAX_PLAYER_AGE, MIN_PLAYER_AGE
from bracketeer.exceptions import EmailValidationException, NameValidationException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Email Validation ==========


def validate_email(email: Optional[str], required: bool = False) -> ValidationResult:
    """Validate an email address.

    Args:
        email: Email address to validate
        required: Whether email is required (empty = invalid)

    Returns:
        ValidationResult with validation status

    Example:
        >>> result = validate_email("user@example.com")
        >>> if result:
        ...     print(f"Valid email: {result.sanitized_value}")
    """
    if not email or not email.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Email address is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    email = email.strip()

    # RFC 5322 simplified email regex
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if re.match(pattern, email):
        return ValidationResult(is_valid=True, sanitized_value=email)

    return ValidationResult(
        is_valid=False,
        error_message=f"Invalid email format: {email}",
    )


def validate_email_strict(email: str) -> str:
    """Validate email and raise exception if invalid.

    Args:
        email: Email address to validate

    Returns:
        The stripped email address

    Raises:
        EmailValidationException: If email is invalid
    """
    result = validate_email(email, required=True)
    if not result.is_valid:
        raise EmailValidationException(result.error_message)
    return result.sanitized_value


# ========== Name Validation ==========


def validate_name(name: Optional[str], required: bool = True) -> ValidationResult:
    """Validate a player or team name.

    Names may contain letters from any alphabet, digits, spaces and common
    punctuation (team names such as "Smash Bros 2" are allowed).

    Args:
        name: Name to validate
        required: Whether name is required

    Returns:
        ValidationResult with validation status
    """
    if not name or not name.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Name is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    name = " ".join(name.split())

    if len(name) < 2:
        return ValidationResult(
            is_valid=False,
            error_message="Name must be at least 2 characters",
        )

    if len(name) > 100:
        return ValidationResult(
            is_valid=False,
            error_message="Name must be at most 100 characters",
        )

    if not re.match(r"^[\w\s\-'\.&]+$", name):
        return ValidationResult(
            is_valid=False,
            error_message="Name contains invalid characters",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_name_strict(name: str) -> str:
    """Validate name and return the normalized form or raise.

    Raises:
        NameValidationException: If name is invalid
    """
    result = validate_name(name, required=True)
    if not result.is_valid:
        raise NameValidationException(result.error_message)
    return result.sanitized_value


# ========== Age Validation ==========


def validate_age(
    age: Optional[Any],
    min_age: int = MIN_PLAYER_AGE,
    max_age: int = MAX_PLAYER_AGE,
) -> ValidationResult:
    """Validate an age value.

    Args:
        age: Age to validate (int or numeric string)
        min_age: Minimum allowed age
        max_age: Maximum allowed age

    Returns:
        ValidationResult whose sanitized value is the age as int
    """
    if age is None or (isinstance(age, str) and not age.strip()):
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        age_int = int(str(age).strip())
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Age must be a whole number: {age}",
        )

    if age_int < min_age or age_int > max_age:
        return ValidationResult(
            is_valid=False,
            error_message=f"Age must be between {min_age} and {max_age}: {age_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=age_int)
