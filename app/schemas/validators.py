"""Shared field checks for request schemas (trim, then enforce length bounds)."""

from pydantic import validate_email
from pydantic_core import PydanticCustomError


def trimmed(
    value: str,
    label: str,
    min_length: int,
    max_length: int | None = None,
    noun: str = "characters",
) -> str:
    """Strip surrounding whitespace and enforce length bounds with a readable message."""
    value = value.strip()
    if len(value) < min_length:
        raise PydanticCustomError(
            "string_too_short",
            "{label} must be at least {min_length} {noun}",
            {"label": label, "min_length": min_length, "noun": noun},
        )
    if max_length is not None and len(value) > max_length:
        raise PydanticCustomError(
            "string_too_long",
            "{label} should not contain more than {max_length} characters",
            {"label": label, "max_length": max_length},
        )
    return value


def strip_if_str(value: object) -> object:
    """Pre-validation hook: trim strings, leave anything else for type validation."""
    if isinstance(value, str):
        return value.strip()
    return value


def checked_email(value: str) -> str:
    """
    Reject malformed addresses but return the input unchanged.

    The stored address must be the one the user types at login, so the
    normalized form from validate_email (lower-cased domain) is discarded.
    """
    if "<" in value:
        raise PydanticCustomError(
            "value_error",
            "value is not a valid email address: {reason}",
            {"reason": "a display name is not allowed"},
        )
    validate_email(value)
    return value
