"""Shared type definitions for pool events and HTTP models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from dex.constants import MAX_IDENTIFIER_LENGTH, UINT256_MAX
from dex.errors import InvalidIdentifier


def validate_uint256(value: Any) -> int:
    """Validate that a value is a uint256, given as an int or a decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as an int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return int_value


# 256-bit unsigned integer; accepts int or decimal string, serializes to string in JSON
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    PlainSerializer(str, return_type=str, when_used="json"),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Opaque identifier for an asset or an account
Identifier = Annotated[str, Field(min_length=1, max_length=MAX_IDENTIFIER_LENGTH)]


def validate_identifier(value: Any, kind: str = "account") -> str:
    """Check an asset or account identifier before a pool acts on it.

    Raises:
        InvalidIdentifier: If value is not a string of 1 to MAX_IDENTIFIER_LENGTH characters
    """
    if not isinstance(value, str):
        raise InvalidIdentifier(f"{kind} identifier must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidIdentifier(f"{kind} identifier must be non-empty")
    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifier(
            f"{kind} identifier is {len(value)} characters, limit is {MAX_IDENTIFIER_LENGTH}"
        )
    return value
