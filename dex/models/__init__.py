"""Pydantic models shared by events and the HTTP API."""

from dex.models.types import Identifier, Uint256, validate_identifier, validate_uint256

__all__ = ["Identifier", "Uint256", "validate_identifier", "validate_uint256"]
