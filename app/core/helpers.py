"""
Small helpers shared across apps.

Functions:
    is_valid_uuid: Check whether a value parses as a UUID
    parse_uuid: Parse a value to UUID, or None when malformed
"""

from __future__ import annotations

import uuid


def parse_uuid(value) -> uuid.UUID | None:
    """
    Parse ``value`` into a UUID.

    Args:
        value: String or UUID to parse

    Returns:
        UUID instance, or None if the value is missing or malformed

    Example:
        parse_uuid("550e8400-e29b-41d4-a716-446655440000")  # UUID(...)
        parse_uuid("not-an-id")  # None
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def is_valid_uuid(value) -> bool:
    """Check if ``value`` is a well-formed UUID."""
    return parse_uuid(value) is not None
