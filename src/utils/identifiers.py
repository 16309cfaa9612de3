"""Identifier parsing shared by the services."""

import uuid

from src.exceptions import InvalidIdentifierError


def parse_id(value: str | uuid.UUID, label: str = "identifier") -> uuid.UUID:
    """Parse a UUID coming from a query string."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError):
        raise InvalidIdentifierError(f"`{value}` is not a valid {label}.") from None
