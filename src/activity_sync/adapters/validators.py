"""Field coercions shared by the pydantic wire schemas."""

from __future__ import annotations


def blank_to_none(value: object) -> object:
    """Strip strings and turn empty ones into ``None``; other values pass through."""

    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value
