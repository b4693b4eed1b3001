"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ContactRole(StrEnum):
    """Advisory role a person can be assigned to."""

    PRIMARY = "primary"
    ROOT = "root"
