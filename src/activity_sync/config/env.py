"""Reading settings from the process environment.

Blank values count as unset everywhere so that an empty line in ``.env`` behaves
like a missing one.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str) -> bool:
    value = optional_env(name)
    return value is not None and value.lower() in _TRUTHY


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Collect every name in ``names``; report all unset ones in a single error."""

    found = {name: optional_env(name) for name in names}
    unset = sorted(name for name, value in found.items() if value is None)
    if unset:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(unset)}")
    return {name: value for name, value in found.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars((name,))[name]
