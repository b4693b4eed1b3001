"""Reconciliation defaults for ledger sync runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from activity_sync.domain.model import MENTORING_ACTIVITY
from activity_sync.domain.reconciliation import IdentityOrder, LedgerKeyPolicy

from .env import optional_env
from .errors import ConfigurationError

SEED_ORDER_ENV = "ACTIVITY_LEDGER_SEED_ORDER"
MENTORING_LABEL_ENV = "ACTIVITY_MENTORING_LABEL"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    key_policy: LedgerKeyPolicy = field(default_factory=LedgerKeyPolicy)
    mentoring_activity: str = MENTORING_ACTIVITY


def _identity_order(value: str | None) -> IdentityOrder:
    if value is None:
        return IdentityOrder.ROOT_FIRST
    try:
        return IdentityOrder(value.lower())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid ledger seed order: {value!r}") from exc


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        key_policy=LedgerKeyPolicy(seed_order=_identity_order(optional_env(SEED_ORDER_ENV))),
        mentoring_activity=optional_env(MENTORING_LABEL_ENV) or MENTORING_ACTIVITY,
    )
