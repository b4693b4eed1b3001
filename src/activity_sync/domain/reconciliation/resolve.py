"""Attribute incoming events to directory people.

Rules, in order:
- an event that already carries a person id resolves iff that identity is in the
  directory
- otherwise an event with an email resolves against either role's email; the
  matched identity (primary contact first) is written back onto the event
- anything else is unresolved

Resolution never raises. Unresolved events carry no ledger information and are
dropped by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .contracts import (
    ResolutionSource,
    ResolvedEvent,
    UnresolvedEvent,
    UnresolvedReason,
)
from .observer import NullObserver, ReconciliationObserver

if TYPE_CHECKING:
    from activity_sync.domain.model import ActivityEvent

    from .contracts import EventResolution
    from .directory import PersonDirectory


@dataclass(slots=True)
class EventResolver:
    directory: PersonDirectory
    observer: ReconciliationObserver = field(default_factory=NullObserver)

    def __call__(self, event: ActivityEvent) -> EventResolution:
        return self.resolve(event)

    def resolve(self, event: ActivityEvent) -> EventResolution:
        outcome = self._resolve(event)
        if isinstance(outcome, UnresolvedEvent):
            self.observer.event_unresolved(event, outcome)
        return outcome

    def _resolve(self, event: ActivityEvent) -> EventResolution:
        if event.person_id is not None:
            person = self.directory.get(event.person_id)
            if person is None:
                return UnresolvedEvent(reason=UnresolvedReason.UNKNOWN_PERSON)
            return ResolvedEvent(person=person, via=ResolutionSource.IDENTITY)

        if not event.email:
            return UnresolvedEvent(reason=UnresolvedReason.MISSING_IDENTITY)

        person = self.directory.find_by_email(event.email)
        if person is None:
            return UnresolvedEvent(reason=UnresolvedReason.UNKNOWN_EMAIL)

        event.person_id = person.preferred_id
        return ResolvedEvent(person=person, via=ResolutionSource.EMAIL)
