"""Person directory built from the primary-contact and root-contact role lists.

Both lists are folded into one identity map in a single pass: the first time an
identity is seen a ``Person`` is created, every later assignment for the same
identity attaches to that same ``Person``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from activity_sync.domain.model import ContactRole, Person, RoleAssignment

from .errors import DirectoryUnavailableError
from .observer import NullObserver

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .observer import ReconciliationObserver

type FetchAssignments = Callable[[], Iterable[RoleAssignment]]


class PersonDirectory:
    """Identity map of the people activities may be attributed to."""

    def __init__(self) -> None:
        self._people: dict[int, Person] = {}

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._people.values())

    def get(self, person_id: int) -> Person | None:
        return self._people.get(person_id)

    def find_by_email(self, email: str) -> Person | None:
        """Return the first person whose primary or root email equals ``email``."""

        for person in self._people.values():
            if person.matches_email(email):
                return person
        return None

    def register(self, role: ContactRole, assignment: RoleAssignment) -> bool:
        """Attach ``assignment`` to its person, creating it on first sight.

        Returns ``True`` when the identity already held ``role``.
        """

        person = self._people.get(assignment.person_id)
        if person is None:
            person = Person(person_id=assignment.person_id)
            self._people[assignment.person_id] = person
        repeated = person.assignment_for(role) is not None
        person.attach(role, assignment)
        return repeated


def build_person_directory(
    primary_contacts: Iterable[RoleAssignment],
    root_contacts: Iterable[RoleAssignment],
    *,
    observer: ReconciliationObserver | None = None,
) -> PersonDirectory:
    """Unify both role lists into one directory keyed by identity."""

    notify = observer or NullObserver()
    directory = PersonDirectory()
    for role, assignments in (
        (ContactRole.PRIMARY, primary_contacts),
        (ContactRole.ROOT, root_contacts),
    ):
        for assignment in assignments:
            if directory.register(role, assignment):
                notify.duplicate_assignment(assignment)
    return directory


def load_person_directory(
    fetch_primary_contacts: FetchAssignments,
    fetch_root_contacts: FetchAssignments,
    *,
    observer: ReconciliationObserver | None = None,
) -> PersonDirectory:
    """Fetch both role lists and build the directory; any fetch failure is fatal."""

    primary = _fetch_all(fetch_primary_contacts, ContactRole.PRIMARY)
    root = _fetch_all(fetch_root_contacts, ContactRole.ROOT)
    return build_person_directory(primary, root, observer=observer)


def _fetch_all(fetch: FetchAssignments, role: ContactRole) -> list[RoleAssignment]:
    try:
        assignments = fetch()
        if assignments is not None:
            return list(assignments)
    except Exception as exc:
        raise DirectoryUnavailableError(f"Getting {role} contact list failed: {exc}") from exc
    raise DirectoryUnavailableError(f"{role} contact list is missing")
