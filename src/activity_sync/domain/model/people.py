"""People and their advisory role assignments."""

from __future__ import annotations

from dataclasses import dataclass, field

from activity_sync.domain.model.enums import ContactRole


@dataclass(frozen=True, slots=True, kw_only=True)
class RoleAssignment:
    """One entry of a primary-contact or root-contact role list."""

    person_id: int
    email: str | None = None
    paths: frozenset[str] = field(default_factory=frozenset[str])


@dataclass(eq=False, kw_only=True)
class Person:
    """A directory entry unifying both role assignments of one identity."""

    person_id: int
    primary_contact: RoleAssignment | None = None
    root_contact: RoleAssignment | None = None

    @property
    def is_primary_contact(self) -> bool:
        return self.primary_contact is not None

    @property
    def is_root_contact(self) -> bool:
        return self.root_contact is not None

    @property
    def roles(self) -> frozenset[ContactRole]:
        roles: set[ContactRole] = set()
        if self.is_primary_contact:
            roles.add(ContactRole.PRIMARY)
        if self.is_root_contact:
            roles.add(ContactRole.ROOT)
        return frozenset(roles)

    @property
    def email(self) -> str | None:
        for assignment in (self.primary_contact, self.root_contact):
            if assignment is not None and assignment.email:
                return assignment.email
        return None

    @property
    def paths(self) -> frozenset[str]:
        paths: set[str] = set()
        for assignment in (self.primary_contact, self.root_contact):
            if assignment is not None:
                paths.update(assignment.paths)
        return frozenset(paths)

    @property
    def primary_contact_id(self) -> int | None:
        return self.primary_contact.person_id if self.primary_contact else None

    @property
    def root_contact_id(self) -> int | None:
        return self.root_contact.person_id if self.root_contact else None

    @property
    def preferred_id(self) -> int:
        """Identity used when binding events: primary contact first, then root."""

        if self.primary_contact is not None:
            return self.primary_contact.person_id
        if self.root_contact is not None:
            return self.root_contact.person_id
        return self.person_id

    def assignment_for(self, role: ContactRole) -> RoleAssignment | None:
        return self.primary_contact if role is ContactRole.PRIMARY else self.root_contact

    def has_identity(self, person_id: int) -> bool:
        return person_id in (self.person_id, self.primary_contact_id, self.root_contact_id)

    def matches_email(self, email: str) -> bool:
        return any(
            assignment is not None and assignment.email == email
            for assignment in (self.primary_contact, self.root_contact)
        )

    def attach(self, role: ContactRole, assignment: RoleAssignment) -> None:
        """Attach ``assignment`` under ``role``, merging paths of a repeated entry."""

        if assignment.person_id != self.person_id:
            raise ValueError(
                f"Assignment for person {assignment.person_id} cannot attach to {self.person_id}"
            )
        existing = self.assignment_for(role)
        if existing is not None:
            assignment = RoleAssignment(
                person_id=self.person_id,
                email=existing.email or assignment.email,
                paths=existing.paths | assignment.paths,
            )
        if role is ContactRole.PRIMARY:
            self.primary_contact = assignment
        else:
            self.root_contact = assignment
