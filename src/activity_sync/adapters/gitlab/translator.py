"""Translate GitLab payloads into domain observations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from activity_sync.domain.model import Branch, Commit

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import BranchPayload, CommitPayload


def parse_commit(payload: CommitPayload) -> Commit:
    return Commit(author_email=payload.author_email, created_at=payload.created_at)


def parse_branch(payload: BranchPayload, commits: Iterable[CommitPayload]) -> Branch:
    return Branch(name=payload.name, commits=[parse_commit(commit) for commit in commits])
