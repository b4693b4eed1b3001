from __future__ import annotations

from datetime import UTC, datetime

import pytest

from activity_sync.adapters.gitlab import (
    BranchPayload,
    CommitPayload,
    parse_branch,
    parse_collection,
)


def test_commit_payload_ignores_unknown_fields() -> None:
    payload = CommitPayload.model_validate(
        {
            "id": "ed899a2f",
            "author_email": "a@x",
            "committer_email": "c@x",
            "created_at": "2024-03-14T09:15:00Z",
        }
    )

    assert payload.author_email == "a@x"
    assert payload.created_at == datetime(2024, 3, 14, 9, 15, tzinfo=UTC)


def test_blank_author_email_becomes_none() -> None:
    payload = CommitPayload.model_validate({"author_email": "", "created_at": "2024-03-14"})

    assert payload.author_email is None


def test_parse_collection_rejects_scalars() -> None:
    with pytest.raises(ValueError, match="Unexpected GitLab payload"):
        parse_collection("main", BranchPayload)


def test_parse_branch_translates_commits() -> None:
    branch = parse_branch(
        BranchPayload(name="main"),
        [CommitPayload(author_email="a@x", created_at=datetime(2024, 3, 14, tzinfo=UTC))],
    )

    assert branch.name == "main"
    assert [commit.author_email for commit in branch.commits] == ["a@x"]
