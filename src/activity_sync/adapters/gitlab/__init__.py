"""Public interface for the GitLab adapter."""

from __future__ import annotations

from .client import GitLabAPIError, GitLabFetcher
from .schema import BranchPayload, CommitPayload, parse_collection
from .translator import parse_branch, parse_commit

__all__ = [
    "BranchPayload",
    "CommitPayload",
    "GitLabAPIError",
    "GitLabFetcher",
    "parse_branch",
    "parse_collection",
    "parse_commit",
]
