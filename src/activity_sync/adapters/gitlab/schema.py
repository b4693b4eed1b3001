"""Pydantic models describing the GitLab REST payloads we read."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, field_validator

from activity_sync.adapters.validators import blank_to_none


class GitLabBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BranchPayload(GitLabBaseModel):
    name: str


class CommitPayload(GitLabBaseModel):
    id: str | None = None
    author_email: str | None = None
    created_at: datetime

    _normalize_email = field_validator("author_email", mode="before")(blank_to_none)


class ErrorPayload(GitLabBaseModel):
    message: str | Mapping[str, object] | None = None
    error: str | None = None

    @property
    def text(self) -> str:
        if self.error:
            return self.error
        if isinstance(self.message, str):
            return self.message
        return str(self.message)


def parse_collection[TModel: BaseModel](payload: object, model: type[TModel]) -> list[TModel]:
    """Validate a list payload; a single object is treated as a one-item list."""

    if isinstance(payload, Mapping):
        return [model.model_validate(payload)]
    if isinstance(payload, Sequence) and not isinstance(payload, str | bytes):
        return [model.model_validate(item) for item in payload]
    raise ValueError(f"Unexpected GitLab payload of type {type(payload).__name__}")
