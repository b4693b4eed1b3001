"""Wire format of activity events exchanged with the activity service."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from activity_sync.adapters.validators import blank_to_none


class ActivityEventPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_id: int | None = Field(default=None, alias="UserId")
    user_email: str | None = Field(default=None, alias="UserEmail")
    occurred_on: date = Field(alias="Date")
    activity: str = Field(alias="Activity")
    paths: list[str] = Field(default_factory=list, alias="Paths")

    _normalize_email = field_validator("user_email", mode="before")(blank_to_none)

    @field_validator("occurred_on", mode="before")
    @classmethod
    def _date_part(cls, value: object) -> object:
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def _null_paths(cls, value: object) -> object:
        return [] if value is None else value


ActivityEventBatch = TypeAdapter(list[ActivityEventPayload])
