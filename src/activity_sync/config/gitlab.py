"""GitLab configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from activity_sync.domain.model import SourceRepository

from .env import require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

GITLAB_API_PATH = "/api/v4/projects"
GITLAB_TIMEOUT_SECONDS = 20.0
REPOSITORY_SEPARATOR = ","
FIELD_SEPARATOR = ";"


@dataclass(frozen=True, slots=True)
class GitLabConfig:
    """Holds GitLab API access and the repositories to watch."""

    token: str
    repositories: tuple[SourceRepository, ...]
    resilience: ResilienceConfig


def parse_repositories(value: str) -> tuple[SourceRepository, ...]:
    """Parse ``host;project_id;activity`` entries separated by commas."""

    repositories: list[SourceRepository] = []
    for entry in value.split(REPOSITORY_SEPARATOR):
        if not entry.strip():
            continue
        parts = [part.strip() for part in entry.split(FIELD_SEPARATOR)]
        if len(parts) != 3 or not all(parts):
            raise ConfigurationError(
                f"Invalid GitLab repository entry {entry!r}; expected host;project_id;activity"
            )
        host, project_id, activity = parts
        repositories.append(
            SourceRepository(host=host.rstrip("/"), project_id=project_id, activity=activity)
        )
    return tuple(repositories)


def get_gitlab_config(*, resilience: ResilienceConfig | None = None) -> GitLabConfig:
    values = require_env_vars(("GITLAB_TOKEN", "GITLAB_REPOSITORIES"))
    return GitLabConfig(
        token=values["GITLAB_TOKEN"],
        repositories=parse_repositories(values["GITLAB_REPOSITORIES"]),
        resilience=resilience
        or ResilienceConfig(
            name="gitlab",
            timeout_seconds=GITLAB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            retry=RetryPolicy(total=4),
            cache=CacheConfig(backend="memory"),
            default_headers={"Accept": "application/json"},
        ),
    )
