"""HTTP client for the GitLab REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from activity_sync.adapters.http_resilience import ResilientClient
from activity_sync.config.gitlab import GITLAB_API_PATH, GitLabConfig, get_gitlab_config
from activity_sync.domain.model import RepositoryActivity

from .schema import BranchPayload, CommitPayload, ErrorPayload, parse_collection
from .translator import parse_branch

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date

    from pydantic import BaseModel

    from activity_sync.config.http_resilience import ResilienceConfig
    from activity_sync.domain.model import Branch, SourceRepository
    from activity_sync.domain.ports import CommitFetcher

log = getLogger(__name__)

PRIVATE_TOKEN_HEADER = "PRIVATE-TOKEN"
PER_PAGE = 100


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class GitLabAPIError(RuntimeError):
    """Raised when the GitLab API rejects a request or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class GitLabFetcher:
    """Fetch every branch and its commits for the configured repositories."""

    config: GitLabConfig = field(default_factory=get_gitlab_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(
        self,
        repositories: Sequence[SourceRepository],
        *,
        since: date,
        until: date,
    ) -> list[RepositoryActivity]:
        return asyncio.run(self._fetch_async(repositories, since=since, until=until))

    async def _fetch_async(
        self,
        repositories: Sequence[SourceRepository],
        *,
        since: date,
        until: date,
    ) -> list[RepositoryActivity]:
        results: list[RepositoryActivity] = []
        async with self.client_factory(self.config.resilience) as client:
            for repository in repositories:
                branches = await self._fetch_repository(
                    client, repository, since=since, until=until
                )
                log.info(
                    "Fetched %s branches from project %s on %s",
                    len(branches),
                    repository.project_id,
                    repository.host,
                )
                results.append(RepositoryActivity(repository=repository, branches=branches))
        return results

    async def _fetch_repository(
        self,
        client: ResilientClient,
        repository: SourceRepository,
        *,
        since: date,
        until: date,
    ) -> list[Branch]:
        base = _project_url(repository)
        branch_payloads = await self._get_collection(
            client, f"{base}/repository/branches", {}, BranchPayload
        )
        commit_lists = await asyncio.gather(
            *(
                self._get_collection(
                    client,
                    f"{base}/repository/commits",
                    {
                        "ref_name": branch.name,
                        "since": since.isoformat(),
                        "until": until.isoformat(),
                    },
                    CommitPayload,
                )
                for branch in branch_payloads
            )
        )
        return [
            parse_branch(branch, commits)
            for branch, commits in zip(branch_payloads, commit_lists, strict=True)
        ]

    async def _get_collection[TModel: BaseModel](
        self,
        client: ResilientClient,
        url: str,
        params: dict[str, str],
        model: type[TModel],
    ) -> list[TModel]:
        items: list[TModel] = []
        page = "1"
        while page:
            query = httpx.QueryParams({**params, "per_page": PER_PAGE, "page": page})
            response = await client.get(
                url,
                params=query,
                headers={PRIVATE_TOKEN_HEADER: self.config.token},
            )
            payload = _checked_payload(response)
            try:
                items.extend(parse_collection(payload, model))
            except (ValidationError, ValueError) as exc:
                raise GitLabAPIError(f"Unexpected GitLab payload from {url}: {exc}") from exc
            page = response.headers.get("X-Next-Page", "").strip()
        return items


def _project_url(repository: SourceRepository) -> str:
    return f"{repository.host}{GITLAB_API_PATH}/{quote(repository.project_id, safe='')}"


def _checked_payload(response: httpx.Response) -> object:
    try:
        payload = response.json()
    except ValueError as exc:
        raise GitLabAPIError(
            f"GitLab returned a non-JSON response ({response.status_code})",
            status_code=response.status_code,
        ) from exc
    if response.is_error:
        try:
            detail = (
                ErrorPayload.model_validate(payload).text
                if isinstance(payload, dict)
                else response.reason_phrase
            )
        except ValidationError as exc:
            raise GitLabAPIError(
                f"GitLab API error {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            ) from exc
        log.error(f"GitLab API error {response.status_code}: {detail}")
        raise GitLabAPIError(detail, status_code=response.status_code)
    return payload


if TYPE_CHECKING:
    _fetcher_check: CommitFetcher = GitLabFetcher()
