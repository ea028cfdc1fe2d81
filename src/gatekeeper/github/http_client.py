"""GitHub REST implementation of :class:`GitHubClient` on top of httpx."""

from __future__ import annotations

import logging

import httpx

from gatekeeper.github.client import GitHubClient
from gatekeeper.github.models import (
    CombinedStatus,
    ListCheckRunsOptions,
    ListCheckRunsResults,
    ListOptions,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
DEFAULT_PER_PAGE = 100


class HttpxGitHubClient(GitHubClient):
    """Reads commit statuses and check runs via the GitHub REST API.

    One page is fetched per call; ``opts`` selects which. HTTP errors are
    raised as ``httpx.HTTPStatusError`` and never retried here.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HttpxGitHubClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # GitHubClient
    # ------------------------------------------------------------------

    async def get_combined_status(
        self,
        owner: str,
        repo: str,
        ref: str,
        opts: ListOptions | None = None,
    ) -> tuple[CombinedStatus, httpx.Response | None]:
        """``GET /repos/{owner}/{repo}/commits/{ref}/status``"""
        response = await self._get(
            f"/repos/{owner}/{repo}/commits/{ref}/status",
            opts or ListOptions(),
        )
        return CombinedStatus.model_validate(response.json()), response

    async def list_check_runs_for_ref(
        self,
        owner: str,
        repo: str,
        ref: str,
        opts: ListCheckRunsOptions | None = None,
    ) -> tuple[ListCheckRunsResults, httpx.Response | None]:
        """``GET /repos/{owner}/{repo}/commits/{ref}/check-runs``"""
        response = await self._get(
            f"/repos/{owner}/{repo}/commits/{ref}/check-runs",
            opts or ListCheckRunsOptions(),
        )
        return ListCheckRunsResults.model_validate(response.json()), response

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get(self, path: str, opts: ListOptions) -> httpx.Response:
        params = opts.to_params()
        params.setdefault("per_page", DEFAULT_PER_PAGE)
        response = await self._client.get(path, params=params)
        if response.is_error:
            logger.warning(
                "GitHub request %s returned %s: %s",
                path,
                response.status_code,
                response.text[:500],
            )
        response.raise_for_status()
        return response
