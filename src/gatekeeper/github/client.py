"""Abstract GitHub client — the two read operations the validators need."""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

from gatekeeper.github.models import (
    CombinedStatus,
    ListCheckRunsOptions,
    ListCheckRunsResults,
    ListOptions,
)


class GitHubClient(ABC):
    """Reads CI signals for a ref.

    Implementations must let asyncio cancellation propagate: a cancelled or
    timed out caller gets the error back promptly and nothing is retried.
    """

    @abstractmethod
    async def get_combined_status(
        self,
        owner: str,
        repo: str,
        ref: str,
        opts: ListOptions | None = None,
    ) -> tuple[CombinedStatus, httpx.Response | None]:
        """Fetch the combined commit status for *ref*.

        Returns:
            The parsed payload and the raw HTTP response (None for doubles).
        """
        ...

    @abstractmethod
    async def list_check_runs_for_ref(
        self,
        owner: str,
        repo: str,
        ref: str,
        opts: ListCheckRunsOptions | None = None,
    ) -> tuple[ListCheckRunsResults, httpx.Response | None]:
        """List check runs for *ref*.

        Returns:
            The parsed payload and the raw HTTP response (None for doubles).
        """
        ...
