"""Shared test fixtures."""

import pytest

from gatekeeper.github.client import GitHubClient
from gatekeeper.github.models import (
    CheckRun,
    CombinedStatus,
    ListCheckRunsResults,
    RepoStatus,
)
from gatekeeper.validators.status import create_validator


class FakeGitHubClient(GitHubClient):
    """In-memory GitHubClient returning canned payloads (or raising)."""

    def __init__(
        self,
        statuses: list[dict] | None = None,
        check_runs: list[dict] | None = None,
        status_error: BaseException | None = None,
        check_runs_error: BaseException | None = None,
    ) -> None:
        self.statuses = statuses or []
        self.check_runs = check_runs or []
        self.status_error = status_error
        self.check_runs_error = check_runs_error
        self.calls: list[tuple] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def get_combined_status(self, owner, repo, ref, opts=None):
        self.calls.append(("get_combined_status", owner, repo, ref))
        if self.status_error is not None:
            raise self.status_error
        return CombinedStatus(statuses=[RepoStatus(**s) for s in self.statuses]), None

    async def list_check_runs_for_ref(self, owner, repo, ref, opts=None):
        self.calls.append(("list_check_runs_for_ref", owner, repo, ref))
        if self.check_runs_error is not None:
            raise self.check_runs_error
        runs = [CheckRun(**r) for r in self.check_runs]
        return ListCheckRunsResults(total_count=len(runs), check_runs=runs), None


@pytest.fixture
def fake_client_factory():
    """The FakeGitHubClient class; call it with canned payloads."""
    return FakeGitHubClient


@pytest.fixture
def make_validator(fake_client_factory):
    """Build a StatusValidator for upsidr/merge-gatekeeper@abc123 over a fake client."""

    def _make(statuses=None, check_runs=None, **client_kwargs):
        client = fake_client_factory(statuses=statuses, check_runs=check_runs, **client_kwargs)
        return create_validator(
            client,
            owner="upsidr",
            repo="merge-gatekeeper",
            ref="abc123",
            self_job_name="gatekeeper",
        )

    return _make


@pytest.fixture
def validator_fields() -> dict:
    return {
        "owner": "upsidr",
        "repo": "merge-gatekeeper",
        "ref": "refs/heads/main",
        "self_job_name": "gatekeeper",
    }
