"""Tests for the httpx-backed GitHub client, using httpx.MockTransport."""

import json

import httpx
import pytest

from gatekeeper.github.http_client import HttpxGitHubClient
from gatekeeper.github.models import (
    CombinedStatus,
    ListCheckRunsOptions,
    ListCheckRunsResults,
    ListOptions,
)

COMBINED_STATUS_PAYLOAD = {
    "state": "pending",
    "sha": "abc123",
    "total_count": 2,
    "statuses": [
        {"id": 1, "context": "ci/lint", "state": "success", "description": "ok", "creator": {"login": "bot"}},
        {"id": 2, "context": "ci/deploy", "state": "pending", "target_url": None},
    ],
    "repository": {"full_name": "upsidr/merge-gatekeeper"},
}

CHECK_RUNS_PAYLOAD = {
    "total_count": 2,
    "check_runs": [
        {"id": 10, "name": "test", "status": "completed", "conclusion": "success", "head_sha": "abc123"},
        {"id": 11, "name": "build", "status": "in_progress", "conclusion": None, "app": {"slug": "github-actions"}},
    ],
}


def _client(handler, token="ghp_test") -> HttpxGitHubClient:
    return HttpxGitHubClient(token=token, transport=httpx.MockTransport(handler))


class TestHttpxGitHubClient:

    async def test_get_combined_status(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=COMBINED_STATUS_PAYLOAD)

        async with _client(handler) as client:
            combined, response = await client.get_combined_status("upsidr", "merge-gatekeeper", "abc123")

        assert isinstance(combined, CombinedStatus)
        assert [(s.context, s.state) for s in combined.statuses] == [
            ("ci/lint", "success"),
            ("ci/deploy", "pending"),
        ]
        assert response.status_code == 200

        [request] = seen
        assert request.url.path == "/repos/upsidr/merge-gatekeeper/commits/abc123/status"
        assert request.url.params["per_page"] == "100"
        assert request.headers["Authorization"] == "Bearer ghp_test"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"

    async def test_list_check_runs_for_ref(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=json.dumps(CHECK_RUNS_PAYLOAD))

        async with _client(handler) as client:
            runs, _ = await client.list_check_runs_for_ref(
                "upsidr", "merge-gatekeeper", "main",
                ListCheckRunsOptions(filter="latest", page=2, per_page=50),
            )

        assert isinstance(runs, ListCheckRunsResults)
        assert [(r.name, r.status, r.conclusion) for r in runs.check_runs] == [
            ("test", "completed", "success"),
            ("build", "in_progress", None),
        ]
        params = seen[0].url.params
        assert seen[0].url.path == "/repos/upsidr/merge-gatekeeper/commits/main/check-runs"
        assert params["filter"] == "latest"
        assert params["page"] == "2"
        assert params["per_page"] == "50"
        assert "check_name" not in params

    async def test_missing_fields_parse_as_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"statuses": [{"state": "success"}]})

        async with _client(handler) as client:
            combined, _ = await client.get_combined_status("o", "r", "x")
        assert combined.statuses[0].context is None

    async def test_no_token_sends_no_authorization(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"check_runs": []})

        async with _client(handler, token=None) as client:
            await client.list_check_runs_for_ref("o", "r", "x")
        assert "Authorization" not in seen[0].headers

    @pytest.mark.parametrize("status_code", [401, 404, 422, 502])
    async def test_http_errors_raise(self, status_code):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"message": "nope"})

        async with _client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await client.get_combined_status("o", "r", "x")
        assert exc_info.value.response.status_code == status_code

    async def test_transport_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with _client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.list_check_runs_for_ref("o", "r", "x")


class TestListOptions:

    def test_to_params_drops_unset(self):
        assert ListOptions().to_params() == {}
        assert ListOptions(page=3).to_params() == {"page": 3}

    def test_per_page_bounds(self):
        with pytest.raises(Exception):
            ListOptions(per_page=101)
        with pytest.raises(Exception):
            ListOptions(page=0)
