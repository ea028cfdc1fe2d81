"""Pydantic models for the GitHub commit status and check run payloads.

Only the fields the gatekeeper reads are declared; everything else in the
REST payload is ignored. String fields are optional so that a missing value
stays observable as ``None`` instead of failing at parse time.
"""

from pydantic import BaseModel, ConfigDict, Field


class RepoStatus(BaseModel):
    """One entry of the legacy commit status API."""

    model_config = ConfigDict(extra="ignore")

    context: str | None = None
    state: str | None = None  # "success", "failure", "error", "pending"
    description: str | None = None
    target_url: str | None = None


class CombinedStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    state: str | None = None
    sha: str | None = None
    total_count: int | None = None
    statuses: list[RepoStatus] = Field(default_factory=list)


class CheckRun(BaseModel):
    """One entry of the checks API."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    status: str | None = None  # "queued", "in_progress", "completed", ...
    conclusion: str | None = None  # only meaningful once status is "completed"
    head_sha: str | None = None
    html_url: str | None = None


class ListCheckRunsResults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int | None = None
    check_runs: list[CheckRun] = Field(default_factory=list)


class ListOptions(BaseModel):
    """Pagination query parameters shared by list endpoints."""

    model_config = ConfigDict(extra="forbid")

    page: int | None = Field(None, ge=1)
    per_page: int | None = Field(None, ge=1, le=100)

    def to_params(self) -> dict[str, str | int]:
        """Query parameters with unset values dropped."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class ListCheckRunsOptions(ListOptions):
    check_name: str | None = None
    status: str | None = None
    filter: str | None = None  # "latest" or "all"
    app_id: int | None = None
