"""Commit status validator — folds commit statuses and check runs into one verdict."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from gatekeeper.errors.exceptions import (
    ConfigurationError,
    InvalidCheckRunResponseError,
    InvalidCombinedStatusResponseError,
)
from gatekeeper.errors.multierror import MultiError
from gatekeeper.github.client import GitHubClient
from gatekeeper.github.models import ListCheckRunsOptions, ListOptions
from gatekeeper.validators.base import Status, Validator

logger = logging.getLogger(__name__)

# https://docs.github.com/en/rest/checks/runs
CHECK_RUN_COMPLETED_STATUS = "completed"
SUCCESSFUL_CONCLUSIONS = frozenset({"neutral", "success"})


class JobState(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    PENDING = "pending"


class JobStatus(BaseModel):
    """A CI job normalized from either a commit status or a check run.

    Commit status states are carried through verbatim; check run states are
    always one of :class:`JobState`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    job: str
    state: str


class ValidationResult(BaseModel, Status):
    """Snapshot of one validation round. The self job never appears in the lists."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_jobs: tuple[str, ...] = Field(default_factory=tuple)
    complete_jobs: tuple[str, ...] = Field(default_factory=tuple)
    succeeded: bool = True

    def is_success(self) -> bool:
        return self.succeeded

    def detail(self) -> str:
        return (
            f"{len(self.complete_jobs)} out of {len(self.total_jobs)}\n\n"
            f"  Total job count:     {len(self.total_jobs)}\n"
            f"    jobs: {list(self.total_jobs)}\n"
            f"  Completed job count: {len(self.complete_jobs)}\n"
            f"    jobs: {list(self.complete_jobs)}\n"
        )


@dataclass(frozen=True)
class ValidatorConfig:
    """Identity of the ref being gated."""

    owner: str = ""
    repo: str = ""
    ref: str = ""
    self_job_name: str = ""

    def violations(self, client: GitHubClient | None) -> list[ConfigurationError]:
        """Every unmet requirement, in a stable order."""
        errors = []
        if not self.repo:
            errors.append(ConfigurationError("repository name is empty"))
        if not self.owner:
            errors.append(ConfigurationError("repository owner is empty"))
        if not self.ref:
            errors.append(ConfigurationError("reference of repository is empty"))
        if not self.self_job_name:
            errors.append(ConfigurationError("self job name is empty"))
        if client is None:
            errors.append(ConfigurationError("github client is empty"))
        return errors


def create_validator(
    client: GitHubClient | None,
    config: ValidatorConfig | None = None,
    **fields: str,
) -> StatusValidator:
    """Build a validator, applying keyword *fields* on top of *config*.

    Raises:
        MultiError: listing every missing setting.
    """
    config = replace(config or ValidatorConfig(), **fields)
    err = MultiError.from_errors(config.violations(client))
    if err is not None:
        raise err
    return StatusValidator(client, config)


class StatusValidator(Validator):
    """Succeeds once every job reported for the ref has succeeded.

    The job running the gatekeeper itself counts as successful whatever its
    reported state, since it cannot finish before this validator does.
    """

    def __init__(self, client: GitHubClient, config: ValidatorConfig) -> None:
        self._client = client
        self._config = config

    @property
    def name(self) -> str:
        return self._config.self_job_name

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    async def validate(self) -> ValidationResult:
        job_statuses = await self.list_job_statuses()

        total_jobs: list[str] = []
        complete_jobs: list[str] = []
        success_count = 0
        for status in job_statuses:
            if status.job == self._config.self_job_name:
                success_count += 1
                continue
            total_jobs.append(status.job)
            if status.state == JobState.SUCCESS:
                complete_jobs.append(status.job)
                success_count += 1

        result = ValidationResult(
            total_jobs=tuple(total_jobs),
            complete_jobs=tuple(complete_jobs),
            succeeded=success_count == len(job_statuses),
        )
        logger.info(
            "Validated %s/%s@%s: %d of %d jobs complete",
            self._config.owner,
            self._config.repo,
            self._config.ref,
            len(complete_jobs),
            len(total_jobs),
        )
        return result

    async def list_job_statuses(self) -> list[JobStatus]:
        """Fetch commit statuses then check runs, normalized in that order.

        Raises:
            InvalidCombinedStatusResponseError: a status lacks context or state.
            InvalidCheckRunResponseError: a check run lacks name or status.
        """
        cfg = self._config
        combined, _ = await self._client.get_combined_status(
            cfg.owner, cfg.repo, cfg.ref, ListOptions()
        )

        job_statuses = []
        for s in combined.statuses:
            if s.context is None or s.state is None:
                raise InvalidCombinedStatusResponseError(s.context, s.state)
            job_statuses.append(JobStatus(job=s.context, state=s.state))

        runs, _ = await self._client.list_check_runs_for_ref(
            cfg.owner, cfg.repo, cfg.ref, ListCheckRunsOptions()
        )

        for run in runs.check_runs:
            if run.name is None or run.status is None:
                raise InvalidCheckRunResponseError(run.name, run.status)
            job_statuses.append(JobStatus(job=run.name, state=_check_run_state(run.status, run.conclusion)))

        logger.debug(
            "Fetched %d commit statuses and %d check runs for %s",
            len(combined.statuses),
            len(runs.check_runs),
            cfg.ref,
        )
        return job_statuses


def _check_run_state(status: str, conclusion: str | None) -> JobState:
    if status != CHECK_RUN_COMPLETED_STATUS:
        return JobState.PENDING
    if conclusion in SUCCESSFUL_CONCLUSIONS:
        return JobState.SUCCESS
    return JobState.ERROR
