"""gatekeeper CLI — block until every CI job on a ref has succeeded."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from gatekeeper.config import Settings, split_repository
from gatekeeper.errors.exceptions import ConfigurationError, GatekeeperError
from gatekeeper.errors.multierror import MultiError
from gatekeeper.github.http_client import HttpxGitHubClient
from gatekeeper.logging_config import bind_run_context, clear_run_context, configure_logging
from gatekeeper.poller import poll_until_complete
from gatekeeper.validators.status import ValidatorConfig, create_validator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _resolve_owner_repo(args: argparse.Namespace, settings: Settings) -> tuple[str, str]:
    """Resolve owner and repo independently.

    Each is taken from the first source that has it: --owner/--repo,
    --repository, GATEKEEPER_OWNER/GATEKEEPER_REPO, then GITHUB_REPOSITORY.
    A full name is only split while a field is still missing.
    """
    owner, repo = args.owner or "", args.repo or ""
    if not (owner and repo) and args.repository:
        flag_owner, flag_repo = split_repository(args.repository)
        owner, repo = owner or flag_owner, repo or flag_repo
    owner, repo = owner or settings.owner, repo or settings.repo
    github_repository = os.environ.get("GITHUB_REPOSITORY")
    if not (owner and repo) and github_repository:
        env_owner, env_repo = split_repository(github_repository)
        owner, repo = owner or env_owner, repo or env_repo
    return owner, repo


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    owner, repo = _resolve_owner_repo(args, settings)
    config = ValidatorConfig(
        owner=owner,
        repo=repo,
        ref=args.ref or settings.ref or os.environ.get("GITHUB_SHA", ""),
        self_job_name=args.self_job_name or settings.self_job_name,
    )

    async with HttpxGitHubClient(
        token=args.token or settings.token or None,
        base_url=settings.api_url,
        timeout=settings.request_timeout_seconds,
    ) as client:
        validator = create_validator(client, config)
        bind_run_context(config.owner, config.repo, config.ref)
        try:
            await poll_until_complete(
                [validator],
                interval=args.interval if args.interval is not None else settings.interval_seconds,
                timeout=args.timeout if args.timeout is not None else settings.timeout_seconds,
            )
        finally:
            clear_run_context()
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    """Poll commit statuses and check runs for a ref until they are all green."""
    settings = Settings()
    configure_logging(
        args.log_level or settings.log_level,
        json_output=args.json_logs or settings.json_logs,
    )

    try:
        return asyncio.run(_run(args, settings))
    except (MultiError, ConfigurationError) as exc:
        logger.error("Invalid configuration:\n%s", exc)
        return EXIT_CONFIG
    except GatekeeperError as exc:
        logger.error("Validation failed [%s]: %s", exc.code, exc.message)
        return EXIT_FAILED
    except Exception:
        logger.exception("Validation failed with an unexpected error")
        return EXIT_FAILED


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="gatekeeper",
        description="Merge gatekeeper — wait until all CI jobs for a ref succeed",
    )
    sub = parser.add_subparsers(dest="command")

    # validate
    p_validate = sub.add_parser("validate", help="Poll until every job on the ref has succeeded")
    p_validate.add_argument("--token", help="GitHub token (default: $GATEKEEPER_TOKEN)")
    p_validate.add_argument("--repository", help="owner/name (default: $GITHUB_REPOSITORY)")
    p_validate.add_argument("--owner", help="Repository owner (overrides --repository)")
    p_validate.add_argument("--repo", help="Repository name (overrides --repository)")
    p_validate.add_argument("--ref", help="Commit SHA, branch or tag (default: $GITHUB_SHA)")
    p_validate.add_argument("--self", dest="self_job_name",
                            help="Name of the job running the gatekeeper; never waited on")
    p_validate.add_argument("--interval", type=float, help="Seconds between polls (default: 5)")
    p_validate.add_argument("--timeout", type=float, help="Overall timeout in seconds (default: 600)")
    p_validate.add_argument("--log-level", help="debug/info/warning/error (default: info)")
    p_validate.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_FAILED)

    commands = {
        "validate": cmd_validate,
    }
    sys.exit(commands[args.command](args))


if __name__ == "__main__":
    main()
