"""Polling loop — re-runs validators until every one reports success."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from gatekeeper.errors.exceptions import ValidationTimeoutError
from gatekeeper.validators.base import Status, Validator

logger = logging.getLogger(__name__)

# Defaults in seconds
DEFAULT_INTERVAL = 5.0
DEFAULT_TIMEOUT = 600.0


async def validate_all(validators: Sequence[Validator]) -> tuple[bool, list[Status]]:
    """Run each validator once, sequentially. Returns (all succeeded, statuses)."""
    statuses = []
    for validator in validators:
        status = await validator.validate()
        logger.info("%s: %s", validator.name, status.detail())
        statuses.append(status)
    return all(s.is_success() for s in statuses), statuses


async def poll_until_complete(
    validators: Sequence[Validator],
    *,
    interval: float = DEFAULT_INTERVAL,
    timeout: float = DEFAULT_TIMEOUT,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> list[Status]:
    """Poll *validators* every *interval* seconds until all succeed.

    Errors raised by a validator end the loop unchanged; there are no
    retries.

    Raises:
        ValidationTimeoutError: not every validator succeeded within *timeout*.
    """
    attempt = 0
    try:
        async with asyncio.timeout(timeout) as deadline:
            while True:
                attempt += 1
                ok, statuses = await validate_all(validators)
                if ok:
                    logger.info("All validators succeeded after %d attempt(s)", attempt)
                    return statuses
                logger.debug("Attempt %d incomplete, retrying in %.1fs", attempt, interval)
                await sleep(interval)
    except TimeoutError:
        if not deadline.expired():
            raise
        logger.error("Validation timed out after %d attempt(s)", attempt)
        raise ValidationTimeoutError(timeout) from None
