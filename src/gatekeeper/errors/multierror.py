"""Aggregate error — reports every violation at once instead of the first."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gatekeeper.errors.exceptions import GatekeeperError


class MultiError(GatekeeperError):
    """An ordered collection of errors raised as one.

    Callers can enumerate ``errors`` (or iterate the instance) to inspect
    each violation individually.
    """

    def __init__(self, errors: Iterable[BaseException]):
        self.errors: tuple[BaseException, ...] = tuple(errors)
        super().__init__(
            "MULTIPLE_ERRORS",
            self._format(self.errors),
            [str(e) for e in self.errors],
        )

    @classmethod
    def from_errors(cls, errors: Iterable[BaseException]) -> MultiError | None:
        """Return an aggregate of *errors*, or None when there are none."""
        collected = list(errors)
        if not collected:
            return None
        return cls(collected)

    @staticmethod
    def _format(errors: tuple[BaseException, ...]) -> str:
        lines = [f"{len(errors)} error(s) occurred:"]
        lines.extend(f"\t* {e}" for e in errors)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)
