"""Abstract validator and status interfaces consumed by the poll loop."""

from abc import ABC, abstractmethod


class Status(ABC):
    """Outcome of a single validation round."""

    @abstractmethod
    def is_success(self) -> bool:
        ...

    @abstractmethod
    def detail(self) -> str:
        """Human readable summary for log output."""
        ...


class Validator(ABC):
    """Decides whether one aspect of a ref is ready to merge."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def validate(self) -> Status:
        """Run one validation round.

        Returns a status for "done" and "not done yet" alike; raises only
        when the outcome could not be determined.
        """
        ...
