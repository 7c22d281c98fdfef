from __future__ import annotations

from typing import Iterable


class PeakvizError(Exception):
    """Base error for chart building failures."""


class ReadingsError(PeakvizError):
    """Raised when the usage table cannot be turned into a chart."""

    def __init__(self, message: str, problems: Iterable[str] = ()) -> None:
        self.problems = list(problems)
        if self.problems:
            message = f"{message}: " + "; ".join(self.problems)
        super().__init__(message)
