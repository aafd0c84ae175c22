"""Error collection passed through the transformer pipeline."""

from collections.abc import Iterator
from dataclasses import dataclass

ERROR_CANNOT_LOAD_TRANSFORMER = "CannotLoadTransformer"


@dataclass(frozen=True)
class Error:
    """A non-fatal problem reported by a pipeline stage."""

    code: str
    message: str


class ErrorCollection:
    """Ordered collection of errors collected during optimization."""

    def __init__(self) -> None:
        self._errors: list[Error] = []

    def add(self, error: Error) -> None:
        self._errors.append(error)

    def count(self) -> int:
        return len(self._errors)

    def has(self, code: str) -> bool:
        """Return True if any collected error carries the given code."""
        return any(error.code == code for error in self._errors)

    def __iter__(self) -> Iterator[Error]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)
