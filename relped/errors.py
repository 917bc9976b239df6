"""Exception types raised by relped."""
from __future__ import annotations
from typing import List, Any


class RelpedError(Exception):
    """Base class for relped errors."""


class UnrelatedPairError(RelpedError, ValueError):
    """A relational path was requested for a pair with no estimable degree."""

    def __init__(self, from_name: str, to_name: str) -> None:
        super().__init__(f"{from_name!r} and {to_name!r} are unrelated, no path possible")
        self.from_name = from_name
        self.to_name = to_name


class InvalidWeightError(RelpedError, ValueError):
    """An edge weight was zero, negative or not a finite number."""


class GraphStateError(RelpedError, RuntimeError):
    """A pruned graph was asked to change."""


class InputConsistencyError(RelpedError):
    """Relatedness, parentage and demographics inputs disagree.

    ``issues`` holds every problem found so they can be fixed in one pass.
    """

    def __init__(self, issues: List[Any]) -> None:
        self.issues = list(issues)
        lines = "\n".join(str(i) for i in self.issues)
        super().__init__(f"{len(self.issues)} input inconsistencies found:\n{lines}")
