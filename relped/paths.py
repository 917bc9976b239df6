"""Weighted paths inserted into the pedigree graph.

A path is an ordered list of individual names plus one weight per
consecutive pair. Three flavours exist:

    EqualWeightPath(names, weight)           every edge gets ``weight``
    FractionalWeightPath(names, total)       ``total`` split evenly over edges
    RelationalWeightPath(a, b, degree, w)    ``degree - 1`` unknown individuals
                                             inserted between a and b, ``w``
                                             split evenly over ``degree`` edges

Unknown individuals get fresh names from a "name factory" (any zero-argument
callable returning a string). The default draws from uuid4 so names never
collide across a run; tests pass ``SequentialNames()`` for predictable names.
"""
from __future__ import annotations
from typing import Callable, List, Optional, Sequence
import itertools
import uuid

from .degree import Degree
from .errors import UnrelatedPairError

NameFactory = Callable[[], str]

UNKNOWN_PREFIX = "unk_"


def new_unknown_name() -> str:
    """Return a globally unique name for an unknown individual."""
    return UNKNOWN_PREFIX + uuid.uuid4().hex


class SequentialNames:
    """Name factory yielding ``U1, U2, ...`` (or another prefix)."""

    def __init__(self, prefix: str = "U", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


class Path:
    """Base class: ``names()`` has at least two entries, ``weights()`` one fewer."""

    def __init__(self, names: Sequence[str]) -> None:
        names = list(names)
        if len(names) < 2:
            raise ValueError(f"a path needs at least two names, got {names!r}")
        self._names = names

    def names(self) -> List[str]:
        return list(self._names)

    def weights(self) -> List[float]:
        raise NotImplementedError

    def total_weight(self) -> float:
        return sum(self.weights())

    def __len__(self) -> int:
        return len(self._names) - 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._names!r}, weights={self.weights()!r})"


class EqualWeightPath(Path):
    def __init__(self, names: Sequence[str], weight: float) -> None:
        super().__init__(names)
        self.weight = float(weight)

    def weights(self) -> List[float]:
        return [self.weight] * (len(self._names) - 1)


class FractionalWeightPath(Path):
    def __init__(self, names: Sequence[str], total_weight: float) -> None:
        super().__init__(names)
        self.total = float(total_weight)

    def weights(self) -> List[float]:
        n = len(self._names) - 1
        return [self.total / n] * n


class RelationalWeightPath(FractionalWeightPath):
    """Path of ``degree`` edges between two individuals.

    Raises UnrelatedPairError when ``degree`` is UNRELATED: no path can
    represent an unrelated pair, and a zero-length stand-in would corrupt
    shortest-path costs.
    """

    def __init__(
        self,
        from_name: str,
        to_name: str,
        degree: Degree,
        weight: float,
        name_factory: Optional[NameFactory] = None,
    ) -> None:
        degree = Degree(degree)
        if degree == Degree.UNRELATED:
            raise UnrelatedPairError(from_name, to_name)
        fresh = name_factory or new_unknown_name
        unknowns = [fresh() for _ in range(int(degree) - 1)]
        super().__init__([from_name, *unknowns, to_name], weight)
        self.degree = degree

    def unknowns(self) -> List[str]:
        return self._names[1:-1]
