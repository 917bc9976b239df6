"""Relational degree helpers.

Converts a relatedness coefficient, or a categorical relationship code, into
the discrete number of generational links separating two individuals.

APIs:
    to_relational_degree(relatedness) -> Degree
    categorical_to_degree(code) -> Degree

Examples:
    to_relational_degree(0.5)   -> Degree.FIRST
    to_relational_degree(0.25)  -> Degree.SECOND
    to_relational_degree(0.125) -> Degree.THIRD
    to_relational_degree(0)     -> Degree.UNRELATED

Half-relatedness halves with each additional link, so the degree is
``round(log2(1 / relatedness))``. Ninth degree is the practical ceiling of
relatedness-based distance estimation; anything computed outside 1..9 is
reported as unrelated.
"""
from __future__ import annotations
from enum import IntEnum
from typing import Any, Dict
import math


class Degree(IntEnum):
    UNRELATED = 0
    FIRST = 1  # parent-offspring
    SECOND = 2  # full or half siblings, grandparent
    THIRD = 3
    FOURTH = 4
    FIFTH = 5
    SIXTH = 6
    SEVENTH = 7
    EIGHTH = 8
    NINTH = 9


MAX_DEGREE = Degree.NINTH

# Half-sibs map to SECOND like full sibs: both are two links apart through
# one or two shared parents.
CATEGORY_DEGREES: Dict[str, Degree] = {
    "PO": Degree.FIRST,
    "FS": Degree.SECOND,
    "HS": Degree.SECOND,
    "U": Degree.UNRELATED,
}

# Weight carried by a pair whose input only gives a category.
CATEGORY_RELATEDNESS: Dict[str, float] = {
    "PO": 0.5,
    "FS": 0.25,
    "HS": 0.125,
    "U": 0.0,
}


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def to_relational_degree(relatedness: Any) -> Degree:
    """Return the relational degree for a relatedness coefficient.

    Non-positive, NaN and non-numeric values are unrelated. A computed degree
    outside FIRST..NINTH is also unrelated rather than an out-of-range value.
    """
    try:
        r = float(relatedness)
    except (TypeError, ValueError):
        return Degree.UNRELATED
    if math.isnan(r) or r <= 0:
        return Degree.UNRELATED
    level = _round_half_up(math.log2(1.0 / r))
    if level < Degree.FIRST or level > MAX_DEGREE:
        return Degree.UNRELATED
    return Degree(level)


def _code(code: Any) -> str:
    return str(code).strip().upper() if code is not None else ""


def is_category(code: Any) -> bool:
    return _code(code) in CATEGORY_DEGREES


def categorical_to_degree(code: Any) -> Degree:
    """Map a categorical relationship code (PO, FS, HS, U) to its degree.

    Unrecognised codes are unrelated; callers decide whether to log them.
    """
    return CATEGORY_DEGREES.get(_code(code), Degree.UNRELATED)


def category_relatedness(code: Any) -> float:
    return CATEGORY_RELATEDNESS.get(_code(code), 0.0)
