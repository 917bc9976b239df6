"""Pairwise relatedness tables.

Two layouts are understood:

    three-column   ID1,ID2,Rel        Rel is a coefficient or PO/FS/HS/U
    ml-relate      Ind1,Ind2,R,LnL.R.,U,HS,FS,PO,Relationships,Relatedness

Lookups are symmetric: ``relatedness("A", "B") == relatedness("B", "A")``.
Missing pairs are unrelated.
"""
from __future__ import annotations
from typing import Dict, FrozenSet, IO, Iterable, List, Optional, Tuple
import csv
import logging
import math

from ..degree import (
    Degree,
    to_relational_degree,
    categorical_to_degree,
    category_relatedness,
    is_category,
)

ML_RELATE_COLUMNS = 10

# ML-Relate's own category scale: half-sibs are reported a link further than
# full sibs.
ML_RELATE_DEGREES: Dict[str, Degree] = {
    "PO": Degree.FIRST,
    "FS": Degree.SECOND,
    "HS": Degree.THIRD,
    "U": Degree.UNRELATED,
}


def normalize(values: Iterable[float]) -> List[float]:
    """Min-max scale ``values`` into [0, 1].

    0 and 1 always take part in the bounds, so values already inside the unit
    interval come back unchanged.
    """
    values = list(values)
    lo = min(values + [0.0, 1.0])
    hi = max(values + [0.0, 1.0])
    return [(v - lo) / (hi - lo) for v in values]


def _parse_float(text: str) -> float:
    val = float(text)
    if math.isnan(val) or math.isinf(val):
        raise ValueError(text)
    return val


class RelatednessTable:
    def __init__(self) -> None:
        self._indvs: Dict[str, None] = {}
        self._pairs: Dict[FrozenSet[str], Tuple[float, Degree]] = {}

    def add(self, a: str, b: str, value: float, degree: Optional[Degree] = None) -> bool:
        """Record a pair; the degree is derived from ``value`` when not given.

        Returns False (and logs) when the pair is already present.
        """
        key = frozenset((a, b))
        if key in self._pairs:
            logging.warning("Duplicate relatedness entry for %s/%s ignored", a, b)
            return False
        value = max(float(value), 0.0)
        if degree is None:
            degree = to_relational_degree(value)
        self._indvs.setdefault(a)
        self._indvs.setdefault(b)
        self._pairs[key] = (value, Degree(degree))
        return True

    def indvs(self) -> List[str]:
        return list(self._indvs)

    def relatedness(self, a: str, b: str) -> float:
        entry = self._pairs.get(frozenset((a, b)))
        return entry[0] if entry else 0.0

    def rel_distance(self, a: str, b: str) -> Degree:
        entry = self._pairs.get(frozenset((a, b)))
        return entry[1] if entry else Degree.UNRELATED

    def __len__(self) -> int:
        return len(self._pairs)

    def _rescale(self, keys: List[FrozenSet[str]], rederive: bool) -> None:
        scaled = normalize(self._pairs[k][0] for k in keys)
        for key, val in zip(keys, scaled):
            degree = to_relational_degree(val) if rederive else self._pairs[key][1]
            self._pairs[key] = (val, degree)

    @classmethod
    def read_three_column(cls, fh: IO[str], normalize: bool = False) -> "RelatednessTable":
        table = cls()
        numeric: List[FrozenSet[str]] = []
        for lineno, row in enumerate(csv.DictReader(fh), start=2):
            a = (row.get("ID1") or "").strip()
            b = (row.get("ID2") or "").strip()
            rel = (row.get("Rel") or "").strip()
            if not a or not b:
                logging.warning("Line %d: missing ID, row skipped", lineno)
                continue
            if is_category(rel):
                table.add(a, b, category_relatedness(rel), categorical_to_degree(rel))
                continue
            try:
                val = _parse_float(rel)
            except ValueError:
                logging.warning("Line %d: relatedness %r not understood, treating %s/%s as unrelated", lineno, rel, a, b)
                val = 0.0
            if table.add(a, b, val):
                numeric.append(frozenset((a, b)))
        if normalize and numeric:
            table._rescale(numeric, rederive=True)
        return table

    @classmethod
    def read_ml_relate(cls, fh: IO[str], normalize: bool = False) -> "RelatednessTable":
        table = cls()
        reader = csv.reader(fh)
        next(reader, None)  # header
        for lineno, row in enumerate(reader, start=2):
            if len(row) != ML_RELATE_COLUMNS:
                logging.warning("Line %d: expected %d columns, got %d; row skipped", lineno, ML_RELATE_COLUMNS, len(row))
                continue
            a, b, cat = row[0].strip(), row[1].strip(), row[2].strip().upper()
            if cat not in ML_RELATE_DEGREES:
                logging.warning("Line %d: relationship %r not understood, treating %s/%s as unrelated", lineno, cat, a, b)
            try:
                val = _parse_float(row[9])
            except ValueError:
                logging.warning("Line %d: relatedness %r not understood, using 0", lineno, row[9])
                val = 0.0
            table.add(a, b, val, ML_RELATE_DEGREES.get(cat, Degree.UNRELATED))
        if normalize and table._pairs:
            table._rescale(list(table._pairs), rederive=False)
        return table
