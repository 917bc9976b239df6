"""Recorded parentage read from ``ID,Sire,Dam``.

``0``, ``?`` and empty cells mean no recorded parent.
"""
from __future__ import annotations
from typing import Dict, IO, List, Optional, Set
import csv
import logging

MISSING_PARENT = ("", "0", "?")


class Parentage:
    def __init__(self) -> None:
        self._sires: Dict[str, str] = {}
        self._dams: Dict[str, str] = {}
        self._children: Dict[str, None] = {}
        self._seen: Set[str] = set()

    def add(self, child: str, sire: Optional[str] = None, dam: Optional[str] = None) -> bool:
        """Record the parents of ``child``; a repeated child is logged and ignored."""
        if child in self._seen:
            logging.warning("Duplicate parentage entry for %s ignored", child)
            return False
        self._seen.add(child)
        if sire:
            self._sires[child] = sire
            self._children.setdefault(child)
        if dam:
            self._dams[child] = dam
            self._children.setdefault(child)
        return True

    def indvs(self) -> List[str]:
        """Children with at least one recorded parent, in file order."""
        return list(self._children)

    def sire(self, name: str) -> Optional[str]:
        return self._sires.get(name)

    def dam(self, name: str) -> Optional[str]:
        return self._dams.get(name)

    @classmethod
    def read_three_column(cls, fh: IO[str]) -> "Parentage":
        par = cls()
        for lineno, row in enumerate(csv.DictReader(fh), start=2):
            child = (row.get("ID") or "").strip()
            sire = (row.get("Sire") or "").strip()
            dam = (row.get("Dam") or "").strip()
            if not child:
                logging.warning("Line %d: no ID (Sire: %r, Dam: %r), row skipped", lineno, sire, dam)
                continue
            par.add(
                child,
                sire=None if sire in MISSING_PARENT else sire,
                dam=None if dam in MISSING_PARENT else dam,
            )
        return par
