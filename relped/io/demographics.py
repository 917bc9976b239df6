"""Demographics: sex and age per individual, read from ``ID,Sex,Birth Year``."""
from __future__ import annotations
from datetime import date
from typing import Dict, IO, List, Optional
import csv
import logging

from ..models import Sex


def age_from_birth_year(current_year: int, birth_year: int) -> int:
    """Whole years since ``birth_year``; never negative."""
    return max(current_year - birth_year, 0)


class Demographics:
    def __init__(self) -> None:
        self._ages: Dict[str, Optional[int]] = {}
        self._sexes: Dict[str, Sex] = {}

    def add(self, name: str, sex: Sex = Sex.UNKNOWN, age: Optional[int] = None) -> bool:
        """Record one individual; a repeated ID is logged and ignored."""
        if name in self._sexes:
            logging.warning("Duplicate demographics entry for %s ignored", name)
            return False
        self._sexes[name] = sex
        self._ages[name] = age
        return True

    def indvs(self) -> List[str]:
        return list(self._sexes)

    def age(self, name: str) -> Optional[int]:
        return self._ages.get(name)

    def sex(self, name: str) -> Optional[Sex]:
        return self._sexes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._sexes

    @classmethod
    def read_three_column(cls, fh: IO[str], year: Optional[int] = None) -> "Demographics":
        """Read demographics; ages are relative to ``year`` (default: this year)."""
        year = year if year is not None else date.today().year
        dem = cls()
        for lineno, row in enumerate(csv.DictReader(fh), start=2):
            name = (row.get("ID") or "").strip()
            if not name:
                logging.warning("Line %d: missing ID, row skipped", lineno)
                continue
            raw_sex = row.get("Sex") or ""
            sex = Sex.from_code(raw_sex)
            if sex is None:
                logging.warning("Line %d: sex %r for %s not understood; setting sex to Unknown", lineno, raw_sex, name)
                sex = Sex.UNKNOWN
            raw_year = (row.get("Birth Year") or "").strip()
            age = None
            if raw_year:
                try:
                    age = age_from_birth_year(year, int(raw_year))
                except ValueError:
                    logging.warning("Line %d: birth year %r for %s not understood; age left unknown", lineno, raw_year, name)
            else:
                logging.warning("Line %d: no birth year for %s; age left unknown", lineno, name)
            dem.add(name, sex=sex, age=age)
        return dem
