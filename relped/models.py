from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Sex(Enum):
    UNKNOWN = "U"
    FEMALE = "F"
    MALE = "M"

    def __str__(self) -> str:
        return self.name.title()

    @staticmethod
    def from_code(code: Optional[str]) -> Optional["Sex"]:
        """Parse F/FEMALE, M/MALE, U/UNKNOWN (any case); None if unrecognised."""
        if code is None:
            return None
        txt = code.strip().upper()
        if txt in ("F", "FEMALE"):
            return Sex.FEMALE
        if txt in ("M", "MALE"):
            return Sex.MALE
        if txt in ("U", "UNKNOWN"):
            return Sex.UNKNOWN
        return None


@dataclass
class Individual:
    name: str
    # age in years; None when not provided (0 means born this year)
    age: Optional[int] = None
    sex: Sex = Sex.UNKNOWN
    dam: Optional[str] = None
    sire: Optional[str] = None

    def parents(self) -> List[str]:
        return [p for p in (self.dam, self.sire) if p]
