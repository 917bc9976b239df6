"""CSV readers for relatedness, demographics and parentage inputs."""
from __future__ import annotations

from .relatedness import RelatednessTable, normalize
from .demographics import Demographics
from .parentage import Parentage

__all__ = ["RelatednessTable", "normalize", "Demographics", "Parentage"]
