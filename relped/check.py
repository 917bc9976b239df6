"""check: consistency checks across relatedness, parentage and demographics.

Validates, before any graph is built:
- Sires recorded as male and dams as female in the demographics
- Every parentage child, sire and dam present in the relatedness data
- Every demographics ID present in the relatedness data

All problems are collected so they can be fixed in one pass.
"""
from __future__ import annotations

from typing import Any, List, Optional
import logging

from .errors import InputConsistencyError
from .models import Sex


class CheckIssue:
    """Represents an input consistency issue."""

    def __init__(self, severity: str, category: str, message: str, name: Optional[str] = None):
        self.severity = severity  # "error", "warning", "info"
        self.category = category  # "sex", "missing"
        self.message = message
        self.name = name

    def __repr__(self):
        loc = f" [{self.name}]" if self.name is not None else ""
        return f"[{self.severity.upper()}] {self.category}: {self.message}{loc}"


def check_inputs(relatedness: Any, parentage: Any = None, demographics: Any = None) -> List[CheckIssue]:
    """Run every check and return the issues found."""
    issues = []
    if parentage is not None and demographics is not None:
        issues.extend(_check_parent_sexes(parentage, demographics))
    known = set(relatedness.indvs())
    if parentage is not None:
        issues.extend(_check_parentage_ids(parentage, known))
    if demographics is not None:
        issues.extend(_check_demographics_ids(demographics, known))
    return issues


def _check_parent_sexes(parentage: Any, demographics: Any) -> List[CheckIssue]:
    issues = []
    for child in parentage.indvs():
        sire = parentage.sire(child)
        sex = demographics.sex(sire) if sire else None
        if sex is not None and sex != Sex.MALE:
            issues.append(CheckIssue(
                severity="error",
                category="sex",
                message=f"Sire {sire} for ID {child} should be male, but is stated as {sex} in demographics",
                name=sire,
            ))
        dam = parentage.dam(child)
        sex = demographics.sex(dam) if dam else None
        if sex is not None and sex != Sex.FEMALE:
            issues.append(CheckIssue(
                severity="error",
                category="sex",
                message=f"Dam {dam} for ID {child} should be female, but is stated as {sex} in demographics",
                name=dam,
            ))
    return issues


def _check_parentage_ids(parentage: Any, known: set) -> List[CheckIssue]:
    issues = []
    for child in parentage.indvs():
        if child not in known:
            issues.append(CheckIssue("error", "missing", f"No relatedness data for parentage entry {child}", name=child))
        for role, parent in (("Sire", parentage.sire(child)), ("Dam", parentage.dam(child))):
            if parent and parent not in known:
                issues.append(CheckIssue(
                    "error", "missing",
                    f"{role} {parent} of parentage ID {child} not found in relatedness data",
                    name=parent,
                ))
    return issues


def _check_demographics_ids(demographics: Any, known: set) -> List[CheckIssue]:
    return [
        CheckIssue("error", "missing", f"No relatedness data for demographics entry {name}", name=name)
        for name in demographics.indvs()
        if name not in known
    ]


def ensure_consistent(relatedness: Any, parentage: Any = None, demographics: Any = None) -> List[CheckIssue]:
    """Raise InputConsistencyError if any error-level issue is found.

    Returns the (non-error) issues otherwise.
    """
    issues = check_inputs(relatedness, parentage, demographics)
    if any(i.severity == "error" for i in issues):
        raise InputConsistencyError(issues)
    return issues


def log_issues(issues: List[CheckIssue]) -> None:
    """Log issues at the level matching their severity."""
    levels = {"error": logging.ERROR, "warning": logging.WARNING, "info": logging.INFO}
    for issue in issues:
        logging.log(levels.get(issue.severity, logging.WARNING), "%r", issue)
