import pytest

from relped.check import check_inputs, ensure_consistent
from relped.errors import InputConsistencyError
from relped.io import Demographics, Parentage, RelatednessTable
from relped.models import Sex


def _rels():
    t = RelatednessTable()
    t.add("A", "B", 0.5)
    t.add("B", "C", 0.5)
    return t


def test_consistent_inputs():
    par = Parentage()
    par.add("C", sire="A", dam="B")
    dem = Demographics()
    dem.add("A", Sex.MALE, 10)
    dem.add("B", Sex.FEMALE, 9)
    assert check_inputs(_rels(), par, dem) == []
    assert ensure_consistent(_rels(), par, dem) == []


def test_parent_sex_mismatch():
    par = Parentage()
    par.add("C", sire="A", dam="B")
    dem = Demographics()
    dem.add("A", Sex.FEMALE)
    dem.add("B", Sex.UNKNOWN)
    issues = check_inputs(_rels(), par, dem)
    assert [i.category for i in issues] == ["sex", "sex"]
    assert "should be male" in issues[0].message
    assert "should be female" in issues[1].message


def test_missing_ids_all_reported():
    par = Parentage()
    par.add("X", sire="Y", dam="A")
    dem = Demographics()
    dem.add("Z")
    issues = check_inputs(_rels(), par, dem)
    assert sorted(i.name for i in issues) == ["X", "Y", "Z"]
    assert all(i.category == "missing" for i in issues)

    with pytest.raises(InputConsistencyError) as exc:
        ensure_consistent(_rels(), par, dem)
    assert len(exc.value.issues) == 3
    assert "3 input inconsistencies" in str(exc.value)


def test_issue_repr():
    par = Parentage()
    par.add("X", dam="A")
    (issue,) = check_inputs(_rels(), par)
    assert repr(issue).startswith("[ERROR] missing:")
    assert repr(issue).endswith("[X]")
