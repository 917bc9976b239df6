import io

import pytest

from relped.build import build_graph
from relped.degree import Degree
from relped.io import Demographics, Parentage, RelatednessTable
from relped.models import Sex
from relped.pedigree import render_pedigree


def _table(*rows):
    t = RelatednessTable()
    for row in rows:
        t.add(*row)
    return t


def test_concrete_scenario(names):
    rels = _table(("A", "B", 0.5), ("A", "C", 0.25))
    g = build_graph(rels, max_distance=9, name_factory=names)

    assert sorted(g.nodes()) == ["A", "B", "C", "U1"]
    assert g.number_of_edges() == 3
    assert g.weight("A", "B") == pytest.approx(0.5)
    assert g.weight("A", "U1") == pytest.approx(0.125)
    assert g.weight("U1", "C") == pytest.approx(0.125)

    pruned = g.prune_to_shortest()
    assert sorted(pruned.nodes()) == sorted(g.nodes())
    assert pruned.number_of_edges() == 3

    dot, unmapped = render_pedigree(pruned, rels.indvs())
    assert unmapped == []
    assert dot.count("fontname=Sans") == 4
    assert dot.count("->") == 3


def test_unrelated_individual_is_unmapped(names):
    rels = _table(("A", "B", 0.5), ("A", "C", 0.0), ("B", "C", -0.2))
    pruned = build_graph(rels, name_factory=names).prune_to_shortest()
    _, unmapped = render_pedigree(pruned, rels.indvs())
    assert unmapped == ["C"]


def test_max_distance_cutoff(names):
    rels = _table(("A", "B", 0.5), ("A", "C", 0.125))
    g = build_graph(rels, max_distance=2, name_factory=names)
    assert "C" not in g
    _, unmapped = render_pedigree(g.prune_to_shortest(), rels.indvs())
    assert unmapped == ["C"]


def test_parentage_and_demographics_applied(names):
    rels = _table(("S", "C", 0.125), ("D", "C", 0.5))
    par = Parentage()
    par.add("C", sire="S", dam="D")
    dem = Demographics()
    dem.add("S", Sex.MALE, 12)
    dem.add("D", Sex.FEMALE, 9)
    dem.add("C", Sex.UNKNOWN, 1)

    g = build_graph(rels, parentage=par, demographics=dem, name_factory=names)
    assert g.number_of_edges() == 2
    assert {(e.tail, e.head) for e in g.edges()} == {("S", "C"), ("D", "C")}
    assert all(e.known for e in g.edges())
    assert g.info("S").sex is Sex.MALE
    assert g.info("C").age == 1


def test_degree_without_relatedness_is_skipped(caplog, names):
    rels = _table(("A", "B", 0.0, Degree.FIRST))
    g = build_graph(rels, name_factory=names)
    assert g.number_of_edges() == 0
    assert "skipping" in caplog.text


def test_ml_relate_half_sibs_are_third_degree(names):
    text = (
        "Ind1,Ind2,R,LnL.R.,U,HS,FS,PO,Relationships,Relatedness\n"
        "A,B,HS,-10.2,-12.1,-10.2,-11.0,-13.0,HS,0.21\n"
    )
    rels = RelatednessTable.read_ml_relate(io.StringIO(text))
    g = build_graph(rels, name_factory=names)
    assert sorted(g.nodes()) == ["A", "B", "U1", "U2"]
    assert sum(g.weight(a, b) for a, b in (("A", "U1"), ("U1", "U2"), ("U2", "B"))) == pytest.approx(0.21)


def test_individuals_without_demographics_add_no_nodes(names):
    rels = _table(("A", "B", 0.5), ("A", "D", 0.0))
    dem = Demographics()
    dem.add("A", Sex.FEMALE, 4)
    g = build_graph(rels, demographics=dem, name_factory=names)
    assert sorted(g.nodes()) == ["A", "B"]
    assert g.info("A").sex is Sex.FEMALE
