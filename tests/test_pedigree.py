from relped.graph import PedigreeGraph
from relped.models import Sex
from relped.paths import EqualWeightPath
from relped.pedigree import Pedigree, render_pedigree


def _line(dot, name):
    return next(line for line in dot.splitlines() if line.strip().startswith(f"{name} ["))


def test_graph_attributes():
    dot = Pedigree().source
    assert dot.startswith("digraph pedigree {")
    for attr in ("rankdir=TB", "splines=ortho", "ratio=auto", "newrank=true", "mincross=2.0"):
        assert attr in dot
    assert "dir=none" not in dot


def test_undirected_and_arrowless():
    assert Pedigree(directed=False).source.startswith("graph pedigree {")
    assert "edge [dir=none]" in Pedigree(remove_edge_arrows=True).source


def test_known_individuals_shaped_by_sex():
    ped = Pedigree()
    ped.add_known_indv("M1", Sex.MALE)
    ped.add_known_indv("F1", Sex.FEMALE)
    ped.add_known_indv("X1")
    dot = str(ped)
    assert "shape=box" in _line(dot, "M1")
    assert "shape=ellipse" in _line(dot, "F1")
    assert "shape=record" in _line(dot, "X1")
    for name in ("M1", "F1", "X1"):
        line = _line(dot, name)
        assert "fillcolor=yellow" in line
        assert "style=filled" in line
        assert "fontname=Sans" in line


def test_unknown_individual_is_blank_diamond():
    ped = Pedigree()
    ped.add_unknown_indv("U1")
    line = _line(ped.source, "U1")
    assert 'label=""' in line
    assert "shape=diamond" in line
    assert "style=dashed" in line


def test_relationship_styles():
    ped = Pedigree()
    ped.add_known_rel("A", "B")
    ped.add_unknown_rel("B", "U1")
    dot = ped.source
    assert "A -> B [style=bold]" in dot
    assert "B -> U1 [style=dashed]" in dot


def test_rank_groups_emitted_last():
    ped = Pedigree()
    ped.add_unknown_rel("U1", "U2")
    ped.add_to_rank(10, "U1")
    ped.add_to_rank(10, "U2")
    ped.add_to_rank(10, "U2")
    ped.add_to_rank(3, "X")
    dot = ped.source
    assert ped.rank_groups() == {10: ["U1", "U2"]}
    assert "// Age: 10" in dot
    assert "rank=same" in dot
    assert "Age: 3" not in dot
    assert dot.index("// Age: 10") > dot.index("U1 -> U2")


def test_from_graph_styles_and_unmapped():
    g = PedigreeGraph(["A", "B", "C"])
    g.add_path(EqualWeightPath(["A", "U1", "B"], 0.25))
    g.add_demographics("A", age=7, sex=Sex.FEMALE)
    g.add_demographics("B", age=7, sex=Sex.MALE)

    ped, unmapped = Pedigree.from_graph(g, ["A", "B", "C", "A"])
    dot = ped.source
    assert unmapped == ["C"]
    assert "shape=ellipse" in _line(dot, "A")
    assert "shape=box" in _line(dot, "B")
    assert "shape=diamond" in _line(dot, "U1")
    assert dot.count("style=dashed") == 3  # unknown node plus two edges
    assert "// Age: 7" in dot


def test_edge_between_knowns_is_bold():
    g = PedigreeGraph(["A", "B"], directed=False)
    g.add_path(EqualWeightPath(["A", "B"], 0.5))
    dot, unmapped = render_pedigree(g)
    assert unmapped == []
    assert "A -- B [style=bold]" in dot
