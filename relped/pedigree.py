"""Render a pruned PedigreeGraph as a DOT pedigree.

Known individuals are filled yellow and shaped by sex (box for males,
ellipse for females, record when sex is unknown). Unknown individuals
inserted by the graph are blank dashed diamonds. Relationships between two
known individuals, or recorded parentage, are bold; anything through an
unknown individual is dashed. Individuals sharing an age are placed on the
same rank.

API:
    Pedigree.from_graph(graph, known_names, remove_edge_arrows=False) -> (Pedigree, unmapped)
    render_pedigree(graph, known_names=None, remove_edge_arrows=False) -> (str, unmapped)

``unmapped`` lists the known individuals that appear in no surviving edge.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple

import graphviz

from .graph import PedigreeGraph
from .models import Sex

GRAPH_ATTRS = {
    "rankdir": "TB",
    "splines": "ortho",
    "ratio": "auto",
    "newrank": "true",
    "mincross": "2.0",
}
KNOWN_INDV_ATTRS = {"fontname": "Sans", "style": "filled", "fillcolor": "yellow"}
SEX_SHAPES = {Sex.MALE: "box", Sex.FEMALE: "ellipse", Sex.UNKNOWN: "record"}
UNKNOWN_INDV_ATTRS = {"fontname": "Sans", "shape": "diamond", "style": "dashed", "label": ""}
KNOWN_REL_ATTRS = {"style": "bold"}
UNKNOWN_REL_ATTRS = {"style": "dashed"}


class Pedigree:
    def __init__(self, directed: bool = True, remove_edge_arrows: bool = False) -> None:
        factory = graphviz.Digraph if directed else graphviz.Graph
        self._dot = factory(name="pedigree", graph_attr=GRAPH_ATTRS)
        if directed and remove_edge_arrows:
            self._dot.attr("edge", dir="none")
        self.directed = directed
        self._ranks: Dict[int, List[str]] = {}

    def add_known_indv(self, name: str, sex: Optional[Sex] = None) -> None:
        shape = SEX_SHAPES[sex or Sex.UNKNOWN]
        self._dot.node(name, shape=shape, **KNOWN_INDV_ATTRS)

    def add_unknown_indv(self, name: str) -> None:
        self._dot.node(name, **UNKNOWN_INDV_ATTRS)

    def add_known_rel(self, src: str, dst: str) -> None:
        self._dot.edge(src, dst, **KNOWN_REL_ATTRS)

    def add_unknown_rel(self, src: str, dst: str) -> None:
        self._dot.edge(src, dst, **UNKNOWN_REL_ATTRS)

    def add_to_rank(self, age: int, name: str) -> None:
        members = self._ranks.setdefault(int(age), [])
        if name not in members:
            members.append(name)

    def rank_groups(self) -> Dict[int, List[str]]:
        """Age -> names, only for ages shared by two or more individuals."""
        return {age: list(names) for age, names in sorted(self._ranks.items()) if len(names) > 1}

    @property
    def source(self) -> str:
        # rank groups go last, just before the closing brace
        dot = self._dot.copy()
        for age, names in self.rank_groups().items():
            with dot.subgraph(comment=f"Age: {age}") as rank:
                rank.attr(rank="same")
                for name in names:
                    rank.node(name)
        return dot.source

    def __str__(self) -> str:
        return self.source

    @classmethod
    def from_graph(
        cls,
        graph: PedigreeGraph,
        known_names: Iterable[str],
        remove_edge_arrows: bool = False,
    ) -> Tuple["Pedigree", List[str]]:
        known_names = list(dict.fromkeys(known_names))
        known = set(known_names)
        ped = cls(directed=graph.directed, remove_edge_arrows=remove_edge_arrows)
        drawn = set()

        for edge in graph.edges():
            for name in (edge.tail, edge.head):
                if name in drawn:
                    continue
                drawn.add(name)
                info = graph.info(name)
                if name in known:
                    ped.add_known_indv(name, info.sex)
                else:
                    ped.add_unknown_indv(name)
                if info.age is not None:
                    ped.add_to_rank(info.age, name)
            if edge.known or (edge.tail in known and edge.head in known):
                ped.add_known_rel(edge.tail, edge.head)
            else:
                ped.add_unknown_rel(edge.tail, edge.head)

        unmapped = [name for name in known_names if name not in drawn]
        return ped, unmapped


def render_pedigree(
    graph: PedigreeGraph,
    known_names: Optional[Iterable[str]] = None,
    remove_edge_arrows: bool = False,
) -> Tuple[str, List[str]]:
    if known_names is None:
        known_names = graph.knowns
    ped, unmapped = Pedigree.from_graph(graph, known_names, remove_edge_arrows=remove_edge_arrows)
    return str(ped), unmapped
