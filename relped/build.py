"""Assemble a PedigreeGraph from relatedness, parentage and demographics.

Sources are duck-typed:
    relatedness:   indvs(), relatedness(a, b) -> float, rel_distance(a, b) -> Degree
    parentage:     indvs(), sire(name) -> Optional[str], dam(name) -> Optional[str]
    demographics:  age(name) -> Optional[int], sex(name) -> Optional[Sex]

The adapters in ``relped.io`` implement these.
"""
from __future__ import annotations
from itertools import combinations
from typing import Any, Optional
import logging

from .degree import Degree
from .graph import PedigreeGraph, PARENTAGE_DEGREE
from .paths import NameFactory, RelationalWeightPath


def build_graph(
    relatedness: Any,
    max_distance: int = Degree.NINTH,
    parentage: Any = None,
    demographics: Any = None,
    directed: bool = True,
    shortest_only: bool = True,
    name_factory: Optional[NameFactory] = None,
) -> PedigreeGraph:
    """Build the unpruned pedigree graph.

    Recorded parentage goes in first so it wins over inferred paths. Every
    pair of known individuals is then evaluated once (relatedness lookups are
    symmetric) and a relational path is inserted when the pair's degree is
    within ``max_distance``. This is O(n^2) in the number of individuals and
    dominates the run time on large inputs; lowering ``max_distance`` also
    shrinks the graph that pruning has to search.
    """
    indvs = list(relatedness.indvs())
    g = PedigreeGraph(indvs, directed=directed, shortest_only=shortest_only)

    if parentage is not None and PARENTAGE_DEGREE <= max_distance:
        for child in parentage.indvs():
            g.add_known_parentage(child, dam=parentage.dam(child), sire=parentage.sire(child))

    added = skipped = 0
    for a, b in combinations(indvs, 2):
        degree = Degree(relatedness.rel_distance(a, b))
        if degree == Degree.UNRELATED or degree > max_distance:
            continue
        weight = relatedness.relatedness(a, b)
        if weight <= 0:
            logging.warning("Pair %s/%s has degree %d but relatedness %s; skipping", a, b, degree, weight)
            continue
        path = RelationalWeightPath(a, b, degree, weight, name_factory=name_factory)
        if g.add_path(path):
            added += 1
        else:
            skipped += 1
    logging.info("Inserted %d relational paths among %d individuals (%d not admitted)", added, len(indvs), skipped)

    if demographics is not None:
        for name in indvs:
            age, sex = demographics.age(name), demographics.sex(name)
            if age is None and sex is None:
                continue
            g.add_demographics(name, age=age, sex=sex)

    return g
