"""relped: build pedigrees from pairwise relatedness.

Pairwise relatedness scores (optionally with recorded parentage and
demographics) are turned into a weighted multigraph in which unknown
intermediate individuals stand in for unsampled ancestors. The graph is
pruned to the shortest connections between known individuals and rendered
as a DOT pedigree.
"""
from __future__ import annotations

from .degree import Degree, to_relational_degree, categorical_to_degree
from .errors import (
    RelpedError,
    UnrelatedPairError,
    InvalidWeightError,
    GraphStateError,
    InputConsistencyError,
)
from .models import Individual, Sex
from .paths import (
    Path,
    EqualWeightPath,
    FractionalWeightPath,
    RelationalWeightPath,
    SequentialNames,
    new_unknown_name,
)
from .graph import PedigreeGraph, GraphState, Edge
from .build import build_graph
from .pedigree import Pedigree, render_pedigree

__version__ = "0.4.0"

__all__ = [
    "Degree",
    "to_relational_degree",
    "categorical_to_degree",
    "RelpedError",
    "UnrelatedPairError",
    "InvalidWeightError",
    "GraphStateError",
    "InputConsistencyError",
    "Individual",
    "Sex",
    "Path",
    "EqualWeightPath",
    "FractionalWeightPath",
    "RelationalWeightPath",
    "SequentialNames",
    "new_unknown_name",
    "PedigreeGraph",
    "GraphState",
    "Edge",
    "build_graph",
    "Pedigree",
    "render_pedigree",
    "__version__",
]
