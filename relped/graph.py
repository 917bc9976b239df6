"""Pedigree graph: named individuals joined by weighted relational edges.

One class covers both the directed and the undirected pedigree. Topology is
kept in a ``networkx.MultiGraph`` keyed by dense integer ids; names map to
ids through an index and each id owns an ``Individual`` record (age, sex,
dam, sire) in an arena list. In directed mode each edge's direction is
resolved from that metadata when edges are read, so demographics and
parentage may arrive in any order.

Edge direction (directed mode), per inserted path:
    - recorded parentage points parent -> child;
    - otherwise, when both endpoint ages are known, older -> younger
      (equal ages keep path order);
    - otherwise the path points from its second endpoint to its first.
      This last rule is an arbitrary but stable default.

Path admission:
    Inferred (``known=False``) paths are skipped when recorded parentage
    already explains the pair (parent/child or shared parent). With
    ``shortest_only`` (the default) an inferred path is also dropped when
    the graph already links its endpoints through strictly fewer edges.
    This keeps the graph from growing with redundant long paths at the cost
    of some fidelity: a later, cheaper but longer path never gets in.

Pruning:
    ``prune_to_shortest`` keeps, for every pair of known individuals, one
    minimum summed-weight path, and copies only those nodes and edges into a
    fresh graph. Weights are positive by construction, so Dijkstra is used
    by default; Bellman-Ford is available by name. Pairwise evaluation is
    O(k) single-source searches for k known individuals.

State:
    EMPTY -> BUILDING on the first mutation; a graph returned by
    ``prune_to_shortest`` is PRUNED and refuses further mutation.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple
import logging
import math

import networkx as nx

from .degree import Degree
from .errors import GraphStateError, InvalidWeightError
from .models import Individual, Sex
from .paths import Path

# A recorded parent/offspring link: one FIRST degree edge at full weight.
PARENTAGE_DEGREE = Degree.FIRST
PARENTAGE_WEIGHT = 1.0

SHORTEST_PATH_METHODS = ("dijkstra", "bellman-ford")


class GraphState(Enum):
    EMPTY = "empty"
    BUILDING = "building"
    PRUNED = "pruned"


class Edge(NamedTuple):
    tail: str
    head: str
    weight: float
    known: bool


@dataclass
class _InsertedPath:
    edges: List[Tuple[int, int, int]] = field(default_factory=list)
    intermediates: List[int] = field(default_factory=list)


def _check_weight(w: Any) -> float:
    try:
        w = float(w)
    except (TypeError, ValueError):
        raise InvalidWeightError(f"edge weight {w!r} is not a number")
    if not math.isfinite(w) or w <= 0:
        raise InvalidWeightError(f"edge weight must be a positive finite number, got {w!r}")
    return w


class PedigreeGraph:
    def __init__(self, knowns: Iterable[str], directed: bool = True, shortest_only: bool = True) -> None:
        self._knowns: List[str] = list(dict.fromkeys(knowns))
        self._known_set: Set[str] = set(self._knowns)
        self.directed = directed
        self.shortest_only = shortest_only
        self._g = nx.MultiGraph()
        self._indvs: List[Individual] = []
        self._ids: Dict[str, int] = {}
        self._inferred: Dict[FrozenSet[str], List[_InsertedPath]] = {}
        self._state = GraphState.EMPTY

    # -- identity -----------------------------------------------------

    @property
    def state(self) -> GraphState:
        return self._state

    @property
    def knowns(self) -> List[str]:
        return list(self._knowns)

    def is_known(self, name: str) -> bool:
        return name in self._known_set

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return self._g.number_of_nodes()

    def nodes(self) -> List[str]:
        return [self._indvs[n].name for n in self._g.nodes]

    def number_of_edges(self) -> int:
        return self._g.number_of_edges()

    def _ensure_mutable(self) -> None:
        if self._state is GraphState.PRUNED:
            raise GraphStateError("a pruned graph cannot be modified; build a new graph instead")
        self._state = GraphState.BUILDING

    def add_node(self, name: str) -> int:
        """Return the id for ``name``, creating the node on first use."""
        self._ensure_mutable()
        nid = self._ids.get(name)
        if nid is None:
            nid = len(self._indvs)
            self._indvs.append(Individual(name=name))
            self._ids[name] = nid
            self._g.add_node(nid)
        return nid

    def _drop_node(self, nid: int) -> None:
        name = self._indvs[nid].name
        self._g.remove_node(nid)
        del self._ids[name]

    # -- metadata -----------------------------------------------------

    def info(self, name: str) -> Individual:
        """Return a copy of the metadata for ``name`` (blank if absent)."""
        nid = self._ids.get(name)
        if nid is None:
            return Individual(name=name)
        return replace(self._indvs[nid])

    def add_info(self, name: str, individual: Individual) -> None:
        nid = self.add_node(name)
        self._indvs[nid] = replace(individual, name=name)

    def add_demographics(self, name: str, age: Optional[int] = None, sex: Optional[Sex] = None) -> None:
        """Attach age and/or sex to ``name``. Topology is not affected."""
        if age is not None:
            age = int(age)
            if age < 0:
                raise ValueError(f"age of {name!r} must be non-negative, got {age}")
        nid = self.add_node(name)
        indv = self._indvs[nid]
        if age is not None:
            indv.age = age
        if sex is not None:
            indv.sex = Sex(sex)

    def explained_by_parentage(self, a: str, b: str) -> bool:
        """True when recorded parentage links a and b (parent/child or shared parent)."""
        if a == b:
            return False
        ia, ib = self.info(a), self.info(b)
        if a in ib.parents() or b in ia.parents():
            return True
        return bool(set(ia.parents()) & set(ib.parents()))

    def _siblings(self, child: str, parent: str) -> List[str]:
        sibs = []
        for name, nid in self._ids.items():
            if name != child and parent in self._indvs[nid].parents():
                sibs.append(name)
        return sibs

    # -- insertion ----------------------------------------------------

    def _hops(self, a: str, b: str) -> Optional[int]:
        if a not in self._ids or b not in self._ids:
            return None
        try:
            return nx.shortest_path_length(self._g, self._ids[a], self._ids[b])
        except nx.NetworkXNoPath:
            return None

    def add_path(self, path: Path, known: bool = False) -> bool:
        """Insert every segment of ``path``; return False if it was not admitted."""
        self._ensure_mutable()
        names = path.names()
        weights = [_check_weight(w) for w in path.weights()]
        first, last = names[0], names[-1]

        if not known and first != last:
            if self.explained_by_parentage(first, last):
                logging.debug("Skipping inferred path %s..%s: explained by recorded parentage", first, last)
                return False
            if self.shortest_only:
                hops = self._hops(first, last)
                if hops is not None and hops < len(weights):
                    logging.debug(
                        "Discarding %d-link path %s..%s: already linked through %d",
                        len(weights), first, last, hops,
                    )
                    return False

        ids = [self.add_node(n) for n in names]
        inserted = _InsertedPath(intermediates=ids[1:-1])
        for u, v, w in zip(ids, ids[1:], weights):
            key = self._g.add_edge(u, v, weight=w, known=known, src=u, ends=(first, last))
            inserted.edges.append((u, v, key))
        if not known:
            self._inferred.setdefault(frozenset((first, last)), []).append(inserted)
        return True

    def _retract_inferred(self, a: str, b: str) -> None:
        for inserted in self._inferred.pop(frozenset((a, b)), []):
            for u, v, key in inserted.edges:
                if self._g.has_edge(u, v, key):
                    self._g.remove_edge(u, v, key)
            for nid in inserted.intermediates:
                if nid in self._g and self._g.degree(nid) == 0 and not self.is_known(self._indvs[nid].name):
                    self._drop_node(nid)
            logging.debug("Retracted inferred path %s..%s in favour of recorded parentage", a, b)

    def _known_keys(self, u: int, v: int) -> List[int]:
        data = self._g.get_edge_data(u, v) or {}
        return [k for k, d in data.items() if d.get("known")]

    def add_known_parentage(self, child: str, dam: Optional[str] = None, sire: Optional[str] = None) -> None:
        """Record dam and/or sire of ``child``.

        Recorded parentage overrides inference: inferred paths between the
        parent and the child, and between the child and siblings sharing that
        parent, are removed, and one FIRST degree edge of weight 1.0 joins
        parent and child.
        """
        self._ensure_mutable()
        for role, parent in (("dam", dam), ("sire", sire)):
            if not parent:
                continue
            cid = self.add_node(child)
            pid = self.add_node(parent)
            indv = self._indvs[cid]
            previous = getattr(indv, role)
            if previous and previous != parent:
                logging.warning("Replacing recorded %s %s of %s with %s", role, previous, child, parent)
                old = self._ids.get(previous)
                if old is not None:
                    for key in self._known_keys(old, cid):
                        self._g.remove_edge(old, cid, key)
            setattr(indv, role, parent)

            self._retract_inferred(parent, child)
            for sib in self._siblings(child, parent):
                self._retract_inferred(child, sib)

            if not self._known_keys(pid, cid):
                self._g.add_edge(pid, cid, weight=PARENTAGE_WEIGHT, known=True, src=pid, ends=(parent, child))

    # -- queries ------------------------------------------------------

    def direction(self, a: str, b: str) -> Tuple[str, str]:
        """Return (tail, head) for a relationship inserted as a path from a to b."""
        ia, ib = self.info(a), self.info(b)
        if a in ib.parents():
            return a, b
        if b in ia.parents():
            return b, a
        if ia.age is not None and ib.age is not None:
            return (a, b) if ia.age >= ib.age else (b, a)
        return b, a

    def _edge(self, u: int, v: int, data: Dict[str, Any]) -> Edge:
        src = data["src"]
        dst = v if src == u else u
        tail, head = self._indvs[src].name, self._indvs[dst].name
        if self.directed:
            first, _ = data["ends"]
            if self.direction(*data["ends"])[0] != first:
                tail, head = head, tail
        return Edge(tail, head, data["weight"], data["known"])

    def edges(self) -> Iterator[Edge]:
        for u, v, data in self._g.edges(data=True):
            yield self._edge(u, v, data)

    def has_edge(self, a: str, b: str) -> bool:
        if a not in self._ids or b not in self._ids:
            return False
        return self._g.has_edge(self._ids[a], self._ids[b])

    def weight(self, a: str, b: str) -> Optional[float]:
        """Lightest weight among the edges joining a and b, or None."""
        if not self.has_edge(a, b):
            return None
        data = self._g.get_edge_data(self._ids[a], self._ids[b])
        return min(d["weight"] for d in data.values())

    def _routes_from(self, source: int, method: str) -> Dict[int, List[int]]:
        if method == "dijkstra":
            _, routes = nx.single_source_dijkstra(self._g, source, weight="weight")
        elif method == "bellman-ford":
            _, routes = nx.single_source_bellman_ford(self._g, source, weight="weight")
        else:
            raise ValueError(f"unknown shortest path method {method!r}; expected one of {SHORTEST_PATH_METHODS}")
        return routes

    def shortest_path(self, a: str, b: str, method: str = "dijkstra") -> Tuple[Optional[float], List[str]]:
        """Return (cost, names) of one minimum-weight path, or (None, [])."""
        if a not in self._ids or b not in self._ids:
            return None, []
        src, dst = self._ids[a], self._ids[b]
        try:
            if method == "dijkstra":
                cost, route = nx.single_source_dijkstra(self._g, src, dst, weight="weight")
            elif method == "bellman-ford":
                cost, route = nx.single_source_bellman_ford(self._g, src, dst, weight="weight")
            else:
                raise ValueError(f"unknown shortest path method {method!r}; expected one of {SHORTEST_PATH_METHODS}")
        except nx.NetworkXNoPath:
            return None, []
        return cost, [self._indvs[n].name for n in route]

    # -- pruning ------------------------------------------------------

    def _cheapest_edge(self, u: int, v: int) -> Tuple[int, Dict[str, Any]]:
        data = self._g.get_edge_data(u, v)
        key = min(data, key=lambda k: data[k]["weight"])
        return key, data[key]

    def _adopt(self, source: "PedigreeGraph", nid: int) -> int:
        indv = source._indvs[nid]
        if indv.name not in self._ids:
            new = self.add_node(indv.name)
            self._indvs[new] = replace(indv)
        return self._ids[indv.name]

    def _copy_edge(self, source: "PedigreeGraph", u: int, v: int, data: Dict[str, Any]) -> None:
        nu, nv = self._adopt(source, u), self._adopt(source, v)
        src = nu if data["src"] == u else nv
        self._g.add_edge(nu, nv, weight=data["weight"], known=data["known"], src=src, ends=data["ends"])

    def prune_to_shortest(self, keep_self_loops: bool = False, method: str = "dijkstra") -> "PedigreeGraph":
        """Return a new graph holding only the shortest paths between known individuals.

        This graph is left unchanged. Self-loops are dropped unless
        ``keep_self_loops`` is set, in which case loops on surviving
        individuals are kept.
        """
        if method not in SHORTEST_PATH_METHODS:
            raise ValueError(f"unknown shortest path method {method!r}; expected one of {SHORTEST_PATH_METHODS}")
        pruned = PedigreeGraph(self._knowns, directed=self.directed, shortest_only=self.shortest_only)
        present = [k for k in self._knowns if k in self._ids]
        copied: Set[Tuple[int, int, int]] = set()

        for i, src in enumerate(present):
            routes = self._routes_from(self._ids[src], method)
            for dst in present[i + 1:]:
                route = routes.get(self._ids[dst])
                if not route or len(route) < 2:
                    continue
                for u, v in zip(route, route[1:]):
                    key, data = self._cheapest_edge(u, v)
                    ident = (min(u, v), max(u, v), key)
                    if ident in copied:
                        continue
                    copied.add(ident)
                    pruned._copy_edge(self, u, v, data)

        if keep_self_loops:
            for u, _, data in nx.selfloop_edges(self._g, data=True):
                if self._indvs[u].name in pruned._ids:
                    pruned._copy_edge(self, u, u, data)

        pruned._state = GraphState.PRUNED
        logging.info(
            "Pruned graph from %d nodes / %d edges to %d nodes / %d edges",
            len(self), self.number_of_edges(), len(pruned), pruned.number_of_edges(),
        )
        return pruned

    def __repr__(self) -> str:
        mode = "directed" if self.directed else "undirected"
        return f"<PedigreeGraph {mode} {self._state.value}: {len(self)} nodes, {self.number_of_edges()} edges>"
