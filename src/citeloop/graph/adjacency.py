"""Directed citation graph using adjacency lists.

The graph stores string node ids and, for each declared node, the
ordered list of nodes it points at.  Internally it is a
dict[str, list[str]] where keys are source nodes and values are their
successors in the order they were listed.  Successor order is
significant: it is the order a DFS explores them, which decides which
cycle or back-edge is reported first.

A node that only ever appears as a successor (never as a key) is a
dangling reference.  It is treated as a node with no outgoing edges
but is NOT added as a key, so a round trip through to_mapping() gives
back exactly the keys the caller supplied.

Input coming from JSON may use numbers as ids ({"1": [2, 3]}).  Those
are normalized to strings on the way in.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, Union

from citeloop.domain.types import Adjacency, Edge, NodeId

_SCALARS = (str, int, float)


class MalformedGraphError(ValueError):
    """Raised when input cannot be read as an adjacency mapping."""

    def __init__(self, message: str, key: Any = None) -> None:
        self.key = key
        super().__init__(message)


def node_id(value: Any, where: str = "start node") -> NodeId:
    """Normalize a scalar id to its string form.

    Integral floats collapse to their int spelling, so JSON 1.0 and 1
    name the same node ("1"); 1.5 stays "1.5".
    """
    # bool is an int subclass; JSON true/false is never a valid id
    if isinstance(value, bool) or not isinstance(value, _SCALARS):
        raise MalformedGraphError(
            f"Invalid node id {value!r} in {where}: expected a string or number",
            key=value,
        )
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


class Graph:
    """Directed graph backed by ordered adjacency lists."""

    __slots__ = ("_fwd",)

    def __init__(self) -> None:
        self._fwd: Adjacency = {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> Graph:
        """Build a graph from {node: [successor, ...]}.

        Raises MalformedGraphError if *mapping* is not a mapping, if a
        value is not a list, or if an id is not a scalar.
        """
        if not isinstance(mapping, Mapping):
            raise MalformedGraphError(
                f"Graph must be a mapping of node -> successors, "
                f"got {type(mapping).__name__}"
            )
        g = cls()
        for raw_key, raw_succ in mapping.items():
            key = node_id(raw_key, "graph keys")
            if not isinstance(raw_succ, (list, tuple)):
                raise MalformedGraphError(
                    f"Successors of node {key!r} must be a list, "
                    f"got {type(raw_succ).__name__}",
                    key=key,
                )
            succ = [node_id(s, f"successors of {key!r}") for s in raw_succ]
            # "1" and 1 normalize to the same key; later entries extend it
            g._fwd.setdefault(key, []).extend(succ)
        return g

    # ---- mutation --------------------------------------------------------

    def add_node(self, node: NodeId) -> None:
        """Declare *node* if it does not already exist."""
        if node not in self._fwd:
            self._fwd[node] = []

    def add_edge(self, src: NodeId, dst: NodeId) -> None:
        """Append a directed edge src -> dst.

        Declares *src* if needed.  *dst* is not declared: it stays a
        dangling reference until something adds it as a node.
        """
        self.add_node(src)
        self._fwd[src].append(dst)

    def remove_edge(self, src: NodeId, dst: NodeId) -> None:
        """Remove the first occurrence of edge src -> dst.

        Raises ValueError if the edge does not exist.
        """
        try:
            self._fwd[src].remove(dst)
        except (KeyError, ValueError):
            raise ValueError(f"Edge {src!r} -> {dst!r} not found") from None

    def remove_edge_at(self, src: NodeId, index: int) -> NodeId:
        """Remove the successor at position *index* of *src* and return it.

        Positions after *index* shift down by one; positions before it
        are untouched, which is what makes reverse-order deletion safe.
        """
        try:
            return self._fwd[src].pop(index)
        except (KeyError, IndexError):
            raise ValueError(
                f"Edge {src!r} -> [#{index}] not found"
            ) from None

    def copy(self) -> Graph:
        """Structural clone: every successor list gets its own storage."""
        g = Graph()
        g._fwd = {node: list(succ) for node, succ in self._fwd.items()}
        return g

    # ---- queries ---------------------------------------------------------

    def has_node(self, node: NodeId) -> bool:
        return node in self._fwd

    def has_edge(self, src: NodeId, dst: NodeId) -> bool:
        return src in self._fwd and dst in self._fwd[src]

    def successors(self, node: NodeId) -> list[NodeId]:
        """Direct successors in listed order (empty for dangling refs)."""
        return list(self._fwd.get(node, []))

    def successor_at(self, node: NodeId, index: int) -> NodeId:
        return self._fwd[node][index]

    def out_degree(self, node: NodeId) -> int:
        return len(self._fwd.get(node, []))

    def nodes(self) -> Iterator[NodeId]:
        return iter(self._fwd)

    def edges(self) -> Iterator[Edge]:
        for src, dsts in self._fwd.items():
            for dst in dsts:
                yield Edge(src, dst)

    def dangling_references(self) -> list[NodeId]:
        """Successor ids never declared as keys, in first-seen order."""
        seen: dict[NodeId, None] = {}
        for dsts in self._fwd.values():
            for dst in dsts:
                if dst not in self._fwd:
                    seen.setdefault(dst, None)
        return list(seen)

    def to_mapping(self) -> Adjacency:
        """Serialize back to {node: [successor, ...]} (fresh lists)."""
        return {node: list(succ) for node, succ in self._fwd.items()}

    @property
    def node_count(self) -> int:
        return len(self._fwd)

    @property
    def edge_count(self) -> int:
        return sum(len(dsts) for dsts in self._fwd.values())

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, node: object) -> bool:
        return node in self._fwd

    def __len__(self) -> int:
        return self.node_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._fwd == other._fwd

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"


GraphLike = Union[Graph, Mapping[Any, Any]]


def as_graph(graph: GraphLike) -> Graph:
    """Accept either a Graph or a raw mapping (e.g. parsed JSON)."""
    if isinstance(graph, Graph):
        return graph
    return Graph.from_mapping(graph)
