"""Back-edge elimination: rewrite a cyclic graph into a DAG.

One DFS from the start node over a private copy of the graph.  For the
current node, successors are examined from the LAST to the FIRST:

  successor on the active path  -> back edge, delete it from the copy
                                   and record it; do not descend
  successor not yet visited     -> descend
  successor already visited     -> cross/forward edge, keep it

Walking the list backwards means deleting entry i never shifts the
entries still to be examined (all of them sit below i).

This is a single-pass heuristic driven by DFS discovery order, not a
minimum feedback-edge-set solver.  Cycles that are not reachable from
the start node are left as they are.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from citeloop.domain.types import Edge, NodeId
from citeloop.graph.adjacency import Graph, GraphLike, as_graph, node_id
from citeloop.graph.traversal import TraversalState

log = logging.getLogger(__name__)


@dataclass(slots=True)
class EliminationResult:
    """The rewritten graph and the edges removed, in removal order."""
    dag: Graph
    removed_edges: list[Edge] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.removed_edges)


def eliminate_cycles(graph: GraphLike, start: NodeId) -> EliminationResult:
    """Remove every back edge discovered by a DFS from *start*.

    The caller's graph is never modified.  If *start* is not a declared
    node the result is an unmodified copy with no removed edges.
    """
    dag = as_graph(graph).copy()
    start = node_id(start)
    removed: list[Edge] = []
    if start not in dag:
        log.debug("Start node %r missing, nothing to eliminate", start)
        return EliminationResult(dag=dag, removed_edges=removed)

    state = TraversalState()
    state.enter(start)
    # frame = [node, index of the next successor to examine]
    frames: list[list] = [[start, dag.out_degree(start) - 1]]
    while frames:
        frame = frames[-1]
        node, i = frame
        if i < 0:
            frames.pop()
            state.leave(node)
            continue
        frame[1] = i - 1
        succ = dag.successor_at(node, i)

        if state.is_on_path(succ):
            dag.remove_edge_at(node, i)
            edge = Edge(node, succ)
            removed.append(edge)
            log.debug("Removed back edge %s", edge)
        elif not state.is_visited(succ):
            state.enter(succ)
            frames.append([succ, dag.out_degree(succ) - 1])

    return EliminationResult(dag=dag, removed_edges=removed)
