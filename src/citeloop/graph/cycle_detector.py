"""Cycle detection from a start node using DFS with an active-path set.

Every node the walk touches is in one of three states:
  fresh    -- not seen yet
  on path  -- entered but not finished (ancestors of the frontier)
  visited  -- fully explored, nothing reachable from it loops

Reaching a node that is on the path means the edge we just followed is
a back edge, so the graph has a cycle.  The cycle itself is the slice
of the path from that node's position to the end, closed by repeating
the node.  Reaching a visited node is safe and its subtree is never
walked twice, which keeps the whole check O(V + E).

The walk keeps its own stack of successor iterators instead of
recursing, so a citation chain tens of thousands of patents long does
not hit the interpreter's recursion limit.  Push/pop order and the
stop-at-first-cycle behavior are the same as the recursive form.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from citeloop.domain.types import Edge, NodeId
from citeloop.graph.adjacency import Graph, GraphLike, as_graph, node_id
from citeloop.graph.traversal import TraversalState

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CycleResult:
    """Result of cycle detection.

    found is False both for "no cycle" and for "could not check"; the
    two are told apart by error, which is only set in the second case.
    """
    found: bool
    loop_path: list[NodeId] | None = None
    cycle_edge: Edge | None = None
    path: list[NodeId] | None = None   # full active path when the cycle closed
    error: str | None = None

    @property
    def checked(self) -> bool:
        return self.error is None


def missing_node_message(node: NodeId) -> str:
    return f'Node "{node}" not found in graph'


def _walk(graph: Graph, start: NodeId, state: TraversalState) -> NodeId | None:
    """DFS from *start*; return the node that closes the first cycle."""
    state.enter(start)
    frames: list[Iterator[NodeId]] = [iter(graph.successors(start))]
    while frames:
        succ = next(frames[-1], None)
        if succ is None:
            # successors exhausted -> backtrack
            frames.pop()
            state.leave(state.path_stack[-1])
            continue
        if state.is_on_path(succ):
            return succ
        if state.is_visited(succ):
            continue
        state.enter(succ)
        frames.append(iter(graph.successors(succ)))
    return None


def detect_cycle(graph: GraphLike, start: NodeId) -> CycleResult:
    """Check whether a cycle is reachable from *start*.

    *graph* is a Graph or a raw {node: [successors]} mapping; a mapping
    that cannot be read raises MalformedGraphError before anything is
    walked.  The graph is never modified.

    If *start* is not a declared node the result has found=False and a
    "not found" error instead of raising.
    """
    g = as_graph(graph)
    start = node_id(start)
    if start not in g:
        log.debug("Start node %r missing from %r", start, g)
        return CycleResult(found=False, error=missing_node_message(start))

    state = TraversalState()
    culprit = _walk(g, start, state)
    if culprit is None:
        return CycleResult(found=False)

    loop = state.loop_through(culprit)
    edge = state.back_edge_to(culprit)
    log.debug("Cycle from %r: %s (back edge %s)", start, "->".join(loop), edge)
    return CycleResult(
        found=True,
        loop_path=loop,
        cycle_edge=edge,
        path=list(state.path_stack),
    )
