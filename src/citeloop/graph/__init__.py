"""Graph algorithms for citation-loop validation and repair."""

from citeloop.graph.adjacency import Graph, MalformedGraphError, as_graph
from citeloop.graph.cycle_detector import CycleResult, detect_cycle
from citeloop.graph.eliminator import EliminationResult, eliminate_cycles
from citeloop.graph.tracer import (
    DEFAULT_POLICY,
    StepRecord,
    TraceResult,
    detect_cycle_with_trace,
)
from citeloop.graph.traversal import TraversalState

__all__ = [
    "CycleResult",
    "DEFAULT_POLICY",
    "EliminationResult",
    "Graph",
    "MalformedGraphError",
    "StepRecord",
    "TraceResult",
    "TraversalState",
    "as_graph",
    "detect_cycle",
    "detect_cycle_with_trace",
    "eliminate_cycles",
]
