"""Instrumented cycle detection that records every traversal decision.

The walk is the same DFS as cycle_detector, but at each decision point
it appends a StepRecord: what happened, to which node, a two-language
explanation, and a frozen snapshot of visited / on_path / path_stack.
A debugger UI can then scrub through the trace and jump to any index.

Per node the records always come in this order:

    ENTER_NODE -> CHECK_IN_STACK -> CYCLE_FOUND [-> SKIP_CYCLE]
                                 -> CHECK_VISITED -> SKIP_VISITED
                                                  -> ADD_TO_STACK
                                                     (EXPLORE_NEIGHBOR -> child)*
                                                     BACKTRACK -> MARK_SAFE

bracketed by START at the beginning and COMPLETE at the end.

Two policies decide what happens after CYCLE_FOUND:

  STOP_AT_FIRST_CYCLE  the walk aborts; CYCLE_FOUND is the last record
                       and the result matches detect_cycle exactly.
  SKIP_AND_CONTINUE    the back-edge is recorded in SKIP_CYCLE, treated
                       as if it did not exist, and the walk carries on.
                       The run ends with COMPLETE; every skipped edge is
                       returned in skipped_edges and handled is True.

Snapshots are frozenset / tuple copies taken at capture time, so later
mutation of the live state can never leak into an emitted record.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from citeloop.domain.actions import Language, StepAction, TracePolicy
from citeloop.domain.types import Edge, NodeId
from citeloop.graph.adjacency import Graph, GraphLike, as_graph, node_id
from citeloop.graph.cycle_detector import missing_node_message
from citeloop.graph.explain import describe
from citeloop.graph.traversal import TraversalState

log = logging.getLogger(__name__)

DEFAULT_POLICY = TracePolicy.SKIP_AND_CONTINUE


@dataclass(frozen=True, slots=True)
class StepRecord:
    """One immutable snapshot of the traversal at a decision point."""
    index: int
    action: StepAction
    node: NodeId
    explanation: str
    explanation_zh: str
    visited: frozenset[NodeId]
    on_path: frozenset[NodeId]
    path_stack: tuple[NodeId, ...]
    target_neighbor: NodeId | None = None   # EXPLORE_NEIGHBOR only
    cycle_node: NodeId | None = None        # CYCLE_FOUND only
    skipped_edge: Edge | None = None        # SKIP_CYCLE only

    @property
    def is_cycle(self) -> bool:
        return self.action is StepAction.CYCLE_FOUND

    def explain(self, language: Language = Language.EN) -> str:
        if language is Language.ZH:
            return self.explanation_zh
        return self.explanation


@dataclass(slots=True)
class TraceResult:
    """Outcome of a traced run plus the full, index-addressable trace."""
    found: bool
    steps: tuple[StepRecord, ...]
    policy: TracePolicy
    loop_path: list[NodeId] | None = None
    cycle_edge: Edge | None = None
    handled: bool = False     # cycles were found but the walk completed
    skipped_edges: list[Edge] = field(default_factory=list)
    error: str | None = None

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> StepRecord:
        return self.steps[index]

    @property
    def final_step(self) -> StepRecord | None:
        return self.steps[-1] if self.steps else None


class _Recorder:
    """Appends StepRecords built from the live traversal state."""

    __slots__ = ("_state", "steps")

    def __init__(self, state: TraversalState) -> None:
        self._state = state
        self.steps: list[StepRecord] = []

    def capture(
        self,
        action: StepAction,
        node: NodeId,
        *,
        target: NodeId | None = None,
        cycle_node: NodeId | None = None,
        skipped_edge: Edge | None = None,
        skipped: int = 0,
    ) -> None:
        st = self._state
        en, zh = describe(
            action,
            node,
            path_stack=st.path_stack,
            visited=st.visited,
            target=skipped_edge.target if skipped_edge else target,
            source=skipped_edge.source if skipped_edge else None,
            skipped=skipped,
        )
        self.steps.append(StepRecord(
            index=len(self.steps),
            action=action,
            node=node,
            explanation=en,
            explanation_zh=zh,
            visited=frozenset(st.visited),
            on_path=frozenset(st.on_path),
            path_stack=tuple(st.path_stack),
            target_neighbor=target,
            cycle_node=cycle_node,
            skipped_edge=skipped_edge,
        ))


class _TracedWalk:
    """A single traced DFS run.  Not reusable."""

    __slots__ = (
        "_graph", "_policy", "_state", "_frames",
        "rec", "skipped", "first_loop", "first_edge",
    )

    def __init__(self, graph: Graph, policy: TracePolicy) -> None:
        self._graph = graph
        self._policy = policy
        self._state = TraversalState()
        self._frames: list[tuple[NodeId, Iterator[NodeId]]] = []
        self.rec = _Recorder(self._state)
        self.skipped: list[Edge] = []
        self.first_loop: list[NodeId] | None = None
        self.first_edge: Edge | None = None

    def _arrive(self, node: NodeId) -> bool:
        """Record arrival at *node*.  Returns True if the walk must abort."""
        st, rec = self._state, self.rec
        rec.capture(StepAction.ENTER_NODE, node)
        rec.capture(StepAction.CHECK_IN_STACK, node)

        if st.is_on_path(node):
            rec.capture(StepAction.CYCLE_FOUND, node, cycle_node=node)
            edge = st.back_edge_to(node)
            if self.first_edge is None:
                self.first_loop = st.loop_through(node)
                self.first_edge = edge
            if self._policy is TracePolicy.STOP_AT_FIRST_CYCLE:
                log.debug("Cycle at %r, aborting trace", node)
                return True
            log.debug("Skipping back edge %s", edge)
            self.skipped.append(edge)
            rec.capture(StepAction.SKIP_CYCLE, node, skipped_edge=edge)
            return False

        rec.capture(StepAction.CHECK_VISITED, node)
        if st.is_visited(node):
            rec.capture(StepAction.SKIP_VISITED, node)
            return False

        st.enter(node)
        rec.capture(StepAction.ADD_TO_STACK, node)
        self._frames.append((node, iter(self._graph.successors(node))))
        return False

    def run(self, start: NodeId) -> bool:
        """Walk from *start*.  Returns True if the walk was aborted."""
        if self._arrive(start):
            return True
        frames = self._frames
        while frames:
            node, succs = frames[-1]
            succ = next(succs, None)
            if succ is None:
                frames.pop()
                self.rec.capture(StepAction.BACKTRACK, node)
                self._state.leave(node)
                self.rec.capture(StepAction.MARK_SAFE, node)
                continue
            self.rec.capture(StepAction.EXPLORE_NEIGHBOR, node, target=succ)
            if self._arrive(succ):
                return True
        return False


def detect_cycle_with_trace(
    graph: GraphLike,
    start: NodeId,
    policy: TracePolicy = DEFAULT_POLICY,
) -> TraceResult:
    """Run cycle detection from *start* and record every decision.

    The first record is always START.  If *start* is not a declared
    node the trace stops there and the result carries an error.  With
    STOP_AT_FIRST_CYCLE the last record is CYCLE_FOUND when a cycle is
    reachable; otherwise the last record is COMPLETE.
    """
    g = as_graph(graph)
    start = node_id(start)
    walk = _TracedWalk(g, policy)
    walk.rec.capture(StepAction.START, start)

    if start not in g:
        log.debug("Start node %r missing from %r", start, g)
        return TraceResult(
            found=False,
            steps=tuple(walk.rec.steps),
            policy=policy,
            error=missing_node_message(start),
        )

    if walk.run(start):
        return TraceResult(
            found=True,
            steps=tuple(walk.rec.steps),
            policy=policy,
            loop_path=walk.first_loop,
            cycle_edge=walk.first_edge,
        )

    walk.rec.capture(StepAction.COMPLETE, start, skipped=len(walk.skipped))
    steps = tuple(walk.rec.steps)
    if walk.skipped:
        return TraceResult(
            found=True,
            steps=steps,
            policy=policy,
            loop_path=walk.first_loop,
            cycle_edge=walk.first_edge,
            handled=True,
            skipped_edges=list(walk.skipped),
        )
    return TraceResult(found=False, steps=steps, policy=policy)
