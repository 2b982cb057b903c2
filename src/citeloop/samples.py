"""Built-in sample citation graphs.

These are the canned scenarios from the demo UI: the original
infinite-loop report, a self-citation, two clean DAGs, a long ring and
a graph whose cycle only shows up two levels deep.
"""
from __future__ import annotations

from dataclasses import dataclass

from citeloop.domain.types import Adjacency, NodeId


@dataclass(frozen=True, slots=True)
class SampleGraph:
    key: str
    name: str
    description: str
    data: dict[str, tuple[str, ...]]

    @property
    def default_start(self) -> NodeId:
        """First declared node, the demo's default target patent."""
        return next(iter(self.data))

    def adjacency(self) -> Adjacency:
        """A fresh mutable {node: [successors]} copy."""
        return {node: list(succ) for node, succ in self.data.items()}


SAMPLE_GRAPHS: dict[str, SampleGraph] = {
    s.key: s
    for s in (
        SampleGraph(
            key="patlytics_edge",
            name="Patlytics Edge Case",
            description="The original infinite loop bug: 2->3->2",
            data={"1": ("2", "7"), "2": ("3", "4"), "3": ("2", "1")},
        ),
        SampleGraph(
            key="self_loop",
            name="Self Loop",
            description="Node points to itself: 1->1",
            data={"1": ("1", "2"), "2": ("3",), "3": ()},
        ),
        SampleGraph(
            key="no_cycle",
            name="No Cycle (DAG)",
            description="Directed acyclic graph, all paths safe",
            data={"1": ("2", "3"), "2": ("4",), "3": ("4",), "4": ()},
        ),
        SampleGraph(
            key="long_cycle",
            name="Long Cycle",
            description="Cycle spans multiple nodes: 1->2->3->4->1",
            data={"1": ("2",), "2": ("3",), "3": ("4",), "4": ("1",)},
        ),
        SampleGraph(
            key="complex",
            name="Complex Graph",
            description="Multiple paths with a hidden cycle",
            data={
                "A": ("B", "C"),
                "B": ("D", "E"),
                "C": ("F",),
                "D": ("C",),
                "E": ("F",),
                "F": ("B",),
            },
        ),
        SampleGraph(
            key="diamond_safe",
            name="Diamond (Safe)",
            description="Diamond pattern without a cycle",
            data={
                "1": ("2", "3"),
                "2": ("4",),
                "3": ("4",),
                "4": ("5",),
                "5": (),
            },
        ),
    )
}


def get_sample(key: str) -> SampleGraph:
    """Look up a sample by key.  Raises KeyError listing valid keys."""
    try:
        return SAMPLE_GRAPHS[key]
    except KeyError:
        valid = ", ".join(SAMPLE_GRAPHS)
        raise KeyError(f"Unknown sample {key!r} (choose from: {valid})") from None
