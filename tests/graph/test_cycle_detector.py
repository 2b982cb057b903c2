"""Tests for start-node DFS cycle detection."""
from __future__ import annotations

import copy

import pytest

from citeloop.domain.types import Edge
from citeloop.graph.adjacency import Graph, MalformedGraphError
from citeloop.graph.cycle_detector import CycleResult, detect_cycle


class TestCycleDetector:
    def test_patlytics_edge_case(self, patlytics_graph: dict) -> None:
        result = detect_cycle(patlytics_graph, "1")
        assert result.found
        assert result.loop_path == ["2", "3", "2"]
        assert result.cycle_edge == Edge("3", "2")
        assert result.path == ["1", "2", "3"]
        assert result.checked

    def test_self_loop(self, self_loop_graph: dict) -> None:
        result = detect_cycle(self_loop_graph, "1")
        assert result.found
        assert result.loop_path == ["1", "1"]
        assert result.cycle_edge == Edge("1", "1")

    def test_no_cycle_diamond(self, diamond_graph: dict) -> None:
        result = detect_cycle(diamond_graph, "1")
        assert result == CycleResult(found=False)

    def test_long_cycle(self, ring_graph: dict) -> None:
        result = detect_cycle(ring_graph, "1")
        assert result.found
        assert result.loop_path == ["1", "2", "3", "4", "1"]
        assert result.cycle_edge == Edge("4", "1")

    def test_complex_hidden_cycle(self, complex_graph: dict) -> None:
        result = detect_cycle(complex_graph, "A")
        assert result.found
        assert result.loop_path == ["B", "D", "C", "F", "B"]
        assert result.cycle_edge == Edge("F", "B")

    def test_missing_start_node(self, ring_graph: dict) -> None:
        result = detect_cycle(ring_graph, "99")
        assert not result.found
        assert not result.checked
        assert result.error is not None
        assert '"99"' in result.error
        assert result.loop_path is None

    def test_dangling_node_cannot_be_start(self, patlytics_graph: dict) -> None:
        result = detect_cycle(patlytics_graph, "7")
        assert result.error == 'Node "7" not found in graph'

    def test_start_with_no_outgoing_edges(self) -> None:
        result = detect_cycle({"1": []}, "1")
        assert not result.found
        assert result.checked

    def test_numeric_start_normalized(self, ring_graph: dict) -> None:
        assert detect_cycle(ring_graph, 1).found  # type: ignore[arg-type]

    def test_numeric_successors(self) -> None:
        result = detect_cycle({"1": [2], "2": [1]}, "1")
        assert result.loop_path == ["1", "2", "1"]

    def test_cycle_unreachable_from_start(self) -> None:
        g = {"1": ["2"], "2": [], "3": ["4"], "4": ["3"]}
        assert not detect_cycle(g, "1").found
        assert detect_cycle(g, "3").found

    def test_visited_subtree_not_a_cycle(self) -> None:
        """Two paths into the same node must not look like a loop."""
        g = {"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": ["e"], "e": []}
        assert not detect_cycle(g, "a").found

    def test_first_listed_successor_wins(self) -> None:
        g = {"s": ["x", "y"], "x": ["s"], "y": ["y"]}
        assert detect_cycle(g, "s").loop_path == ["s", "x", "s"]
        g = {"s": ["y", "x"], "x": ["s"], "y": ["y"]}
        assert detect_cycle(g, "s").loop_path == ["y", "y"]

    def test_input_not_mutated(self, patlytics_graph: dict) -> None:
        before = copy.deepcopy(patlytics_graph)
        detect_cycle(patlytics_graph, "1")
        assert patlytics_graph == before

    def test_accepts_graph_instance(self, ring_graph: dict) -> None:
        g = Graph.from_mapping(ring_graph)
        assert detect_cycle(g, "3").loop_path == ["3", "4", "1", "2", "3"]

    def test_malformed_graph_raises(self) -> None:
        with pytest.raises(MalformedGraphError):
            detect_cycle([["1", "2"]], "1")  # type: ignore[arg-type]

    def test_cycle_path_is_valid(self, complex_graph: dict) -> None:
        """The reported cycle path must follow real edges."""
        g = Graph.from_mapping(complex_graph)
        path = detect_cycle(g, "A").loop_path
        assert path is not None
        assert path[0] == path[-1]
        for i in range(len(path) - 1):
            assert g.has_edge(path[i], path[i + 1]), (
                f"Edge {path[i]}->{path[i+1]} not in graph"
            )
