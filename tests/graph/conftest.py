"""Shared fixtures for graph engine tests."""
from __future__ import annotations

import pytest

from citeloop.graph.adjacency import Graph


@pytest.fixture
def empty_graph() -> Graph:
    return Graph()


@pytest.fixture
def patlytics_graph() -> dict[str, list[str]]:
    """The original report: 2 -> 3 -> 2, plus 3 -> 1 and dangling 4, 7."""
    return {"1": ["2", "7"], "2": ["3", "4"], "3": ["2", "1"]}


@pytest.fixture
def self_loop_graph() -> dict[str, list[str]]:
    return {"1": ["1", "2"], "2": ["3"], "3": []}


@pytest.fixture
def diamond_graph() -> dict[str, list[str]]:
    """
    1 -> 2 -> 4
    1 -> 3 -> 4
    """
    return {"1": ["2", "3"], "2": ["4"], "3": ["4"], "4": []}


@pytest.fixture
def ring_graph() -> dict[str, list[str]]:
    """1 -> 2 -> 3 -> 4 -> 1"""
    return {"1": ["2"], "2": ["3"], "3": ["4"], "4": ["1"]}


@pytest.fixture
def complex_graph() -> dict[str, list[str]]:
    """Cycle B -> D -> C -> F -> B hidden behind two entry paths."""
    return {
        "A": ["B", "C"],
        "B": ["D", "E"],
        "C": ["F"],
        "D": ["C"],
        "E": ["F"],
        "F": ["B"],
    }
