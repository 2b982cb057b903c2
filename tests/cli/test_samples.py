"""Tests for the built-in sample graphs."""
from __future__ import annotations

import pytest

from citeloop.graph.cycle_detector import detect_cycle
from citeloop.samples import SAMPLE_GRAPHS, get_sample

EXPECTED_CYCLES = {
    "patlytics_edge": ["2", "3", "2"],
    "self_loop": ["1", "1"],
    "no_cycle": None,
    "long_cycle": ["1", "2", "3", "4", "1"],
    "complex": ["B", "D", "C", "F", "B"],
    "diamond_safe": None,
}


class TestSamples:
    def test_all_samples_present(self) -> None:
        assert set(SAMPLE_GRAPHS) == set(EXPECTED_CYCLES)

    @pytest.mark.parametrize("key", sorted(EXPECTED_CYCLES))
    def test_sample_outcome(self, key: str) -> None:
        sample = get_sample(key)
        result = detect_cycle(sample.adjacency(), sample.default_start)
        assert result.loop_path == EXPECTED_CYCLES[key]

    def test_default_start_is_first_key(self) -> None:
        assert get_sample("complex").default_start == "A"

    def test_adjacency_is_fresh_copy(self) -> None:
        sample = get_sample("no_cycle")
        sample.adjacency()["1"].append("x")
        assert sample.adjacency()["1"] == ["2", "3"]

    def test_unknown_sample(self) -> None:
        with pytest.raises(KeyError, match="patlytics_edge"):
            get_sample("nope")
