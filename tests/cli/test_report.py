"""Tests for plain-text result formatting."""
from __future__ import annotations

import pytest

from citeloop.domain.actions import Language, TracePolicy
from citeloop.graph.cycle_detector import CycleResult, detect_cycle
from citeloop.graph.eliminator import eliminate_cycles
from citeloop.graph.tracer import detect_cycle_with_trace
from citeloop.report import (
    format_detection,
    format_elimination,
    format_repair,
    format_step,
    format_trace,
)

PATLYTICS = {"1": ["2", "7"], "2": ["3", "4"], "3": ["2", "1"]}


class TestFormatDetection:
    def test_fail(self) -> None:
        text = format_detection(detect_cycle(PATLYTICS, "1"))
        assert text.splitlines()[0] == "FAIL: Cycle detected in path: 2 -> 3 -> 2"
        assert "Back edge:   3->2" in text
        assert "DFS path:    1 -> 2 -> 3" in text

    def test_pass(self) -> None:
        assert format_detection(CycleResult(found=False)).startswith("PASS")

    def test_error(self) -> None:
        text = format_detection(detect_cycle(PATLYTICS, "99"))
        assert text == 'ERROR: Node "99" not found in graph'


class TestFormatTrace:
    def test_step_block(self) -> None:
        step = detect_cycle_with_trace(PATLYTICS, "1")[4]
        text = format_step(step)
        assert text.splitlines()[0].startswith("[   4] ADD_TO_STACK")
        assert "path:    [1]" in text

    def test_step_localized(self) -> None:
        step = detect_cycle_with_trace(PATLYTICS, "1")[4]
        assert "將 1 加入堆疊" in format_step(step, Language.ZH)

    def test_full_trace_stop(self) -> None:
        result = detect_cycle_with_trace(
            PATLYTICS, "1", TracePolicy.STOP_AT_FIRST_CYCLE
        )
        text = format_trace(result)
        assert text.splitlines()[0] == (
            f"=== Trace (policy: stop, {len(result)} steps) ==="
        )
        assert text.splitlines()[-1] == "FAIL: Cycle detected in path: 2 -> 3 -> 2"

    def test_full_trace_error(self) -> None:
        text = format_trace(detect_cycle_with_trace(PATLYTICS, "99"))
        assert text.splitlines()[-1].startswith("ERROR:")

    def test_step_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            format_trace(detect_cycle_with_trace(PATLYTICS, "1"), step=10_000)


class TestFormatRepair:
    def test_preview(self) -> None:
        text = format_elimination(eliminate_cycles(PATLYTICS, "1"))
        assert text == "Would remove 2 edge(s): [3->1, 3->2]"

    def test_repair_summary(self) -> None:
        result = eliminate_cycles(PATLYTICS, "1")
        text = format_repair(result, detect_cycle(result.dag, "1"))
        assert text == "Algorithm resolved 2 conflict(s): [3->1, 3->2]."

    def test_nothing_to_repair(self) -> None:
        g = {"1": ["2"], "2": []}
        result = eliminate_cycles(g, "1")
        assert format_repair(result, detect_cycle(result.dag, "1")) == (
            "No cycles to remove."
        )
        assert format_elimination(result) == "No cycles to remove."

    def test_repair_missing_start(self) -> None:
        result = eliminate_cycles(PATLYTICS, "99")
        text = format_repair(result, detect_cycle(result.dag, "99"))
        assert text == 'ERROR: Node "99" not found in graph'
