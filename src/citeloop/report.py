"""Report generation for detection, trace and repair results.

Formats result objects into plain-text blocks for terminal output.
"""
from __future__ import annotations

from citeloop.domain.actions import Language
from citeloop.graph.cycle_detector import CycleResult
from citeloop.graph.eliminator import EliminationResult
from citeloop.graph.tracer import StepRecord, TraceResult


def _edges(edges) -> str:
    return ", ".join(str(e) for e in edges)


def format_detection(result: CycleResult) -> str:
    """One PASS / FAIL / ERROR block for a detect_cycle result."""
    if result.error is not None:
        return f"ERROR: {result.error}"
    if not result.found:
        return "PASS: All paths verified safe. No cycles found."
    lines = [
        f"FAIL: Cycle detected in path: {' -> '.join(result.loop_path or [])}",
        f"  Back edge:   {result.cycle_edge}",
    ]
    if result.path:
        lines.append(f"  DFS path:    {' -> '.join(result.path)}")
    return "\n".join(lines)


def format_step(step: StepRecord, language: Language = Language.EN) -> str:
    """Format a single trace step with its state snapshot."""
    lines = [
        f"[{step.index:>4}] {step.action.name:<16} node={step.node:<6} "
        f"{step.explain(language)}",
        f"       path:    [{', '.join(step.path_stack)}]",
        f"       visited: {{{', '.join(sorted(step.visited))}}}",
    ]
    return "\n".join(lines)


def _trace_status(result: TraceResult) -> str:
    if result.error is not None:
        return f"ERROR: {result.error}"
    if result.handled:
        return (
            f"HANDLED: Traversal complete. {len(result.skipped_edges)} "
            f"cycle(s) detected and skipped: [{_edges(result.skipped_edges)}]"
        )
    if result.found:
        return (
            f"FAIL: Cycle detected in path: "
            f"{' -> '.join(result.loop_path or [])}"
        )
    return "PASS: All paths verified safe. No cycles found."


def format_trace(
    result: TraceResult,
    language: Language = Language.EN,
    step: int | None = None,
) -> str:
    """Format a whole trace, or only step *step* (negative counts from the end).

    Raises IndexError if *step* is out of range.
    """
    if step is not None:
        record = result.steps[step]
        return "\n".join([
            f"=== Step {record.index + 1}/{len(result)} "
            f"(policy: {result.policy.value}) ===",
            format_step(record, language),
        ])
    lines = [f"=== Trace (policy: {result.policy.value}, {len(result)} steps) ==="]
    lines.extend(format_step(s, language) for s in result.steps)
    lines.append("")
    lines.append(_trace_status(result))
    return "\n".join(lines)


def format_elimination(result: EliminationResult) -> str:
    """Preview of what eliminate_cycles would remove."""
    if not result.changed:
        return "No cycles to remove."
    return (
        f"Would remove {len(result.removed_edges)} edge(s): "
        f"[{_edges(result.removed_edges)}]"
    )


def format_repair(result: EliminationResult, recheck: CycleResult) -> str:
    """Summary after applying an elimination and re-running detection."""
    if recheck.error is not None:
        return f"ERROR: {recheck.error}"
    if not result.changed:
        return "No cycles to remove."
    lines = [
        f"Algorithm resolved {len(result.removed_edges)} conflict(s): "
        f"[{_edges(result.removed_edges)}]."
    ]
    if recheck.found:
        # cannot happen for cycles reachable from the start node
        lines.append(f"WARNING: graph still cyclic: {' -> '.join(recheck.loop_path or [])}")
    return "\n".join(lines)
