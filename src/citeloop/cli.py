"""citeloop CLI entry point.

Usage: citeloop [command] [FILE | --sample NAME] [--start ID]

FILE is a JSON adjacency mapping ({"1": ["2", "7"], ...}); "-" reads
stdin.  Exit status: 0 clean (or repaired), 1 cycle found, 2 bad input.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from citeloop.domain.actions import Language, TracePolicy
from citeloop.graph.adjacency import Graph, MalformedGraphError
from citeloop.graph.cycle_detector import detect_cycle
from citeloop.graph.eliminator import eliminate_cycles
from citeloop.graph.tracer import DEFAULT_POLICY, detect_cycle_with_trace
from citeloop.report import (
    format_detection,
    format_elimination,
    format_repair,
    format_trace,
)
from citeloop.samples import SAMPLE_GRAPHS, get_sample

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CYCLE = 1
EXIT_BAD_INPUT = 2


class InputError(Exception):
    """Graph input could not be loaded."""


def _add_graph_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "file", nargs="?",
        help='JSON adjacency file, or "-" for stdin.',
    )
    p.add_argument(
        "--sample", choices=sorted(SAMPLE_GRAPHS),
        help="Use a built-in sample graph instead of FILE.",
    )
    p.add_argument(
        "--start",
        help="Start node id (default: first key of the graph).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="citeloop",
        description="Find and break circular references in citation graphs.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging on stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("samples", help="List the built-in sample graphs.")

    p = subparsers.add_parser("detect", help="Report the first reachable cycle.")
    _add_graph_args(p)

    p = subparsers.add_parser("trace", help="Print a step-by-step DFS trace.")
    _add_graph_args(p)
    p.add_argument(
        "--policy", choices=[tp.value for tp in TracePolicy],
        default=DEFAULT_POLICY.value,
        help=f"What to do on a cycle (default: {DEFAULT_POLICY.value})",
    )
    p.add_argument(
        "--lang", choices=[lang.value for lang in Language],
        default=Language.EN.value,
        help="Explanation language (default: en)",
    )
    p.add_argument(
        "--step", type=int, default=None,
        help="Show only this step index (negative counts from the end).",
    )

    p = subparsers.add_parser("preview", help="List edges a fix would remove.")
    _add_graph_args(p)

    p = subparsers.add_parser("fix", help="Remove back edges and print the DAG.")
    _add_graph_args(p)
    return parser


def _read_json(path: str) -> Any:
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except OSError as exc:
        raise InputError(f"Cannot read {path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON syntax in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputError(f"Cannot decode {path}: {exc}") from exc


def _load(args: argparse.Namespace) -> tuple[Graph, str]:
    """Resolve (graph, start) from FILE / --sample / --start."""
    if args.sample and args.file:
        raise InputError("Give either FILE or --sample, not both")
    if args.sample:
        sample = get_sample(args.sample)
        graph = Graph.from_mapping(sample.adjacency())
    elif args.file:
        try:
            graph = Graph.from_mapping(_read_json(args.file))
        except MalformedGraphError as exc:
            raise InputError(str(exc)) from exc
    else:
        raise InputError("No graph given: pass FILE or --sample")

    start = args.start
    if start is None:
        start = next(graph.nodes(), None)
        if start is None:
            raise InputError("Graph is empty: nothing to check")
    log.debug("Loaded %r, start=%r", graph, start)
    return graph, start


def _run_samples() -> int:
    for sample in SAMPLE_GRAPHS.values():
        print(f"{sample.key:<16} {sample.name:<22} {sample.description}")
    return EXIT_OK


def _run_detect(args: argparse.Namespace) -> int:
    graph, start = _load(args)
    result = detect_cycle(graph, start)
    print(format_detection(result))
    if not result.checked:
        return EXIT_BAD_INPUT
    return EXIT_CYCLE if result.found else EXIT_OK


def _run_trace(args: argparse.Namespace) -> int:
    graph, start = _load(args)
    result = detect_cycle_with_trace(graph, start, TracePolicy(args.policy))
    try:
        print(format_trace(result, Language(args.lang), step=args.step))
    except IndexError:
        raise InputError(
            f"Step {args.step} out of range (trace has {len(result)} steps)"
        ) from None
    if result.error is not None:
        return EXIT_BAD_INPUT
    return EXIT_CYCLE if result.found and not result.handled else EXIT_OK


def _run_preview(args: argparse.Namespace) -> int:
    graph, start = _load(args)
    result = eliminate_cycles(graph, start)
    recheck = detect_cycle(result.dag, start)
    if not recheck.checked:
        print(format_detection(recheck))
        return EXIT_BAD_INPUT
    print(format_elimination(result))
    return EXIT_OK


def _run_fix(args: argparse.Namespace) -> int:
    graph, start = _load(args)
    result = eliminate_cycles(graph, start)
    recheck = detect_cycle(result.dag, start)
    if not recheck.checked:
        # stdout carries only a repaired graph
        print(format_repair(result, recheck), file=sys.stderr)
        return EXIT_BAD_INPUT
    print(json.dumps(result.dag.to_mapping(), indent=2))
    print(format_repair(result, recheck), file=sys.stderr)
    return EXIT_CYCLE if recheck.found else EXIT_OK


_COMMANDS = {
    "detect": _run_detect,
    "trace": _run_trace,
    "preview": _run_preview,
    "fix": _run_fix,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_OK
    if args.command == "samples":
        return _run_samples()

    try:
        return _COMMANDS[args.command](args)
    except InputError as exc:
        print(f"citeloop: error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
