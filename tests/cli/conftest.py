"""Shared fixtures for CLI and report tests."""
from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_graph(tmp_path: Path):
    """Write a mapping (or raw text) to a JSON file and return its path."""

    def _write(data: object, name: str = "graph.json") -> str:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write
