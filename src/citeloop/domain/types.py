"""Shared type aliases and value types used across the package."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

NodeId: TypeAlias = str
Adjacency: TypeAlias = dict[NodeId, list[NodeId]]


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge source -> target (e.g. patent A cites patent B)."""
    source: NodeId
    target: NodeId

    def __str__(self) -> str:
        return f"{self.source}->{self.target}"
