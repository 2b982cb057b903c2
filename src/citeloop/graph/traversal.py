"""Bookkeeping threaded through one DFS walk.

Three pieces of state, all scoped to a single run:

  visited     nodes fully explored and proven free of reachable
              cycles.  Only ever grows.
  on_path     the nodes on the current root-to-frontier path, as a set
              for O(1) back-edge checks.
  path_stack  the same nodes in entry order, used to cut the literal
              cycle out of the path when a back-edge shows up.

A node is never in visited and on_path at the same time: it moves from
the path into visited when the walk backtracks out of it.
"""
from __future__ import annotations

from citeloop.domain.types import Edge, NodeId


class TraversalState:
    __slots__ = ("visited", "on_path", "path_stack")

    def __init__(self) -> None:
        self.visited: set[NodeId] = set()
        self.on_path: set[NodeId] = set()
        self.path_stack: list[NodeId] = []

    def enter(self, node: NodeId) -> None:
        """Push *node* onto the active path."""
        self.on_path.add(node)
        self.path_stack.append(node)

    def leave(self, node: NodeId) -> None:
        """Backtrack out of *node* and mark it safe."""
        top = self.path_stack.pop()
        if top != node:
            raise RuntimeError(
                f"Backtracked from {node!r} but path top is {top!r}"
            )
        self.on_path.discard(node)
        self.visited.add(node)

    def is_on_path(self, node: NodeId) -> bool:
        return node in self.on_path

    def is_visited(self, node: NodeId) -> bool:
        return node in self.visited

    @property
    def frontier(self) -> NodeId | None:
        """The deepest node on the active path, or None when empty."""
        return self.path_stack[-1] if self.path_stack else None

    def back_edge_to(self, culprit: NodeId) -> Edge:
        """The edge from the path frontier back to *culprit*."""
        frontier = self.frontier
        if frontier is None:
            raise RuntimeError("No active path: there is no back-edge")
        return Edge(frontier, culprit)

    def loop_through(self, culprit: NodeId) -> list[NodeId]:
        """Closed cycle from *culprit*'s first occurrence on the path.

        Path [1, 2, 3] with culprit 2 gives [2, 3, 2].
        """
        start = self.path_stack.index(culprit)
        loop = self.path_stack[start:]
        loop.append(culprit)
        return loop

    def __repr__(self) -> str:
        return (
            f"TraversalState(visited={len(self.visited)}, "
            f"path={'->'.join(self.path_stack) or '-'})"
        )
