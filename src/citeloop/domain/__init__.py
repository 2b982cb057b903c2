"""Domain vocabulary for citeloop.

Re-exports all public types for convenient access:
    from citeloop.domain import Edge, NodeId, StepAction, TracePolicy
"""
from citeloop.domain.actions import Language, StepAction, TracePolicy
from citeloop.domain.types import Adjacency, Edge, NodeId

__all__ = [
    "Adjacency",
    "Edge",
    "Language",
    "NodeId",
    "StepAction",
    "TracePolicy",
]
