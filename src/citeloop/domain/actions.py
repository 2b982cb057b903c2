"""Trace vocabulary: the decision points a traced DFS can record."""
from enum import Enum, auto


class StepAction(Enum):
    START = auto()
    ENTER_NODE = auto()
    CHECK_IN_STACK = auto()
    CYCLE_FOUND = auto()
    SKIP_CYCLE = auto()
    CHECK_VISITED = auto()
    SKIP_VISITED = auto()
    ADD_TO_STACK = auto()
    EXPLORE_NEIGHBOR = auto()
    BACKTRACK = auto()
    MARK_SAFE = auto()
    COMPLETE = auto()


class TracePolicy(Enum):
    """What the traced DFS does after it records CYCLE_FOUND.

    STOP_AT_FIRST_CYCLE aborts the walk, exactly like detect_cycle.
    SKIP_AND_CONTINUE drops the offending back-edge and keeps walking
    so the trace covers the whole reachable graph.
    """
    STOP_AT_FIRST_CYCLE = "stop"
    SKIP_AND_CONTINUE = "skip"


class Language(Enum):
    EN = "en"
    ZH = "zh"
