"""Human-readable explanations for each traced decision point.

Every StepAction has two templates: a terse shell-style line for the
debugger console and a Traditional Chinese sentence for the localized
panel.  Templates are filled with str.format; the available fields are
node, target, source, path, stack, visited and count.
"""
from __future__ import annotations

from typing import Any

from citeloop.domain.actions import StepAction

_TEMPLATES: dict[StepAction, tuple[str, str]] = {
    StepAction.START: (
        '> init dfs --start="{node}"',
        '初始化深度優先搜尋，起點="{node}"',
    ),
    StepAction.ENTER_NODE: (
        "> push node[{node}]",
        "進入節點 {node}",
    ),
    StepAction.CHECK_IN_STACK: (
        "> check stack.contains({node}) => [{stack}]",
        "檢查堆疊是否包含 {node}",
    ),
    StepAction.CYCLE_FOUND: (
        "[!] CYCLE DETECTED @ node[{node}] | path: {path}",
        "偵測到循環：節點 {node}，路徑 {path}",
    ),
    StepAction.SKIP_CYCLE: (
        "[ok] SKIP edge[{source}]->[{target}] -- avoiding infinite loop",
        "跳過邊 {source}->{target}，避免無限迴圈",
    ),
    StepAction.CHECK_VISITED: (
        "> check visited.has({node}) => {{{visited}}}",
        "檢查節點 {node} 是否已訪問",
    ),
    StepAction.SKIP_VISITED: (
        "> skip node[{node}] -- already verified",
        "跳過節點 {node}，已驗證安全",
    ),
    StepAction.ADD_TO_STACK: (
        "> stack.push({node}) => [{stack}]",
        "將 {node} 加入堆疊",
    ),
    StepAction.EXPLORE_NEIGHBOR: (
        "> traverse edge[{node}]->[{target}]",
        "遍歷邊 {node} -> {target}",
    ),
    StepAction.BACKTRACK: (
        "> stack.pop() -- backtrack from node[{node}]",
        "回溯，從堆疊移除 {node}",
    ),
    StepAction.MARK_SAFE: (
        "> visited.add({node}) -- node verified safe",
        "節點 {node} 標記為安全",
    ),
}

_COMPLETE_CLEAN = (
    "> exit 0 -- no cycles detected, all paths verified",
    "檢測完成，無循環，所有路徑安全",
)
_COMPLETE_SKIPPED = (
    "[ok] COMPLETE: traversal finished. {count} cycle(s) detected and skipped.",
    "完成：遍歷結束。偵測到 {count} 個循環並已跳過。",
)


def _join(items: Any) -> str:
    return ",".join(items)


def describe(
    action: StepAction,
    node: str,
    *,
    path_stack: list[str],
    visited: set[str],
    target: str | None = None,
    source: str | None = None,
    skipped: int = 0,
) -> tuple[str, str]:
    """Return (technical, localized) explanations for one step.

    *path_stack* and *visited* describe the state at the moment the
    step is recorded.  COMPLETE picks its wording from *skipped*.
    """
    if action is StepAction.COMPLETE:
        en, zh = _COMPLETE_SKIPPED if skipped else _COMPLETE_CLEAN
    else:
        en, zh = _TEMPLATES[action]
    fields = {
        "node": node,
        "target": target if target is not None else "",
        "source": source if source is not None else "",
        "path": "->".join([*path_stack, node]),
        "stack": _join(path_stack),
        # sets have no stable order; sort so traces are reproducible
        "visited": _join(sorted(visited)),
        "count": skipped,
    }
    return en.format(**fields), zh.format(**fields)
