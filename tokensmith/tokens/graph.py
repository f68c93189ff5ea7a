"""Alias graph construction, cycle detection and token resolution."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

from ..errors import TokenResolutionError
from ..models import CycleReport, TokenGraph, TokenGraphNode, alias_target_of
from .walker import walk_tokens

DEFAULT_MAX_DEPTH = 20

REASON_CYCLE = "cycle"
REASON_MISSING = "missing target"
REASON_DEPTH = "alias chain too deep"


def build_token_graph(*documents: Any) -> TokenGraph:
    """Merge token documents into one graph; later documents overwrite earlier paths."""
    nodes: Dict[str, TokenGraphNode] = {}
    edges: Dict[str, str] = {}
    for document in documents:
        if document is None:
            continue
        for path, token in walk_tokens(document):
            key = "/".join(path)
            target = alias_target_of(token)
            nodes[key] = TokenGraphNode(
                path=path,
                kind=token["$type"],
                raw_value=token.get("$value"),
                alias_target=tuple(target.split("/")) if target else None,
            )
            if target:
                edges[key] = target
            else:
                edges.pop(key, None)
    return TokenGraph(nodes=nodes, edges=edges)


def detect_cycles(graph: TokenGraph) -> CycleReport:
    """Report every distinct alias cycle reachable from an unvisited start node."""
    cycles: List[List[str]] = []
    visited: Set[str] = set()

    for start in graph.edges:
        if start in visited:
            continue
        chain: List[str] = []
        in_stack: Set[str] = set()
        node: Optional[str] = start
        while node is not None:
            if node in in_stack:
                cycles.append(chain[chain.index(node):] + [node])
                break
            if node in visited:
                break
            visited.add(node)
            in_stack.add(node)
            chain.append(node)
            node = graph.edges.get(node)

    return CycleReport(has_cycles=bool(cycles), cycles=cycles)


def format_cycle_warnings(report: CycleReport) -> List[str]:
    return [f"Circular reference: {' → '.join(chain)}" for chain in report.cycles]


def resolve_token(
    path: str, graph: TokenGraph, max_depth: int = DEFAULT_MAX_DEPTH
) -> Optional[TokenGraphNode]:
    """Follow alias edges from ``path`` to a node without an alias.

    Returns None when the chain revisits a path, points at a node missing from
    the graph, or exceeds ``max_depth``. A partial result is never returned.
    """
    node, _reason = explain_resolution(path, graph, max_depth)
    return node


def resolve_or_raise(
    path: str, graph: TokenGraph, max_depth: int = DEFAULT_MAX_DEPTH
) -> TokenGraphNode:
    node, reason = explain_resolution(path, graph, max_depth)
    if node is None:
        raise TokenResolutionError(path, reason or REASON_MISSING)
    return node


def explain_resolution(
    path: str, graph: TokenGraph, max_depth: int = DEFAULT_MAX_DEPTH
) -> Tuple[Optional[TokenGraphNode], Optional[str]]:
    """Resolve ``path`` and return ``(node, None)`` or ``(None, reason)``."""
    current = path
    seen: Set[str] = set()
    for _ in range(max_depth):
        if current in seen:
            return None, REASON_CYCLE
        seen.add(current)
        node = graph.nodes.get(current)
        if node is None:
            return None, REASON_MISSING
        target = graph.edges.get(current)
        if target is None:
            return node, None
        current = target
    return None, REASON_DEPTH


def unresolvable_tokens(
    graph: TokenGraph, max_depth: int = DEFAULT_MAX_DEPTH
) -> Dict[str, str]:
    """Return aliased tokens whose chains loop or run too deep, with the reason.

    Aliases pointing outside the graph are not listed: Figma exports carry the
    already-resolved value on the aliasing token, so a primitive collection that
    was not uploaded is not a failure.
    """
    failures: Dict[str, str] = {}
    for key in graph.edges:
        node, reason = explain_resolution(key, graph, max_depth)
        if node is None and reason in (REASON_CYCLE, REASON_DEPTH):
            failures[key] = reason
    return failures


__all__ = [
    "build_token_graph",
    "detect_cycles",
    "explain_resolution",
    "format_cycle_warnings",
    "resolve_or_raise",
    "resolve_token",
    "unresolvable_tokens",
]
