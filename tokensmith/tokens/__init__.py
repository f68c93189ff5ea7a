"""Token document traversal, alias graph and color conversion."""

from __future__ import annotations

from .graph import (
    build_token_graph,
    detect_cycles,
    explain_resolution,
    format_cycle_warnings,
    resolve_or_raise,
    resolve_token,
    unresolvable_tokens,
)
from .walker import (
    collect_unknown_token_types,
    get_token_at_path,
    looks_like_token_document,
    walk_color_tokens,
    walk_tokens,
    walk_tokens_of_kind,
)

__all__ = [
    "build_token_graph",
    "collect_unknown_token_types",
    "detect_cycles",
    "explain_resolution",
    "format_cycle_warnings",
    "get_token_at_path",
    "looks_like_token_document",
    "resolve_or_raise",
    "resolve_token",
    "unresolvable_tokens",
    "walk_color_tokens",
    "walk_tokens",
    "walk_tokens_of_kind",
]
