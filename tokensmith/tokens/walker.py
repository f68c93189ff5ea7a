"""Generic traversal over normalized token documents."""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

TokenEntry = Tuple[Tuple[str, ...], Dict[str, Any]]

KNOWN_TOKEN_TYPES = frozenset(
    {
        "color",
        "number",
        "shadow",
        "border",
        "typography",
        "gradient",
        "transition",
        "cubic-bezier",
        "duration",
        "dimension",
        "fontFamily",
        "fontWeight",
        "fontSize",
        "lineHeight",
        "letterSpacing",
        "string",
        "boolean",
        "other",
    }
)


def is_token(node: Any) -> bool:
    """Return True when ``node`` is a token leaf (a mapping with a string ``$type``)."""
    return isinstance(node, Mapping) and isinstance(node.get("$type"), str)


def walk_tokens(
    document: Any,
    predicate: Optional[Callable[[Tuple[str, ...], Dict[str, Any]], bool]] = None,
) -> List[TokenEntry]:
    """Return ``(path, token)`` pairs in depth-first, key-insertion order.

    Keys beginning with ``$`` are metadata and never descended into. Values that
    are not mappings are skipped rather than rejected, so partially malformed
    exports still yield their valid branches.
    """
    results: List[TokenEntry] = []
    _walk(document, (), predicate, results)
    return results


def walk_color_tokens(document: Any) -> List[TokenEntry]:
    return walk_tokens(document, lambda _path, token: token.get("$type") == "color")


def walk_tokens_of_kind(document: Any, kind: str) -> List[TokenEntry]:
    return walk_tokens(document, lambda _path, token: token.get("$type") == kind)


def get_token_at_path(
    document: Any, path: Sequence[str], kind: str | None = None
) -> Optional[Dict[str, Any]]:
    """Return the token found at exactly ``path`` or None."""
    current = document
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    if not is_token(current):
        return None
    if kind is not None and current.get("$type") != kind:
        return None
    return current  # type: ignore[return-value]


def collect_unknown_token_types(document: Any) -> Dict[str, int]:
    """Count ``$type`` values outside the known DTCG vocabulary."""
    counts: Counter[str] = Counter()
    for _path, token in walk_tokens(document):
        token_type = token["$type"]
        if token_type not in KNOWN_TOKEN_TYPES:
            counts[token_type] += 1
    return dict(counts)


def looks_like_token_document(document: Any, kind: str) -> bool:
    """Shallow sniff: does the document contain at least one token of ``kind``?"""
    if not isinstance(document, Mapping):
        return False
    return any(token.get("$type") == kind for _path, token in walk_tokens(document))


def _walk(
    node: Any,
    path: Tuple[str, ...],
    predicate: Optional[Callable[[Tuple[str, ...], Dict[str, Any]], bool]],
    results: List[TokenEntry],
) -> None:
    if not isinstance(node, Mapping):
        return
    if isinstance(node.get("$type"), str):
        if predicate is None or predicate(path, node):  # type: ignore[arg-type]
            results.append((path, node))  # type: ignore[arg-type]
        return
    for key, value in node.items():
        if isinstance(key, str) and key.startswith("$"):
            continue
        _walk(value, path + (str(key),), predicate, results)


__all__ = [
    "KNOWN_TOKEN_TYPES",
    "collect_unknown_token_types",
    "get_token_at_path",
    "is_token",
    "looks_like_token_document",
    "walk_color_tokens",
    "walk_tokens",
    "walk_tokens_of_kind",
]
