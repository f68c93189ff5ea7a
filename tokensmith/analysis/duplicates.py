"""Color tokens that resolve to the same value."""

from __future__ import annotations

import json
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..tokens.graph import build_token_graph, resolve_token
from ..tokens.walker import walk_color_tokens


@dataclass(frozen=True)
class DuplicateGroup:
    value: str
    tokens: Tuple[str, ...]


def find_duplicate_values(document: Any, all_documents: Optional[List[Any]] = None) -> List[DuplicateGroup]:
    """Group color tokens of ``document`` by resolved value, largest groups first.

    Aliases resolve through the graph of ``all_documents`` (``document`` alone
    by default); an unresolvable alias falls back to its own exported value.
    """
    graph = build_token_graph(*(all_documents or [document]))
    by_value: Dict[str, List[str]] = OrderedDict()
    for path, token in walk_color_tokens(document):
        key = "/".join(path)
        if not token.get("$value"):
            continue
        node = resolve_token(key, graph)
        value = node.raw_value if node is not None else token["$value"]
        by_value.setdefault(_value_key(value), []).append(key)

    groups = [DuplicateGroup(value=value, tokens=tuple(names)) for value, names in by_value.items() if len(names) >= 2]
    # sorted() is stable, so equal-sized groups keep document order.
    return sorted(groups, key=lambda group: -len(group.tokens))


def _value_key(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


__all__ = ["DuplicateGroup", "find_duplicate_values"]
