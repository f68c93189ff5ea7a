"""Which semantic tokens are affected when a primitive changes."""

from __future__ import annotations

import re
from collections import OrderedDict, deque
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Set

from ..models import DependencyEdge, DiffRecord, ImpactEntry, alias_target_of
from ..tokens.walker import walk_color_tokens

CHANGE_MODIFIED = "modified"
CHANGE_RENAMED = "renamed"
CHANGE_REMOVED = "removed"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class DependencyEntry:
    """A semantic color aliasing ``primitive``; ``hex`` is the exported value."""

    semantic: str
    primitive: str
    hex: str


def build_dependency_map(light_document: Any) -> List[DependencyEntry]:
    """Collect alias relationships from the light-mode color export."""
    entries: List[DependencyEntry] = []
    for path, token in walk_color_tokens(light_document):
        target = alias_target_of(token)
        value = token.get("$value")
        hex_value = value.get("hex") if isinstance(value, Mapping) else None
        if target and isinstance(hex_value, str):
            entries.append(DependencyEntry(semantic="/".join(path), primitive=target, hex=hex_value))
    return entries


def dependency_edges(dep_map: Sequence[DependencyEntry]) -> List[DependencyEdge]:
    return [DependencyEdge(from_token=entry.semantic, to_token=entry.primitive) for entry in dep_map]


def dependents_index(dep_map: Sequence[DependencyEntry]) -> Dict[str, List[str]]:
    """Map each aliased path to the tokens that reference it directly."""
    users: Dict[str, List[str]] = OrderedDict()
    for entry in dep_map:
        users.setdefault(entry.primitive, []).append(entry.semantic)
    return users


def transitive_dependents(start: str, users: Mapping[str, Sequence[str]]) -> List[str]:
    """Breadth-first walk of "what uses this", following semantic to semantic aliases."""
    visited: Set[str] = {start}
    affected: List[str] = []
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for user in users.get(current, ()):
            if user in visited:
                continue
            visited.add(user)
            affected.append(user)
            queue.append(user)
    return affected


def compute_impact(
    dep_map: Sequence[DependencyEntry],
    modified: Iterable[str] = (),
    renamed: Iterable[str] = (),
    removed: Iterable[str] = (),
) -> List[ImpactEntry]:
    """Report every changed primitive together with the semantics that depend on it.

    Names come from generated files (``grey-750``, ``GREY_750``, ``grey750``)
    and are matched against alias targets (``Colour/Grey/750``) ignoring case
    and separators. Later change kinds win: removed over renamed over modified.
    """
    changes: Dict[str, str] = {}
    for names, change_type in ((modified, CHANGE_MODIFIED), (renamed, CHANGE_RENAMED), (removed, CHANGE_REMOVED)):
        for name in names:
            key = squash_name(name)
            if key:
                changes[key] = change_type

    if not changes:
        return []

    users = dependents_index(dep_map)
    impact: List[ImpactEntry] = []
    for target in users:
        change_type = _match_change(target, changes)
        if change_type is None:
            continue
        impact.append(
            ImpactEntry(
                primitive_name=target,
                change_type=change_type,
                affected_semantics=tuple(transitive_dependents(target, users)),
            )
        )
    return impact


def impact_from_diffs(dep_map: Sequence[DependencyEntry], diffs: Iterable[DiffRecord]) -> List[ImpactEntry]:
    """Impact of a run's diffs; a renamed primitive is reported as renamed, not removed."""
    modified: List[str] = []
    renamed: List[str] = []
    removed: List[str] = []
    for record in diffs:
        renamed_old = [rename.old_name for rename in record.renamed_tokens]
        modified.extend(record.modified_token_names)
        renamed.extend(renamed_old)
        removed.extend(name for name in record.removed_tokens if name not in renamed_old)
    return compute_impact(dep_map, modified, renamed, removed)


def target_keys(target: str) -> List[str]:
    """Normalized keys a generated name may use for ``target``, longest suffix first.

    ``Colour/Grey/750`` yields ``colourgrey750``, ``grey750`` and ``750``.
    """
    segments = [segment for segment in target.split("/") if segment]
    return [squash_name("".join(segments[start:])) for start in range(len(segments))]


def squash_name(name: str) -> str:
    """Lower-case ``name`` and drop every separator: ``GREY_750`` and ``grey-750`` both become ``grey750``."""
    return _NON_ALNUM_RE.sub("", name.lower())


def _match_change(target: str, changes: Mapping[str, str]) -> str | None:
    for key in target_keys(target):
        if key in changes:
            return changes[key]
    return None


__all__ = [
    "CHANGE_MODIFIED",
    "CHANGE_REMOVED",
    "CHANGE_RENAMED",
    "DependencyEntry",
    "build_dependency_map",
    "compute_impact",
    "dependency_edges",
    "dependents_index",
    "impact_from_diffs",
    "squash_name",
    "target_keys",
    "transitive_dependents",
]
