"""Generic primitive + semantic color pipeline shared by the color emitters.

Every color emitter walks the same light/dark exports, builds the same
primitive map keyed by Figma alias target, pairs each semantic token with its
light and dark primitive and then renders. Only naming and the shape of a
light/dark expression differ per language; those live on an ``EmitterPolicy``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..models import TokenGraph, TokenPath, alias_target_of
from ..tokens.colors import Rgba, color_components, resolve_color_value
from ..tokens.graph import DEFAULT_MAX_DEPTH, REASON_CYCLE, REASON_DEPTH, build_token_graph
from ..tokens.walker import get_token_at_path, walk_color_tokens
from .shared import extract_sort_key, order_categories, path_to_token_name, split_segment

_COLOUR_ROOTS = ("colour", "color")


@dataclass(frozen=True)
class Primitive:
    """A palette color referenced by semantic tokens."""

    figma_name: str
    name: str
    value: str
    rgba: Rgba
    family: str
    sort_key: int


@dataclass(frozen=True)
class SemanticColor:
    """A semantic token paired with its light and dark primitives."""

    path: TokenPath
    token_name: str
    name: str
    category: str
    light: Primitive
    dark: Primitive
    is_static: bool


@dataclass
class ColorModel:
    """Primitives and semantic entries ready to be rendered."""

    primitives: Dict[str, Primitive] = field(default_factory=dict)
    semantics: List[SemanticColor] = field(default_factory=list)
    unresolved: Dict[str, str] = field(default_factory=dict)

    def families(self) -> List[Tuple[str, List[Primitive]]]:
        return group_by_family(self.primitives.values())

    def categories(self) -> List[Tuple[str, List[SemanticColor]]]:
        return group_by_category(self.semantics)


class EmitterPolicy(ABC):
    """Per-language naming and light/dark rendering rules."""

    separator: str = "-"

    @abstractmethod
    def primitive_name(self, segments: Sequence[str]) -> str:
        """Identifier for a primitive given its Figma name segments (``Colour/`` stripped)."""

    def semantic_name(self, token_name: str) -> str:
        return token_name

    def family(self, segments: Sequence[str]) -> str:
        """Leading non-numeric parts of the whole name; ``other`` also ends a family."""
        parts = [part for segment in segments for part in split_segment(segment)]
        family: List[str] = []
        for part in parts:
            if part[:1].isdigit() or part == "other":
                break
            family.append(part)
        return "-".join(family) or "-".join(parts)

    def reference(self, primitive: Primitive) -> str:
        """How a semantic expression refers to ``primitive``."""
        return primitive.name

    def light_dark(self, light: str, dark: str) -> str:
        return f"light-dark({light}, {dark})"

    def render(self, entry: SemanticColor) -> str:
        light = self.reference(entry.light)
        if entry.is_static:
            return light
        return self.light_dark(light, self.reference(entry.dark))


def top_segment_family(segments: Sequence[str]) -> str:
    """Family from the first segment only, as the native palettes group colors."""
    if not segments:
        return ""
    top = segments[0].lower().replace("_", "-")
    parts = top.split("-")
    family: List[str] = []
    for part in parts:
        if part[:1].isdigit():
            break
        family.append(part)
    return "-".join(family) or top


def figma_segments(figma_name: str) -> List[str]:
    """Split a Figma variable name and drop the leading ``Colour`` collection segment."""
    segments = [segment for segment in figma_name.split("/") if segment]
    if len(segments) > 1 and segments[0].lower() in _COLOUR_ROOTS:
        return segments[1:]
    return segments


def build_primitive_map(
    light: Any,
    dark: Any,
    policy: EmitterPolicy,
    primitives_export: Optional[Mapping[str, Any]] = None,
    graph: Optional[TokenGraph] = None,
) -> Dict[str, Primitive]:
    """Primitives keyed by Figma variable name.

    Without a dedicated primitives export the palette is rebuilt from the alias
    data of the semantic exports: an aliasing token carries the already resolved
    value of its target. Targets that are themselves semantic tokens are chains,
    not primitives, and are skipped here.
    """
    primitive_map: Dict[str, Primitive] = {}

    if primitives_export:
        for path, token in walk_color_tokens(primitives_export):
            _add_primitive(primitive_map, "/".join(path), token, policy)

    semantic_keys = graph.nodes if graph is not None else {}
    for document in (light, dark):
        for _path, token in walk_color_tokens(document):
            target = alias_target_of(token)
            if not target or target in primitive_map or target in semantic_keys:
                continue
            _add_primitive(primitive_map, target, token, policy)

    return primitive_map


def build_semantic_entries(
    light: Any,
    dark: Any,
    primitive_map: Mapping[str, Primitive],
    policy: EmitterPolicy,
    graph: Optional[TokenGraph] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tuple[List[SemanticColor], Dict[str, str]]:
    """Pair each aliased light token with its light and dark primitives.

    Returns the entries plus a mapping of omitted token paths to the reason
    their alias chain could not be followed.
    """
    graph = graph if graph is not None else build_token_graph(light)
    entries: List[SemanticColor] = []
    unresolved: Dict[str, str] = {}

    for path, light_token in walk_color_tokens(light):
        target = alias_target_of(light_token)
        if not target:
            continue
        light_primitive, reason = _follow_to_primitive(target, graph, primitive_map, max_depth)
        if light_primitive is None:
            if reason in (REASON_CYCLE, REASON_DEPTH):
                unresolved["/".join(path)] = reason
            continue

        # A token missing from the dark export, or aliasing a primitive we never
        # saw, keeps its light value rather than failing the whole file.
        dark_primitive = light_primitive
        dark_token = get_token_at_path(dark, path, "color") if dark is not None else None
        dark_target = alias_target_of(dark_token) if dark_token else None
        if dark_target:
            resolved, _reason = _follow_to_primitive(dark_target, graph, primitive_map, max_depth)
            dark_primitive = resolved or light_primitive

        token_name = path_to_token_name(path, policy.separator)
        entries.append(
            SemanticColor(
                path=path,
                token_name=token_name,
                name=policy.semantic_name(token_name),
                category=token_name.split(policy.separator)[0],
                light=light_primitive,
                dark=dark_primitive,
                is_static=_is_static(path, light_primitive, dark_primitive),
            )
        )

    return entries, unresolved


def group_by_family(primitives: Iterable[Primitive]) -> List[Tuple[str, List[Primitive]]]:
    """Families alphabetically; members by sort key, then name."""
    families: Dict[str, List[Primitive]] = {}
    for primitive in primitives:
        families.setdefault(primitive.family, []).append(primitive)
    return [
        (family, sorted(members, key=lambda p: (p.sort_key, p.name)))
        for family, members in sorted(families.items())
    ]


def group_by_category(entries: Sequence[SemanticColor]) -> List[Tuple[str, List[SemanticColor]]]:
    """Categories in display order; members keep document order."""
    categories: Dict[str, List[SemanticColor]] = {}
    for entry in entries:
        categories.setdefault(entry.category, []).append(entry)
    return [(category, categories[category]) for category in order_categories(categories)]


class ColorPipeline:
    """Runs the shared steps for one emitter policy."""

    def __init__(self, policy: EmitterPolicy, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.policy = policy
        self.max_depth = max_depth

    def run(
        self,
        light: Any,
        dark: Any,
        primitives_export: Optional[Mapping[str, Any]] = None,
    ) -> ColorModel:
        graph = build_token_graph(light)
        primitive_map = build_primitive_map(light, dark, self.policy, primitives_export, graph)
        semantics, unresolved = build_semantic_entries(
            light, dark, primitive_map, self.policy, graph, self.max_depth
        )
        return ColorModel(primitives=primitive_map, semantics=semantics, unresolved=unresolved)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _add_primitive(
    primitive_map: Dict[str, Primitive],
    figma_name: str,
    token: Mapping[str, Any],
    policy: EmitterPolicy,
) -> None:
    if figma_name in primitive_map:
        return
    value = resolve_color_value(token)
    rgba = color_components(token.get("$value"))
    segments = figma_segments(figma_name)
    if value is None or rgba is None or not segments:
        return
    primitive_map[figma_name] = Primitive(
        figma_name=figma_name,
        name=policy.primitive_name(segments),
        value=value,
        rgba=rgba,
        family=policy.family(segments),
        sort_key=extract_sort_key(figma_name),
    )


def _follow_to_primitive(
    target: str,
    graph: TokenGraph,
    primitive_map: Mapping[str, Primitive],
    max_depth: int,
) -> Tuple[Optional[Primitive], Optional[str]]:
    """Walk semantic-to-semantic aliases until a primitive is reached."""
    current = target
    seen = set()
    for _ in range(max_depth):
        if current in primitive_map:
            return primitive_map[current], None
        if current in seen:
            return None, REASON_CYCLE
        seen.add(current)
        following = graph.edges.get(current)
        if following is None:
            return None, None
        current = following
    return None, REASON_DEPTH


def _is_static(path: TokenPath, light: Primitive, dark: Primitive) -> bool:
    if any(segment.lower() == "static" for segment in path):
        return True
    return light.figma_name == dark.figma_name


__all__ = [
    "ColorModel",
    "ColorPipeline",
    "EmitterPolicy",
    "Primitive",
    "SemanticColor",
    "build_primitive_map",
    "build_semantic_entries",
    "figma_segments",
    "group_by_category",
    "group_by_family",
    "top_segment_family",
]
