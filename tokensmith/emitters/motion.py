"""Durations and easing curves from motion-related paths."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..tokens.walker import walk_tokens
from .composite import CompositeEmitter, finish, path_mentions, prefixed, root_block
from .shared import EmitContext, elide_standard, extract_numeric_key, format_number, path_to_kebab, path_to_pascal

MOTION_KEYWORDS = ("duration", "delay", "easing", "transition", "animation", "motion")
DEFAULT_SECONDS_THRESHOLD = 10.0

_CUBIC_BEZIER_RE = re.compile(
    r"cubic-bezier\s*\(\s*([-\d.]+)\s*,\s*([-\d.]+)\s*,\s*([-\d.]+)\s*,\s*([-\d.]+)\s*\)", re.IGNORECASE
)
_DURATION_TEXT_RE = re.compile(r"^\s*(-?[\d.]+)\s*(ms|s)\s*$", re.IGNORECASE)

Bezier = Tuple[float, float, float, float]


@dataclass(frozen=True)
class DurationEntry:
    name: str
    short_name: str
    value_ms: int
    sort_key: int


@dataclass(frozen=True)
class EasingEntry:
    name: str
    short_name: str
    value: str
    cubic_bezier: Optional[Bezier]
    sort_key: int


@dataclass(frozen=True)
class MotionTokens:
    durations: Tuple[DurationEntry, ...]
    easings: Tuple[EasingEntry, ...]

    def __len__(self) -> int:
        return len(self.durations) + len(self.easings)


def to_milliseconds(value: float, unit: Optional[str] = None, threshold: float = DEFAULT_SECONDS_THRESHOLD) -> int:
    """Normalise a duration to whole milliseconds.

    An explicit ``unit`` wins; otherwise values in ``[0, threshold)`` are read as
    seconds, so ``0.2`` becomes ``200`` while ``200`` stays ``200``.
    """
    if unit == "s":
        return round(value * 1000)
    if unit == "ms":
        return round(value)
    if 0 <= value < threshold:
        return round(value * 1000)
    return round(value)


def parse_cubic_bezier(value: Any) -> Optional[Bezier]:
    if isinstance(value, (list, tuple)) and len(value) == 4:
        try:
            x1, y1, x2, y2 = (float(v) for v in value)
        except (TypeError, ValueError):
            return None
        return x1, y1, x2, y2
    if not isinstance(value, str):
        return None
    match = _CUBIC_BEZIER_RE.search(value)
    if not match:
        return None
    x1, y1, x2, y2 = (float(group) for group in match.groups())
    return x1, y1, x2, y2


class MotionEmitter(CompositeEmitter):
    """``Motion.scss``, ``MotionTokens.swift`` and ``MotionTokens.kt``."""

    scss_filename = "Motion.scss"
    swift_filename = "MotionTokens.swift"
    kotlin_filename = "MotionTokens.kt"

    def __init__(
        self,
        context: Optional[EmitContext] = None,
        seconds_threshold: float = DEFAULT_SECONDS_THRESHOLD,
    ) -> None:
        super().__init__(context)
        self.seconds_threshold = seconds_threshold

    def collect(self, document: Any) -> List[MotionTokens]:
        found: List[Tuple[str, Tuple[str, ...], Mapping[str, Any], int, Optional[int]]] = []
        for path, token in walk_tokens(document):
            if not path_mentions(path, MOTION_KEYWORDS):
                continue
            value_ms = self._duration_ms(token)
            kind = "duration" if value_ms is not None else "easing"
            sort_key = extract_numeric_key(path[-1]) if path else 0
            found.append((kind, path, token, sort_key, value_ms))

        short_names = _unique_member_names([(kind, path) for kind, path, _token, _key, _ms in found])
        durations: List[DurationEntry] = []
        easings: List[EasingEntry] = []
        for (kind, path, token, sort_key, value_ms), short_name in zip(found, short_names):
            name = path_to_kebab(path)
            if value_ms is not None:
                durations.append(DurationEntry(name, short_name, value_ms, sort_key))
                continue
            easing = _easing_value(token)
            if easing is not None:
                easings.append(EasingEntry(name, short_name, easing, parse_cubic_bezier(token.get("$value")), sort_key))

        if not durations and not easings:
            return []
        durations.sort(key=lambda entry: (entry.sort_key, entry.value_ms, entry.name))
        easings.sort(key=lambda entry: (entry.sort_key, entry.name))
        return [MotionTokens(tuple(durations), tuple(easings))]

    def count(self, document: Any) -> int:
        return sum(len(tokens) for tokens in self.collect(document))

    def render_scss(self, entries: Sequence[MotionTokens]) -> str:
        motion = entries[0]
        lines = self._open(self.scss_filename)
        lines.append("// Duration (ms)")
        duration_vars = [prefixed("duration", entry.name) for entry in motion.durations]
        for var, entry in zip(duration_vars, motion.durations):
            lines.append(f"${var}: {entry.value_ms}ms;")
        if motion.durations:
            lines.append("")
        easing_vars = [prefixed("easing", entry.name) for entry in motion.easings]
        if motion.easings:
            lines.append("// Easing")
            for var, entry in zip(easing_vars, motion.easings):
                lines.append(f"${var}: {entry.value};")
            lines.append("")
        lines.extend(root_block(duration_vars + easing_vars))
        return finish(lines)

    def render_swift(self, entries: Sequence[MotionTokens]) -> str:
        motion = entries[0]
        lines = self._open(self.swift_filename)
        lines.extend(["import SwiftUI", "", "public enum MotionTokens {"])
        for entry in motion.durations:
            lines.append(
                f"  public static let {_lower_first(entry.short_name)}: TimeInterval = {entry.value_ms / 1000:.2f}"
            )
        for entry in motion.easings:
            if entry.cubic_bezier:
                args = ", ".join(format_number(point) for point in entry.cubic_bezier)
                lines.append(f"  public static let {_lower_first(entry.short_name)}: Animation = .timingCurve({args})")
            else:
                lines.append(f'  public static let {_lower_first(entry.short_name)}: String = "{entry.value}"')
        lines.extend(["}", ""])
        return finish(lines)

    def render_kotlin(self, entries: Sequence[MotionTokens], package: str) -> str:
        motion = entries[0]
        imports = ("androidx.compose.animation.core.CubicBezierEasing",) if any(
            entry.cubic_bezier for entry in motion.easings
        ) else ()
        lines = self._open_kotlin(self.kotlin_filename, package, imports)
        lines.append("object MotionTokens {")
        for entry in motion.durations:
            lines.append(f"    val {entry.short_name} = {entry.value_ms}")
        for entry in motion.easings:
            if entry.cubic_bezier:
                args = ", ".join(f"{format_number(point)}f" for point in entry.cubic_bezier)
                lines.append(f"    val {entry.short_name} = CubicBezierEasing({args})")
            else:
                lines.append(f'    val {entry.short_name} = "{entry.value}"')
        lines.extend(["}", ""])
        return finish(lines)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _duration_ms(self, token: Mapping[str, Any]) -> Optional[int]:
        kind = token.get("$type")
        value = token.get("$value")
        unit = _explicit_unit(token)
        if kind == "number":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None
            return to_milliseconds(value, unit, self.seconds_threshold)
        if kind != "duration":
            return None
        if isinstance(value, Mapping):
            amount = value.get("value")
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                return None
            return to_milliseconds(amount, value.get("unit") or unit, self.seconds_threshold)
        if isinstance(value, str):
            match = _DURATION_TEXT_RE.match(value)
            if match:
                return to_milliseconds(float(match.group(1)), match.group(2).lower())
        return None


def member_segments(kind: str, path: Sequence[str]) -> List[str]:
    """Path below the deepest motion keyword, keyword included.

    ``Motion/Delay/fast`` gives ``['Delay', 'fast']`` so it never collides with
    ``Motion/Duration/fast``; paths without a keyword segment fall back to
    ``kind`` plus the leaf.
    """
    for index in range(len(path) - 1, -1, -1):
        keyword = path[index].lower().rstrip("s")
        if keyword in MOTION_KEYWORDS and keyword != "motion":
            return elide_standard(path[index:])
    return elide_standard([kind, *path[-1:]])


def _unique_member_names(items: Sequence[Tuple[str, Sequence[str]]]) -> List[str]:
    names = [path_to_pascal(member_segments(kind, path)) for kind, path in items]
    counts = Counter(names)
    return [
        path_to_pascal(path) if counts[name] > 1 else name for name, (_kind, path) in zip(names, items)
    ]


def _lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


def _explicit_unit(token: Mapping[str, Any]) -> Optional[str]:
    extensions = token.get("$extensions")
    if not isinstance(extensions, Mapping):
        return None
    unit = extensions.get("unit")
    if isinstance(unit, str) and unit.lower() in ("ms", "s"):
        return unit.lower()
    return None


def _easing_value(token: Mapping[str, Any]) -> Optional[str]:
    kind = token.get("$type")
    value = token.get("$value")
    if kind == "string" and isinstance(value, str):
        return value
    if kind == "cubic-bezier":
        bezier = parse_cubic_bezier(value)
        if bezier is not None:
            return "cubic-bezier(" + ", ".join(format_number(point) for point in bezier) + ")"
    return None


__all__ = [
    "DEFAULT_SECONDS_THRESHOLD",
    "DurationEntry",
    "EasingEntry",
    "MOTION_KEYWORDS",
    "MotionEmitter",
    "MotionTokens",
    "member_segments",
    "parse_cubic_bezier",
    "to_milliseconds",
]
