"""Corner radius scale from ``number`` tokens under radius/corner/round paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from ..tokens.walker import walk_tokens
from .composite import CompositeEmitter, finish, number_value, path_mentions, prefixed, root_block
from .shared import extract_numeric_key, format_number, path_to_camel, path_to_kebab, path_to_pascal

RADIUS_KEYWORDS = ("radius", "corner", "round")


@dataclass(frozen=True)
class RadiusEntry:
    path: tuple
    name: str
    value: float
    sort_key: int


class RadiusEmitter(CompositeEmitter):
    scss_filename = "Radius.scss"
    swift_filename = "CornerRadius.swift"
    kotlin_filename = "CornerRadius.kt"

    def collect(self, document: Any) -> List[RadiusEntry]:
        entries: List[RadiusEntry] = []
        for path, token in walk_tokens(document):
            value = number_value(token)
            if value is None or not path_mentions(path, RADIUS_KEYWORDS):
                continue
            sort_key = extract_numeric_key(path[-1]) if path else int(value)
            entries.append(RadiusEntry(path, prefixed("radius", path_to_kebab(path)), value, sort_key))
        return sorted(entries, key=lambda entry: (entry.sort_key, entry.value, entry.name))

    def render_scss(self, entries: Sequence[RadiusEntry]) -> str:
        lines = self._open(self.scss_filename)
        lines.append("// Corner radius scale — SCSS variables")
        lines.extend(f"${entry.name}: {format_number(entry.value)}px;" for entry in entries)
        lines.append("")
        lines.extend(root_block(entry.name for entry in entries))
        return finish(lines)

    def render_swift(self, entries: Sequence[RadiusEntry]) -> str:
        lines = self._open(self.swift_filename)
        lines.extend(["import CoreGraphics", "", "public enum CornerRadius {"])
        for entry in entries:
            lines.append(f"  public static let {path_to_camel(entry.path)}: CGFloat = {format_number(entry.value)}")
        lines.extend(["}", ""])
        return finish(lines)

    def render_kotlin(self, entries: Sequence[RadiusEntry], package: str) -> str:
        lines = self._open_kotlin(self.kotlin_filename, package, ("androidx.compose.ui.unit.dp",))
        lines.append("object CornerRadius {")
        for entry in entries:
            lines.append(f"    val {path_to_pascal(entry.path)} = {format_number(entry.value)}.dp")
        lines.extend(["}", ""])
        return finish(lines)


__all__ = ["RADIUS_KEYWORDS", "RadiusEmitter", "RadiusEntry"]
