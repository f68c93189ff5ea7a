"""Opacity scale from ``number`` tokens with an ``opacity`` path segment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from ..tokens.walker import walk_tokens
from .composite import CompositeEmitter, finish, number_value, root_block
from .shared import format_number, path_to_camel, path_to_kebab


@dataclass(frozen=True)
class OpacityEntry:
    path: tuple
    name: str
    value: float


class OpacityEmitter(CompositeEmitter):
    """Values are normalised to 0..1; anything above 1 is read as a percentage."""

    scss_filename = "Opacity.scss"
    swift_filename = "Opacity.swift"
    kotlin_filename = "Opacity.kt"

    def collect(self, document: Any) -> List[OpacityEntry]:
        entries: List[OpacityEntry] = []
        for path, token in walk_tokens(document):
            value = number_value(token)
            if value is None or not any("opacity" in segment.lower() for segment in path):
                continue
            if value > 1:
                value = value / 100
            entries.append(OpacityEntry(path, path_to_kebab(path), round(value, 3)))
        return sorted(entries, key=lambda entry: (entry.value, entry.name))

    def render_scss(self, entries: Sequence[OpacityEntry]) -> str:
        lines = self._open(self.scss_filename)
        lines.extend(f"${entry.name}: {format_number(entry.value)};" for entry in entries)
        lines.append("")
        lines.extend(root_block(entry.name for entry in entries))
        return finish(lines)

    def render_swift(self, entries: Sequence[OpacityEntry]) -> str:
        lines = self._open(self.swift_filename)
        lines.extend(["import Foundation", "", "public enum Opacity {"])
        for entry in entries:
            lines.append(f"  public static let {path_to_camel(entry.path)}: Double = {format_number(entry.value)}")
        lines.extend(["}", ""])
        return finish(lines)

    def render_kotlin(self, entries: Sequence[OpacityEntry], package: str) -> str:
        lines = self._open_kotlin(self.kotlin_filename, package, ())
        lines.append("object Opacity {")
        for entry in entries:
            lines.append(f"    val {path_to_camel(entry.path)} = {format_number(entry.value)}f")
        lines.extend(["}", ""])
        return finish(lines)


__all__ = ["OpacityEmitter", "OpacityEntry"]
