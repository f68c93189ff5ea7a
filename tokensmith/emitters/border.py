"""Stroke tokens (``$type: border``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from ..tokens.colors import color_components, figma_to_hex, figma_to_kotlin_hex, figma_to_swift_hex
from ..tokens.walker import walk_tokens_of_kind
from .composite import CompositeEmitter, finish, prefixed, root_block
from .shared import extract_numeric_key, format_number, path_to_camel, path_to_kebab
from .swift import HEX_COLOR_INIT


@dataclass(frozen=True)
class BorderEntry:
    path: tuple
    name: str
    width: float
    style: str
    rgba: tuple
    sort_key: int


class BorderEmitter(CompositeEmitter):
    scss_filename = "Borders.scss"
    swift_filename = "Borders.swift"
    kotlin_filename = "Borders.kt"

    def collect(self, document: Any) -> List[BorderEntry]:
        entries: List[BorderEntry] = []
        for path, token in walk_tokens_of_kind(document, "border"):
            value = token.get("$value")
            if not isinstance(value, Mapping):
                continue
            rgba = color_components(value.get("color"))
            if rgba is None:
                continue
            width = value.get("width", 1)
            if isinstance(width, bool) or not isinstance(width, (int, float)):
                width = 1
            style = value.get("style") if isinstance(value.get("style"), str) else "solid"
            sort_key = extract_numeric_key(path[-1]) if path else 0
            entries.append(BorderEntry(path, prefixed("border", path_to_kebab(path)), width, style, rgba, sort_key))
        return sorted(entries, key=lambda entry: (entry.sort_key, entry.name))

    def render_scss(self, entries: Sequence[BorderEntry]) -> str:
        lines = self._open(self.scss_filename)
        for entry in entries:
            lines.append(f"${entry.name}: {format_number(entry.width)}px {entry.style} {figma_to_hex(*entry.rgba)};")
        lines.append("")
        lines.extend(root_block(entry.name for entry in entries))
        return finish(lines)

    def render_swift(self, entries: Sequence[BorderEntry]) -> str:
        lines = self._open(self.swift_filename)
        lines.extend(
            [
                "import SwiftUI",
                "",
                "public struct BorderToken {",
                "  public let width: CGFloat",
                "  public let color: Color",
                "}",
                "",
                "public extension BorderToken {",
            ]
        )
        for entry in entries:
            lines.append(
                f"  static let {path_to_camel(entry.path)} = BorderToken("
                f"width: {format_number(entry.width)}, color: Color(hex: {figma_to_swift_hex(*entry.rgba)}))"
            )
        lines.extend(["}", ""])
        lines.extend(HEX_COLOR_INIT)
        return finish(lines)

    def render_kotlin(self, entries: Sequence[BorderEntry], package: str) -> str:
        lines = self._open_kotlin(
            self.kotlin_filename,
            package,
            (
                "androidx.compose.foundation.BorderStroke",
                "androidx.compose.ui.graphics.Color",
                "androidx.compose.ui.unit.dp",
            ),
        )
        lines.append("object Borders {")
        for entry in entries:
            lines.append(
                f"    val {path_to_camel(entry.path)} = "
                f"BorderStroke({format_number(entry.width)}.dp, Color({figma_to_kotlin_hex(*entry.rgba)}))"
            )
        lines.extend(["}", ""])
        return finish(lines)


__all__ = ["BorderEmitter", "BorderEntry"]
