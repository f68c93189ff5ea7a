"""Elevation tokens (``$type: shadow``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from ..tokens.colors import color_components, figma_to_hex, figma_to_kotlin_hex, figma_to_swift_hex
from ..tokens.walker import walk_tokens_of_kind
from .composite import CompositeEmitter, finish, prefixed, root_block
from .shared import extract_numeric_key, format_number, path_to_camel, path_to_kebab, path_to_pascal
from .swift import HEX_COLOR_INIT


@dataclass(frozen=True)
class ShadowLayer:
    offset_x: float
    offset_y: float
    blur: float
    spread: float
    rgba: tuple

    @property
    def css(self) -> str:
        return (
            f"{format_number(self.offset_x)}px {format_number(self.offset_y)}px "
            f"{format_number(self.blur)}px {format_number(self.spread)}px {figma_to_hex(*self.rgba)}"
        )


@dataclass(frozen=True)
class ShadowEntry:
    path: tuple
    name: str
    layers: tuple
    sort_key: int

    @property
    def primary(self) -> ShadowLayer:
        return self.layers[0]


class ShadowEmitter(CompositeEmitter):
    """``box-shadow`` values for the web, ``ShadowToken`` for SwiftUI and ``ShadowSpec`` for Compose.

    Multi-layer shadows keep every layer on the web; native platforms only model
    the first layer.
    """

    scss_filename = "Shadows.scss"
    swift_filename = "Shadows.swift"
    kotlin_filename = "Shadows.kt"

    def collect(self, document: Any) -> List[ShadowEntry]:
        entries: List[ShadowEntry] = []
        for path, token in walk_tokens_of_kind(document, "shadow"):
            raw = token.get("$value")
            values = raw if isinstance(raw, list) else [raw]
            layers = tuple(layer for layer in (_parse_layer(value) for value in values) if layer is not None)
            if not layers:
                continue
            sort_key = extract_numeric_key(path[-1]) if path else 0
            entries.append(ShadowEntry(path, prefixed("shadow", path_to_kebab(path)), layers, sort_key))
        return sorted(entries, key=lambda entry: (entry.sort_key, entry.name))

    def render_scss(self, entries: Sequence[ShadowEntry]) -> str:
        lines = self._open(self.scss_filename)
        for entry in entries:
            value = ", ".join(layer.css for layer in entry.layers)
            lines.append(f"${entry.name}: {value};")
        lines.append("")
        lines.extend(root_block(entry.name for entry in entries))
        return finish(lines)

    def render_swift(self, entries: Sequence[ShadowEntry]) -> str:
        lines = self._open(self.swift_filename)
        lines.extend(
            [
                "import SwiftUI",
                "",
                "public struct ShadowToken {",
                "  public let color: Color",
                "  public let radius: CGFloat",
                "  public let x: CGFloat",
                "  public let y: CGFloat",
                "}",
                "",
                "public extension ShadowToken {",
            ]
        )
        for entry in entries:
            layer = entry.primary
            lines.append(
                f"  static let {path_to_camel(entry.path)} = ShadowToken("
                f"color: Color(hex: {figma_to_swift_hex(*layer.rgba)}), "
                f"radius: {format_number(layer.blur)}, "
                f"x: {format_number(layer.offset_x)}, y: {format_number(layer.offset_y)})"
            )
        lines.extend(["}", ""])
        lines.extend(HEX_COLOR_INIT)
        return finish(lines)

    def render_kotlin(self, entries: Sequence[ShadowEntry], package: str) -> str:
        lines = self._open_kotlin(
            self.kotlin_filename,
            package,
            (
                "androidx.compose.ui.graphics.Color",
                "androidx.compose.ui.unit.Dp",
                "androidx.compose.ui.unit.dp",
            ),
        )
        lines.extend(["data class ShadowSpec(", "    val elevation: Dp,", "    val color: Color,", ")", ""])
        lines.append("object Shadows {")
        for entry in entries:
            layer = entry.primary
            lines.append(
                f"    val {path_to_pascal(entry.path)} = ShadowSpec("
                f"elevation = {format_number(layer.blur)}.dp, color = Color({figma_to_kotlin_hex(*layer.rgba)}))"
            )
        lines.extend(["}", ""])
        return finish(lines)


def _parse_layer(value: Any) -> ShadowLayer | None:
    if not isinstance(value, Mapping):
        return None
    rgba = color_components(value.get("color"))
    if rgba is None:
        return None
    return ShadowLayer(
        offset_x=_dimension(value.get("offsetX")),
        offset_y=_dimension(value.get("offsetY")),
        blur=_dimension(value.get("blur")),
        spread=_dimension(value.get("spread")),
        rgba=rgba,
    )


def _dimension(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


__all__ = ["ShadowEmitter", "ShadowEntry", "ShadowLayer"]
