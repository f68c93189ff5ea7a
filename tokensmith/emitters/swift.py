"""Colors.swift for SwiftUI with UIKit dynamic providers."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from ..conventions.bugs import bug_warning_block
from ..conventions.classify import SWIFT_COLORS, ReferenceSet
from ..conventions.swift import BEST_PRACTICE_SWIFT_CONVENTIONS, SwiftConventions
from ..models import GeneratedArtifact
from ..tokens.colors import figma_to_swift_hex
from .pipeline import ColorModel, ColorPipeline, EmitterPolicy, Primitive, SemanticColor, top_segment_family
from .shared import EmitContext, capitalize, new_token_comment, rename_comment, split_segment, to_camel

HEX_COLOR_INIT = [
    "// MARK: - Hex Color Init",
    "private extension Color {",
    "  init(hex: UInt64) {",
    "    let hasAlpha = hex > 0xFFFFFF",
    "    let r, g, b, a: Double",
    "    if hasAlpha {",
    "      r = Double((hex >> 24) & 0xFF) / 255",
    "      g = Double((hex >> 16) & 0xFF) / 255",
    "      b = Double((hex >>  8) & 0xFF) / 255",
    "      a = Double( hex        & 0xFF) / 255",
    "    } else {",
    "      r = Double((hex >> 16) & 0xFF) / 255",
    "      g = Double((hex >>  8) & 0xFF) / 255",
    "      b = Double( hex        & 0xFF) / 255",
    "      a = 1.0",
    "    }",
    "    self.init(.sRGB, red: r, green: g, blue: b, opacity: a)",
    "  }",
    "}",
    "",
]

_LIGHT_DARK_INIT = [
    "#if canImport(UIKit)",
    "// MARK: - Light/Dark Helper",
    "private extension Color {",
    "  init(light: Color, dark: Color) {",
    "    self.init(UIColor { trait in",
    "      trait.userInterfaceStyle == .dark ? UIColor(dark) : UIColor(light)",
    "    })",
    "  }",
    "}",
    "#endif",
    "",
]


class SwiftPolicy(EmitterPolicy):
    def __init__(self, naming_case: str = "camel") -> None:
        self.naming_case = naming_case

    def primitive_name(self, segments: Sequence[str]) -> str:
        parts = [part for segment in segments for part in split_segment(segment)]
        return self._join(parts)

    def semantic_name(self, token_name: str) -> str:
        return self._join([part for part in token_name.split(self.separator) if part])

    def family(self, segments: Sequence[str]) -> str:
        return top_segment_family(segments)

    def reference(self, primitive: Primitive) -> str:
        return f".{primitive.name}"

    def light_dark(self, light: str, dark: str) -> str:
        return f"Color(light: {light}, dark: {dark})"

    def render(self, entry: SemanticColor) -> str:
        if entry.is_static:
            return f"Color.{entry.light.name}"
        return super().render(entry)

    def _join(self, parts: List[str]) -> str:
        if self.naming_case == "snake":
            return "_".join(parts)
        return to_camel(parts)


class SwiftEmitter:
    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    def emit(
        self,
        light: Any,
        dark: Any,
        conventions: SwiftConventions = BEST_PRACTICE_SWIFT_CONVENTIONS,
        references: Optional[ReferenceSet] = None,
        bug_warnings: Sequence[str] = (),
        primitives: Optional[Mapping[str, Any]] = None,
    ) -> List[GeneratedArtifact]:
        model = ColorPipeline(SwiftPolicy(conventions.naming_case)).run(light, dark, primitives)
        reference = references.text(SWIFT_COLORS) if references else None
        content = self.render(model, conventions, reference, bug_warnings)
        return [GeneratedArtifact("Colors.swift", content, "swift", "ios")]

    def render(
        self,
        model: ColorModel,
        conventions: SwiftConventions = BEST_PRACTICE_SWIFT_CONVENTIONS,
        reference: Optional[str] = None,
        bug_warnings: Sequence[str] = (),
    ) -> str:
        policy = SwiftPolicy(conventions.naming_case)
        keyword = conventions.keyword
        renames = self.context.renames(reference)
        is_new = self.context.new_detector(reference)

        lines = ["// Colors.swift", *self.context.header("//"), ""]
        lines.extend(bug_warning_block(bug_warnings, "//"))
        lines.extend(["import SwiftUI", "#if canImport(UIKit)", "import UIKit", "#endif", ""])
        lines.extend(HEX_COLOR_INIT)

        lines.extend(["// MARK: - Primitives", "public extension Color {"])
        for family, members in model.families():
            old_name = renames.get(family)
            if old_name:
                lines.extend(f"  {line}" for line in rename_comment(old_name, family, "//"))
            lines.append(f"  // {family}")
            for primitive in members:
                if is_new(primitive.name):
                    lines.extend(f"  {line}" for line in new_token_comment("//"))
                lines.append(f"  static {keyword} {primitive.name} = Color(hex: {figma_to_swift_hex(*primitive.rgba)})")
        lines.extend(["}", ""])

        categories = model.categories()
        if not categories:
            return "\n".join(lines) + "\n"

        lines.extend(_LIGHT_DARK_INIT)
        lines.extend(
            [
                "#if canImport(UIKit)",
                "// MARK: - Semantic Colors (UIColor — supports dynamic light/dark)",
                "public extension UIColor {",
            ]
        )
        for category, entries in categories:
            lines.append(f"  // {capitalize(category)}")
            for entry in entries:
                if is_new(entry.name):
                    lines.extend(f"  {line}" for line in new_token_comment("//"))
                lines.extend(_ui_color_decl(entry, keyword))
        lines.extend(["}", "", "// MARK: - Semantic Colors (SwiftUI Color)", "public extension Color {"])
        for category, entries in categories:
            lines.append(f"  // {capitalize(category)}")
            for entry in entries:
                lines.append(f"  static {keyword} {entry.name} = {policy.render(entry)}")
        lines.extend(["}", "#endif", ""])
        return "\n".join(lines) + "\n"


def _ui_color_decl(entry: SemanticColor, keyword: str) -> List[str]:
    if entry.is_static:
        return [f"  static {keyword} {entry.name} = UIColor(Color.{entry.light.name})"]
    return [
        f"  static {keyword} {entry.name} = UIColor {{ trait in",
        "    trait.userInterfaceStyle == .dark",
        f"      ? UIColor(Color.{entry.dark.name})",
        f"      : UIColor(Color.{entry.light.name})",
        "  }",
    ]


__all__ = ["HEX_COLOR_INIT", "SwiftEmitter", "SwiftPolicy"]
