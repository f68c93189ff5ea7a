"""Typography.swift: a SwiftUI style struct or an enum with a font-data switch."""

from __future__ import annotations

from typing import List, Sequence

from ...conventions.typography import SwiftTypographyConventions
from ..shared import EmitContext, format_number
from .parse import TypographyEntry, group_entries, resolve_name

SWIFT_WEIGHTS = {
    100: ".ultraLight",
    200: ".thin",
    300: ".light",
    400: ".regular",
    500: ".medium",
    600: ".semibold",
    700: ".bold",
    800: ".heavy",
    900: ".black",
}

# (minimum font size, Dynamic Type text style), checked top to bottom.
TEXT_STYLE_THRESHOLDS = (
    (34, ".largeTitle"),
    (28, ".title"),
    (22, ".title2"),
    (20, ".title3"),
    (17, ".body"),
    (15, ".subheadline"),
    (13, ".footnote"),
    (12, ".caption"),
)

# Content size category -> (ratio constant, multiplier); large is the identity.
_CONTENT_SIZE_STEPS = (
    ("extraSmall", "subtractingRatio", "3"),
    ("small", "subtractingRatio", "2"),
    ("medium", "subtractingRatio", "1"),
    ("large", None, None),
    ("extraLarge", "addingRatio", "1"),
    ("extraExtraLarge", "addingRatio", "1.5"),
    ("extraExtraExtraLarge", "addingRatio", "2"),
    ("accessibilityMedium", "addingRatio", "3"),
    ("accessibilityLarge", "addingRatio", "3.5"),
    ("accessibilityExtraLarge", "addingRatio", "4"),
    ("accessibilityExtraExtraLarge", "addingRatio", "4.5"),
    ("accessibilityExtraExtraExtraLarge", "addingRatio", "5"),
)


def swift_weight(weight: float) -> str:
    return SWIFT_WEIGHTS.get(int(weight), ".regular")


def swift_text_style(font_size: float) -> str:
    for minimum, style in TEXT_STYLE_THRESHOLDS:
        if font_size >= minimum:
            return style
    return ".caption2"


def render_typography_swift(
    entries: Sequence[TypographyEntry],
    conventions: SwiftTypographyConventions,
    context: EmitContext,
) -> str:
    if conventions.architecture == "enum":
        return _render_enum(entries, conventions, context)
    return _render_struct(entries, conventions, context)


def _render_struct(
    entries: Sequence[TypographyEntry], conventions: SwiftTypographyConventions, context: EmitContext
) -> str:
    type_name = conventions.type_name
    tracking = conventions.includes_tracking
    lines = ["// Typography.swift", *context.header("//"), "", "import SwiftUI", ""]

    described = "its tracking and line-spacing values" if tracking else "its line-spacing value"
    lines.extend(
        [
            "// MARK: - Typography Style",
            f"/// Bundles a SwiftUI Font with {described}.",
            '/// Apply with: Text("…").typography(.bodyR)',
            f"public struct {type_name} {{",
            "  public let font: Font",
        ]
    )
    if tracking:
        lines.extend(['  /// Letter-spacing in points (Figma "letterSpacing" value).', "  public let tracking: CGFloat"])
    lines.extend(["  /// Extra space added between lines: lineHeight − fontSize.", "  public let lineSpacing: CGFloat", ""])
    params = "font: Font, tracking: CGFloat = 0, lineSpacing: CGFloat = 0" if tracking else "font: Font, lineSpacing: CGFloat = 0"
    lines.extend([f"  public init({params}) {{", "    self.font = font"])
    if tracking:
        lines.append("    self.tracking = tracking")
    lines.extend(["    self.lineSpacing = lineSpacing", "  }", "}", ""])

    lines.extend(
        [
            "// MARK: - Typography Modifier",
            "private struct TypographyModifier: ViewModifier {",
            f"  let style: {type_name}",
            "",
            "  func body(content: Content) -> some View {",
            "    content",
            "      .font(style.font)",
        ]
    )
    if tracking:
        lines.append("      .tracking(style.tracking)")
    lines.extend(
        [
            "      .lineSpacing(style.lineSpacing)",
            "  }",
            "}",
            "",
            "public extension View {",
            '  /// Apply a Figma text style. Example: Text("Hello").typography(.bodyR)',
            f"  func typography(_ style: {type_name}) -> some View {{",
            "    modifier(TypographyModifier(style: style))",
            "  }",
            "}",
            "",
            "// MARK: - Typography Tokens",
            "// Note: SF Pro is the iOS system font — Font.system() is correct and preferred.",
            "// relativeTo: maps to a Dynamic Type text style so fonts scale with accessibility settings.",
            "// lineSpacing = Figma lineHeight − fontSize (approximation for SwiftUI lineSpacing).",
            f"public extension {type_name} {{",
        ]
    )

    for label, members in group_entries(list(entries)).items():
        lines.append(f"  // {label}")
        for entry in members:
            value = entry.value
            name = resolve_name(entry.short_key, conventions.name_map)
            size = format_number(value.font_size)
            weight = swift_weight(value.font_weight)
            if value.font_family.lower().startswith("sf pro"):
                font = f"Font.system(size: {size}, weight: {weight}, design: .default)"
            else:
                font = (
                    f'Font.custom("{value.font_family}", size: {size}, '
                    f"relativeTo: {swift_text_style(value.font_size)}).weight({weight})"
                )
            line_spacing = format_number(max(0, value.line_height - value.font_size))
            if tracking and value.letter_spacing:
                args = f"font: {font}, tracking: {format_number(value.letter_spacing)}, lineSpacing: {line_spacing}"
            else:
                args = f"font: {font}, lineSpacing: {line_spacing}"
            lines.append(f"  static let {name} = {type_name}({args})")
    lines.extend(["}", ""])
    return "\n".join(lines) + "\n"


def _render_enum(
    entries: Sequence[TypographyEntry], conventions: SwiftTypographyConventions, context: EmitContext
) -> str:
    type_name = conventions.type_name
    uses_uikit = conventions.ui_framework in ("uikit", "both")
    lines = ["// Typography.swift", *context.header("//"), ""]
    if uses_uikit:
        lines.extend(["import Foundation", "import UIKit"])
    if conventions.ui_framework in ("swiftui", "both"):
        lines.append("import SwiftUI")
    lines.extend(["", f"public enum {type_name}: String {{"])

    grouped = group_entries(list(entries))
    for members in grouped.values():
        lines.append("")
        lines.extend(f"    case {resolve_name(entry.short_key, conventions.name_map)}" for entry in members)
    lines.extend(["", "}", ""])

    method = conventions.dynamic_type_method_name if conventions.uses_dynamic_type_scaling else None
    if method:
        lines.extend(
            [
                "struct FontConstants {",
                "",
                "    static let addingRatio: CGFloat = 1.5",
                "    static let subtractingRatio: CGFloat = -1.0",
                "",
                "}",
                "",
            ]
        )

    struct_name = conventions.data_struct_name or "FontData"
    props = list(conventions.data_struct_props) or ["fontWeight", "size", "lineHeight"]
    wrap = f"{type_name}.{method}" if method else None

    lines.extend([f"extension {type_name} {{", "", f"    var fontData: {struct_name} {{", "", "        switch self {"])
    for members in grouped.values():
        lines.append("")
        for entry in members:
            lines.append(f"        case .{resolve_name(entry.short_key, conventions.name_map)}:")
            lines.append(f"            return {struct_name}({_data_struct_args(entry, props, wrap)})")
    lines.extend(["", "        }", "", "    }"])
    if method:
        lines.append("")
        lines.extend(_dynamic_type_method(method))
    lines.extend(["", "}", ""])

    if uses_uikit:
        lines.extend(
            [
                f"extension {type_name} {{",
                "",
                "    public var font: UIFont {",
                "        return UIFont.systemFont(ofSize: fontData.size, weight: fontData.fontWeight)",
                "    }",
            ]
        )
        if conventions.ui_framework == "both":
            lines.extend(["", "    public var suiFont: Font {", "        return Font(font)", "    }"])
        lines.extend(["", "}", ""])

    weight_type = "UIFont.Weight" if uses_uikit else "Font.Weight"
    lines.extend([f"public struct {struct_name} {{", ""])
    for prop in props:
        lines.append(f"    let {prop}: {weight_type if prop == 'fontWeight' else 'CGFloat'}")
    lines.extend(["", "}", ""])
    return "\n".join(lines) + "\n"


def _data_struct_args(entry: TypographyEntry, props: Sequence[str], wrap: str | None) -> str:
    value = entry.value

    def wrapped(number: float) -> str:
        return f"{wrap}({format_number(number)})" if wrap else format_number(number)

    args: List[str] = []
    for prop in props:
        if prop == "fontWeight":
            args.append(f"fontWeight: {swift_weight(value.font_weight)}")
        elif prop in ("size", "fontSize"):
            args.append(f"{prop}: {wrapped(value.font_size)}")
        elif prop == "lineHeight":
            args.append(f"lineHeight: {wrapped(value.line_height)}")
        elif prop in ("tracking", "letterSpacing"):
            args.append(f"{prop}: {format_number(value.letter_spacing)}")
    return ", ".join(args)


def _dynamic_type_method(method: str) -> List[str]:
    lines = [
        f"    public static func {method}(_ standardFontSize: CGFloat, fmax: CGFloat = .infinity, fmin: CGFloat = 11) -> CGFloat {{",
        "",
        "        var contentSize: UIContentSizeCategory = .large",
        "        if UIAccessibility.isLargerTextEnabled {",
        "            contentSize = UIApplication.shared.preferredContentSizeCategory",
        "        }",
        "",
        "        let minFontSize = standardFontSize < fmin ? standardFontSize : fmin",
        "        let maxFontSize = standardFontSize > fmax ? standardFontSize : fmax",
        "        switch contentSize {",
    ]
    for category, ratio, factor in _CONTENT_SIZE_STEPS:
        lines.append(f"        case .{category}:")
        if ratio is None:
            lines.append("            return standardFontSize")
        elif ratio == "subtractingRatio":
            lines.append(f"            return max(minFontSize, standardFontSize + (FontConstants.{ratio} * {factor}))")
        else:
            lines.append(f"            return min(maxFontSize, standardFontSize + (FontConstants.{ratio} * {factor}))")
    lines.extend(["        default:", "            return standardFontSize", "        }", "    }"])
    return lines


__all__ = ["SWIFT_WEIGHTS", "render_typography_swift", "swift_text_style", "swift_weight"]
