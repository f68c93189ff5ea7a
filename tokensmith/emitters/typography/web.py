"""Typography.scss and Typography.ts."""

from __future__ import annotations

from typing import Sequence

from ...conventions.typography import ScssTypographyConventions, TsTypographyConventions
from ..shared import EmitContext, format_number
from .parse import (
    TypographyEntry,
    group_entries,
    kebab_to_camel,
    px_to_em,
    px_to_rem,
    trim_float,
    unitless_line_height,
)


def render_typography_scss(
    entries: Sequence[TypographyEntry],
    conventions: ScssTypographyConventions,
    context: EmitContext,
) -> str:
    lines = ["// Typography.scss", *context.header("//"), ""]

    def size(px: float) -> str:
        return px_to_rem(px) if conventions.size_unit == "rem" else f"{format_number(px)}px"

    def height(line_height: float, font_size: float) -> str:
        if conventions.height_unit == "rem":
            return px_to_rem(line_height)
        return unitless_line_height(line_height, font_size)

    def spacing(letter_spacing: float, font_size: float) -> str:
        if conventions.spacing_unit == "em":
            return px_to_em(letter_spacing, font_size)
        return f"{format_number(letter_spacing)}px"

    if conventions.two_tier:
        prefix = conventions.var_prefix.lstrip("$")
        weights = sorted({entry.value.font_weight for entry in entries})
        if conventions.includes_font_weight and weights:
            lines.append("// Font weights")
            lines.extend(f"${prefix}weight-{format_number(w)}: {format_number(w)};" for w in weights)
            lines.append("")

        lines.append("// Font sizes, line heights, and letter spacings")
        seen = set()
        for entry in entries:
            key = _size_key(entry.full_key)
            if key in seen:
                continue
            seen.add(key)
            value = entry.value
            note = ""
            if value.font_size:
                note = f" // {size(value.font_size)}"
                if conventions.size_unit == "rem":
                    note += f" * 16 = {format_number(value.font_size)}px"
            lines.append(f"${prefix}{key}-size: {size(value.font_size)};{note}")
            lines.append(f"${prefix}{key}-height: {height(value.line_height, value.font_size)};")
            lines.append(f"${prefix}{key}-spacing: {spacing(value.letter_spacing, value.font_size)};")
            lines.append("")

        if conventions.has_mixins:
            lines.append("// Typography mixins for easy usage")
            for entry in entries:
                key = _size_key(entry.full_key)
                lines.append(f"@mixin {conventions.mixin_prefix}{entry.full_key} {{")
                if conventions.includes_font_family:
                    lines.append(f"  font-family: '{entry.value.font_family}', sans-serif;")
                lines.append(f"  font-size: ${prefix}{key}-size;")
                lines.append(f"  line-height: ${prefix}{key}-height;")
                lines.append(f"  letter-spacing: ${prefix}{key}-spacing;")
                lines.extend(["}", ""])
        return "\n".join(lines) + "\n"

    mixin = conventions.mixin_prefix
    lines.extend([f"// Usage: @include {mixin}{{name}}; e.g. @include {mixin}body-r;", ""])

    if conventions.has_css_custom_properties:
        lines.extend(["// CSS custom properties — for runtime / JS access", ":root {"])
        for entry in entries:
            key, value = entry.full_key, entry.value
            if conventions.includes_font_family:
                lines.append(f"  --{mixin}{key}-family: '{value.font_family}', sans-serif;")
            lines.append(f"  --{mixin}{key}-size: {size(value.font_size)};")
            lines.append(f"  --{mixin}{key}-weight: {format_number(value.font_weight)};")
            lines.append(f"  --{mixin}{key}-line-height: {height(value.line_height, value.font_size)};")
            lines.append(f"  --{mixin}{key}-letter-spacing: {spacing(value.letter_spacing, value.font_size)};")
        lines.extend(["}", ""])

    if conventions.has_mixins:
        for label, members in group_entries(list(entries)).items():
            lines.append(f"// {label}")
            for entry in members:
                value = entry.value
                lines.append(f"@mixin {mixin}{entry.full_key} {{")
                if conventions.includes_font_family:
                    lines.append(f"  font-family: '{value.font_family}', sans-serif;")
                lines.append(f"  font-size: {size(value.font_size)};")
                lines.append(f"  font-weight: {format_number(value.font_weight)};")
                lines.append(f"  line-height: {height(value.line_height, value.font_size)};")
                lines.append(f"  letter-spacing: {spacing(value.letter_spacing, value.font_size)};")
                lines.append("}")
            lines.append("")
    return "\n".join(lines) + "\n"


def render_typography_ts(
    entries: Sequence[TypographyEntry],
    conventions: TsTypographyConventions,
    context: EmitContext,
) -> str:
    lines = ["// Typography.ts", *context.header("//"), ""]
    prefix = conventions.const_prefix

    if conventions.two_tier:
        if conventions.export_weights:
            for weight in sorted({entry.value.font_weight for entry in entries}):
                lines.append(f"export const {prefix}WEIGHT_{format_number(weight)} = {format_number(weight)};")
            lines.append("")

        for entry in entries:
            value = entry.value
            lines.append(f"const {_screaming(entry.full_key, prefix)} = {{")
            if conventions.includes_font_family:
                lines.append(f"  fontFamily: '{value.font_family}',")
            if conventions.value_format == "string":
                lines.append(f"  fontSize: '{px_to_rem(value.font_size)}',")
                lines.append(f"  lineHeight: '{px_to_rem(value.line_height)}',")
                lines.append(f"  letterSpacing: '{format_number(value.letter_spacing)}px',")
            else:
                lines.append(f"  fontSize: {format_number(value.font_size)},")
                lines.append(f"  lineHeight: {format_number(value.line_height)},")
                lines.append(f"  letterSpacing: {format_number(value.letter_spacing)},")
            lines.append("};")
        lines.extend(["", "// Typography objects with descriptive names for easy usage"])
        for entry in entries:
            semantic = prefix + _strip_regular(entry.full_key).replace("-", "_").upper()
            lines.append(f"export const {semantic} = {_screaming(entry.full_key, prefix)};")
        lines.append("")
        return "\n".join(lines) + "\n"

    interface = conventions.interface_name if conventions.has_interface else None
    if interface:
        lines.append(f"export interface {interface} {{")
        if conventions.includes_font_family:
            lines.append("  fontFamily: string;")
        lines.extend(
            [
                "  fontSize: number; // px (raw Figma value)",
                '  fontSizeRem: string; // e.g. "1rem"',
                "  fontWeight: number;",
                "  lineHeight: number; // px (raw Figma value)",
                "  lineHeightUnitless: number; // e.g. 1.5",
                "  letterSpacing: number; // px (raw Figma value)",
                '  letterSpacingEm: string; // e.g. "0.0313em"',
                "}",
                "",
            ]
        )

    annotation = f": {interface}" if interface else ""
    for label, members in group_entries(list(entries)).items():
        lines.append(f"// {label}")
        for entry in members:
            value = entry.value
            unitless = trim_float(value.line_height / value.font_size) if value.font_size else "1"
            lines.append(f"export const {_ts_name(entry.full_key, conventions)}{annotation} = {{")
            if conventions.includes_font_family:
                lines.append(f"  fontFamily: '{value.font_family}',")
            lines.extend(
                [
                    f"  fontSize: {format_number(value.font_size)},",
                    f"  fontSizeRem: '{px_to_rem(value.font_size)}',",
                    f"  fontWeight: {format_number(value.font_weight)},",
                    f"  lineHeight: {format_number(value.line_height)},",
                    f"  lineHeightUnitless: {unitless},",
                    f"  letterSpacing: {format_number(value.letter_spacing)},",
                    f"  letterSpacingEm: '{px_to_em(value.letter_spacing, value.font_size)}',",
                    "} as const;",
                ]
            )
        lines.append("")
    return "\n".join(lines) + "\n"


def _size_key(key: str) -> str:
    """Two-tier SCSS shares size variables per ``category-step``: ``body-r-bold`` -> ``body-r``."""
    return "-".join(key.split("-")[:2])


def _screaming(key: str, prefix: str) -> str:
    return prefix + key.upper().replace("-", "_")


def _strip_regular(key: str) -> str:
    return key[:-2] if key.endswith("-r") else key


def _ts_name(key: str, conventions: TsTypographyConventions) -> str:
    prefix = conventions.const_prefix
    if conventions.naming_case == "screaming_snake":
        return _screaming(key, prefix)
    if prefix and not prefix.endswith(("-", "_")):
        return kebab_to_camel(f"{prefix}-{key}")
    return kebab_to_camel(f"{prefix.rstrip('_-').lower()}-{key}" if prefix else key)


__all__ = ["render_typography_scss", "render_typography_ts"]
