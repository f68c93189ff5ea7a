"""Compose typography: TextStyle definitions and the optional enum accessor file."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ...conventions.bugs import bug_warning_block
from ...conventions.classify import KotlinTypographyScope
from ...conventions.typography import DEFAULT_TYPOGRAPHY_PACKAGE, KotlinTypographyConventions
from ...models import GeneratedArtifact
from ..shared import EmitContext, format_number
from .parse import TypographyEntry, group_entries, resolve_name

KOTLIN_WEIGHTS = {
    100: "FontWeight.Thin",
    200: "FontWeight.ExtraLight",
    300: "FontWeight.Light",
    400: "FontWeight.Normal",
    500: "FontWeight.Medium",
    600: "FontWeight.SemiBold",
    700: "FontWeight.Bold",
    800: "FontWeight.ExtraBold",
    900: "FontWeight.Black",
}

_M3_ROLES = (
    ("displayLarge", "xlargeTitleR"),
    ("headlineLarge", "largeTitleR"),
    ("titleLarge", "title1R"),
    ("bodyLarge", "bodyR"),
    ("bodyMedium", "subheadR"),
    ("bodySmall", "footnoteR"),
    ("labelSmall", "captionR"),
)


def kotlin_weight(weight: float) -> str:
    return KOTLIN_WEIGHTS.get(int(weight), "FontWeight.Normal")


def kotlin_sp(value: float) -> str:
    return "0.sp" if not value else f"({format_number(value)}).sp"


class KotlinTypographyRenderer:
    """Renders the definition file (object, companion, top-level or class) and the accessor enum."""

    def __init__(self, conventions: KotlinTypographyConventions, context: EmitContext) -> None:
        self.conventions = conventions
        self.context = context

    def render(
        self, entries: Sequence[TypographyEntry], scope: Optional[KotlinTypographyScope] = None
    ) -> List[GeneratedArtifact]:
        scope = scope or KotlinTypographyScope()
        artifacts: List[GeneratedArtifact] = []
        if scope.generate_definition:
            filename = scope.definition_filename or "Typography.kt"
            if self.conventions.architecture == "class":
                content = self.render_class(entries, filename)
            else:
                content = self.render_definition(entries, filename)
            artifacts.append(GeneratedArtifact(filename, content, "kotlin", "android"))
        if scope.generate_accessor:
            filename, content = self.render_accessor(entries, scope)
            artifacts.append(GeneratedArtifact(filename, content, "kotlin", "android"))
        return artifacts

    def name(self, entry: TypographyEntry) -> str:
        return resolve_name(entry.short_key, self.conventions.name_map, self.conventions.naming_style)

    def render_definition(self, entries: Sequence[TypographyEntry], filename: str = "Typography.kt") -> str:
        conv = self.conventions
        has_reference = bool(conv.name_map)
        plain_text_style = conv.uses_text_style or not conv.custom_data_class

        lines = [f"// {filename}", *self.context.header("//"), ""]
        lines.extend(bug_warning_block(conv.bug_warnings, "//"))
        lines.extend([f"package {conv.package}", ""])
        if conv.includes_m3_builder:
            lines.append("import androidx.compose.material3.Typography")
        if plain_text_style:
            lines.extend(["import androidx.compose.ui.text.TextStyle", "import androidx.compose.ui.text.font.FontFamily"])
        lines.append("import androidx.compose.ui.text.font.FontWeight")
        if plain_text_style:
            lines.append("import androidx.compose.ui.unit.sp")
        lines.append("")

        if not has_reference:
            lines.extend(
                [
                    "// TODO: Replace FontFamily.Default with your registered font family.",
                    "// Example: val InterVariable = FontFamily(Font(R.font.inter_variable, FontWeight.Normal),",
                    "//                                          Font(R.font.inter_variable_medium, FontWeight.Medium),",
                    "//                                          Font(R.font.inter_variable_bold, FontWeight.Bold))",
                    "",
                ]
            )

        if conv.custom_data_class:
            props = ", ".join(
                f"val {prop}: FontWeight" if prop == "fontWeight" else f"val {prop}: Float"
                for prop in conv.data_class_props
            )
            lines.extend([f"data class {conv.custom_data_class}({props})", ""])

        if conv.architecture == "object":
            lines.append(f"object {conv.container_name} {{")
            indent = "    "
        elif conv.architecture == "companion":
            lines.extend([f"class {conv.container_name} {{", "    companion object {"])
            indent = "        "
        else:
            indent = ""

        family_note = "" if has_reference else " // TODO: replace with bundled font"
        for label, members in group_entries(list(entries)).items():
            lines.append(f"{indent}// {label}")
            for entry in members:
                value = entry.value
                if conv.custom_data_class:
                    args = _data_class_args(entry, conv.data_class_props)
                    lines.append(f"{indent}val {self.name(entry)} = {conv.custom_data_class}({args})")
                    continue
                lines.extend(
                    [
                        f"{indent}val {self.name(entry)} = TextStyle(",
                        f"{indent}    fontFamily = FontFamily.Default,{family_note}",
                        f"{indent}    fontSize = {format_number(value.font_size)}.sp,",
                        f"{indent}    fontWeight = {kotlin_weight(value.font_weight)},",
                        f"{indent}    lineHeight = {format_number(value.line_height)}.sp,",
                        f"{indent}    letterSpacing = {kotlin_sp(value.letter_spacing)},",
                        f"{indent})",
                    ]
                )
            lines.append("")

        if conv.architecture == "companion":
            lines.extend(["    }", "}"])
        elif conv.architecture == "object":
            lines.append("}")
        lines.append("")

        if conv.includes_m3_builder:
            lines.append("// Material3 Typography builder — pass to MaterialTheme(typography = appTypography())")
            lines.append("// TODO: map your token objects to M3 text style roles below.")
            lines.append("fun appTypography() = Typography(")
            for role, token in _M3_ROLES:
                lines.append(f"    // {role:<14} = {conv.container_name}.{token},")
            lines.extend([")", ""])
        return "\n".join(lines) + "\n"

    def render_class(self, entries: Sequence[TypographyEntry], filename: str = "Typography.kt") -> str:
        conv = self.conventions
        class_name = conv.class_name or conv.container_name
        names = [self.name(entry) for entry in entries]

        lines = [f"// {filename}", *self.context.header("//"), ""]
        lines.extend(bug_warning_block(conv.bug_warnings, "//"))
        lines.extend([f"package {conv.package}", ""])
        if conv.is_immutable:
            lines.append("import androidx.compose.runtime.Immutable")
        lines.extend(
            [
                "import androidx.compose.ui.text.TextStyle",
                "import androidx.compose.ui.text.font.FontFamily",
                "import androidx.compose.ui.text.font.FontWeight",
            ]
        )
        if conv.includes_line_height_style:
            lines.append("import androidx.compose.ui.text.style.LineHeightStyle")
        lines.extend(["import androidx.compose.ui.unit.sp", ""])

        if conv.is_immutable:
            lines.append("@Immutable")
        lines.append(f"class {class_name} internal constructor(")
        lines.extend(_comma_separated([f"    val {name}: TextStyle" for name in names]))
        lines.extend([") {", "", "    constructor(", "        defaultFontFamily: FontFamily = FontFamily.Default,", ""])

        defaults: List[List[str]] = []
        for name, entry in zip(names, entries):
            value = entry.value
            block = [
                f"        {name}: TextStyle = TextStyle(",
                f"            fontWeight = {kotlin_weight(value.font_weight)},",
                f"            fontSize = {format_number(value.font_size)}.sp,",
                f"            lineHeight = {format_number(value.line_height)}.sp,",
                f"            letterSpacing = {kotlin_sp(value.letter_spacing)},",
            ]
            if conv.includes_line_height_style:
                block.extend(
                    [
                        "            lineHeightStyle = LineHeightStyle(",
                        "                alignment = LineHeightStyle.Alignment.Center,",
                        "                trim = LineHeightStyle.Trim.None",
                        "            )",
                    ]
                )
            block.append("        )")
            defaults.append(block)
        for index, block in enumerate(defaults):
            if index < len(defaults) - 1:
                block[-1] += ","
            lines.extend(block)

        lines.append("    ) : this(")
        lines.extend(_comma_separated([f"        {name} = {name}.withDefaultFontFamily(defaultFontFamily)" for name in names]))
        lines.extend(["    )", "", "    fun copy("])
        lines.extend(_comma_separated([f"        {name}: TextStyle = this.{name}" for name in names]))
        lines.append(f"    ): {class_name} = {class_name}(")
        lines.extend(_comma_separated([f"        {name} = {name}" for name in names]))
        lines.extend(
            [
                "    )",
                "",
                "    override fun equals(other: Any?): Boolean {",
                "        if (this === other) return true",
                f"        if (other !is {class_name}) return false",
            ]
        )
        lines.extend(f"        if ({name} != other.{name}) return false" for name in names)
        lines.extend(["        return true", "    }", "", "    override fun hashCode(): Int {"])
        if names:
            lines.append(f"        var result = {names[0]}.hashCode()")
            lines.extend(f"        result = 31 * result + {name}.hashCode()" for name in names[1:])
        else:
            lines.append("        val result = 0")
        lines.extend(
            [
                "        return result",
                "    }",
                "",
                '    override fun toString(): String = ""',
                "}",
                "",
                "private fun TextStyle.withDefaultFontFamily(default: FontFamily): TextStyle {",
                "    return if (fontFamily != null) this else copy(fontFamily = default)",
                "}",
                "",
            ]
        )
        return "\n".join(lines) + "\n"

    def render_accessor(self, entries: Sequence[TypographyEntry], scope: KotlinTypographyScope) -> tuple[str, str]:
        conv = self.conventions
        enum_name = scope.accessor_class_name or "LocalTypography"
        container = scope.accessor_container_ref or "LocalTypography"
        filename = scope.accessor_filename or f"{enum_name}.kt"

        lines = [f"// {filename}", *self.context.header("//"), ""]
        lines.extend(
            [
                f"package {conv.package}",
                "",
                "import androidx.compose.material3.MaterialTheme",
                "import androidx.compose.runtime.Composable",
                "import androidx.compose.ui.text.TextStyle",
            ]
        )
        if conv.package != DEFAULT_TYPOGRAPHY_PACKAGE:
            parent = conv.package.rsplit(".", 1)[0]
            lines.append(f"import {parent}.{container}")
        lines.extend(["", f"enum class {enum_name} {{"])

        for index, members in enumerate(group_entries(list(entries)).values()):
            if index:
                lines.append("")
            lines.extend(f"    {self.name(entry)}," for entry in members)
        lines.extend(["    ;", "    val textStyle: TextStyle", "        @Composable", "        get() = when (this) {"])
        for entry in entries:
            name = self.name(entry)
            lines.extend([f"            {name} -> {{", f"                MaterialTheme.{container}.{name}", "            }"])
        lines.extend(["        }", "}", ""])
        return filename, "\n".join(lines) + "\n"


def _comma_separated(lines: List[str]) -> List[str]:
    return [line + ("," if index < len(lines) - 1 else "") for index, line in enumerate(lines)]


def _data_class_args(entry: TypographyEntry, props: Sequence[str]) -> str:
    value = entry.value
    args: List[str] = []
    for prop in props:
        if prop == "fontWeight":
            args.append(f"fontWeight = {kotlin_weight(value.font_weight)}")
        elif prop == "fontSize":
            args.append(f"fontSize = {format_number(value.font_size)}f")
        elif prop == "lineHeight":
            args.append(f"lineHeight = {format_number(value.line_height)}f")
        elif prop == "letterSpacing":
            args.append(f"letterSpacing = {format_number(value.letter_spacing)}f")
    return ", ".join(args)


__all__ = ["KOTLIN_WEIGHTS", "KotlinTypographyRenderer", "kotlin_sp", "kotlin_weight"]
