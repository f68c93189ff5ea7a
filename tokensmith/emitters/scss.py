"""Primitives.scss and Colors.scss."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from ..conventions.classify import COLORS_SCSS, PRIMITIVES_SCSS, ReferenceSet
from ..conventions.web import BEST_PRACTICE_WEB_CONVENTIONS, WebConventions
from ..models import GeneratedArtifact
from .pipeline import ColorModel, ColorPipeline, EmitterPolicy, Primitive, SemanticColor
from .shared import EmitContext, capitalize, new_token_comment, rename_comment, segments_to_kebab


class ScssPolicy(EmitterPolicy):
    """``$grey-750`` primitives; semantic names keep the configured separator."""

    def __init__(self, separator: str = "-") -> None:
        self.separator = separator

    def primitive_name(self, segments: Sequence[str]) -> str:
        return "$" + segments_to_kebab(segments).replace("-", self.separator)

    def family(self, segments: Sequence[str]) -> str:
        return super().family(segments).replace("-", self.separator)

    def reference(self, primitive: Primitive) -> str:
        return f"#{{{primitive.name}}}"


class ScssEmitter:
    """Emits the SCSS primitive palette and semantic color layer."""

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    def build_model(
        self,
        light: Any,
        dark: Any,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        primitives: Optional[Mapping[str, Any]] = None,
    ) -> ColorModel:
        return ColorPipeline(ScssPolicy(conventions.separator)).run(light, dark, primitives)

    def emit(
        self,
        light: Any,
        dark: Any,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        references: Optional[ReferenceSet] = None,
        primitives: Optional[Mapping[str, Any]] = None,
    ) -> List[GeneratedArtifact]:
        model = self.build_model(light, dark, conventions, primitives)
        primitives_ref = references.text(PRIMITIVES_SCSS) if references else None
        colors_ref = references.text(COLORS_SCSS) if references else None
        return [
            GeneratedArtifact("Primitives.scss", self.render_primitives(model, primitives_ref), "scss", "web"),
            GeneratedArtifact("Colors.scss", self.render_colors(model, conventions, colors_ref), "scss", "web"),
        ]

    def render_primitives(self, model: ColorModel, reference: Optional[str] = None) -> str:
        renames = self.context.renames(reference)
        is_new = self.context.new_detector(reference)

        lines = ["// Primitives.scss", *self.context.header("//"), ""]
        for family, members in model.families():
            old_name = renames.get(family)
            if old_name:
                lines.extend(rename_comment(old_name, family, "//"))
            lines.append(f"// {family}")
            for primitive in members:
                if is_new(primitive.name):
                    lines.extend(new_token_comment("//"))
                lines.append(f"{primitive.name}: {primitive.value};")
            lines.append("")
        return "\n".join(lines) + "\n"

    def render_colors(
        self,
        model: ColorModel,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        reference: Optional[str] = None,
    ) -> str:
        is_new = self.context.new_detector(reference)
        policy = ScssPolicy(conventions.separator)
        categories = model.categories()

        lines: List[str] = []
        target = f"./Primitives{conventions.import_suffix}"
        if conventions.import_style == "use":
            lines.append(f"@use '{target}' as *;")
        else:
            lines.append(f"@import '{target}';")
        lines.extend(["", "// Colors.scss", *self.context.header("//"), ""])

        structure = conventions.scss_color_structure
        if structure == "inline":
            for category, entries in categories:
                lines.append(f"// {capitalize(category)} colors")
                for entry in entries:
                    lines.extend(_new_marker(entry, is_new))
                    lines.append(f"${entry.name}: var(--{entry.name}, {_inline_value(entry)});")
                lines.append("")
        elif structure == "media-query":
            lines.append(":root {")
            for category, entries in categories:
                lines.append(f"  // {capitalize(category)} colors")
                for entry in entries:
                    lines.append(f"  --{entry.name}: {policy.reference(entry.light)};")
                lines.append("")
            lines.extend(["}", "", "@media (prefers-color-scheme: dark) {", "  :root {"])
            for _category, entries in categories:
                for entry in entries:
                    if not entry.is_static:
                        lines.append(f"    --{entry.name}: {policy.reference(entry.dark)};")
            lines.extend(["  }", "}", "", "// SCSS variable aliases"])
            lines.extend(_aliases(categories, is_new))
        else:
            lines.append("// @property typed declarations — enables CSS transitions on color tokens")
            lines.append("// and provides browser DevTools type info. Requires: color-scheme: light dark.")
            for category, entries in categories:
                lines.append(f"// {capitalize(category)} colors")
                for entry in entries:
                    lines.extend(
                        [
                            f"@property --{entry.name} {{",
                            "  syntax: '<color>';",
                            "  inherits: true;",
                            "  initial-value: transparent;",
                            "}",
                        ]
                    )
                lines.append("")

            lines.extend([":root {", "  color-scheme: light dark;", ""])
            for category, entries in categories:
                lines.append(f"  // {capitalize(category)} colors")
                for entry in entries:
                    lines.append(f"  --{entry.name}: {policy.render(entry)};")
                lines.append("")
            lines.extend(["}", ""])

            lines.append("// SCSS variable aliases — reference in .scss files; compile to var(--token-name)")
            lines.extend(_aliases(categories, is_new))

        return "\n".join(lines) + "\n"


def _aliases(categories, is_new) -> List[str]:
    lines: List[str] = []
    for category, entries in categories:
        lines.append(f"// {capitalize(category)} colors")
        for entry in entries:
            lines.extend(_new_marker(entry, is_new))
            lines.append(f"${entry.name}: var(--{entry.name});")
        lines.append("")
    return lines


def _inline_value(entry: SemanticColor) -> str:
    if entry.is_static:
        return entry.light.name
    return f"light-dark({entry.light.name}, {entry.dark.name})"


def _new_marker(entry: SemanticColor, is_new) -> List[str]:
    return new_token_comment("//") if is_new(entry.name) else []


__all__ = ["ScssEmitter", "ScssPolicy"]
