"""Plain CSS custom properties: primitives.css, colors.css and spacing.css."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from ..conventions.classify import COLORS_CSS, PRIMITIVES_CSS, SPACING_CSS, ReferenceSet
from ..conventions.web import BEST_PRACTICE_WEB_CONVENTIONS, WebConventions
from ..models import GeneratedArtifact
from .pipeline import ColorModel, ColorPipeline, EmitterPolicy, Primitive
from .shared import (
    EmitContext,
    capitalize,
    collect_spacing_entries,
    new_token_comment,
    rename_comment,
    segments_to_kebab,
)


class CssPolicy(EmitterPolicy):
    def primitive_name(self, segments: Sequence[str]) -> str:
        return "--" + segments_to_kebab(segments)

    def reference(self, primitive: Primitive) -> str:
        return f"var({primitive.name})"


class CssEmitter:
    """Emits dependency-free CSS; best-practices output is wrapped in ``@layer tokens``."""

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()
        self.policy = CssPolicy()

    def emit(
        self,
        light: Any,
        dark: Any,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        references: Optional[ReferenceSet] = None,
        values: Optional[Mapping[str, Any]] = None,
        primitives: Optional[Mapping[str, Any]] = None,
    ) -> List[GeneratedArtifact]:
        model = ColorPipeline(self.policy).run(light, dark, primitives)
        primitives_ref = references.text(PRIMITIVES_CSS) if references else None
        colors_ref = references.text(COLORS_CSS) if references else None
        artifacts = [
            GeneratedArtifact("primitives.css", self.render_primitives(model, primitives_ref), "css", "web"),
            GeneratedArtifact(
                "colors.css",
                self.render_colors(model, conventions.scss_color_structure, colors_ref),
                "css",
                "web",
            ),
        ]
        spacing = self.render_spacing(values, references.text(SPACING_CSS) if references else None)
        if spacing is not None:
            artifacts.append(GeneratedArtifact("spacing.css", spacing, "css", "web"))
        return artifacts

    def render_primitives(self, model: ColorModel, reference: Optional[str] = None) -> str:
        renames = self.context.renames(reference)
        is_new = self.context.new_detector(reference)
        lines, indent = self._open("primitives.css")

        for family, members in model.families():
            old_name = renames.get(family)
            if old_name:
                lines.extend(f"{indent}  {line}" for line in rename_comment(old_name, family, "/*"))
            lines.append(f"{indent}  /* {family} */")
            for primitive in members:
                if is_new(primitive.name):
                    lines.extend(f"{indent}  {line}" for line in new_token_comment("/*"))
                lines.append(f"{indent}  {primitive.name}: {primitive.value};")

        return self._close(lines, indent)

    def render_colors(self, model: ColorModel, structure: str = "modern", reference: Optional[str] = None) -> str:
        is_new = self.context.new_detector(reference)
        categories = model.categories()
        lines, indent = self._open("colors.css")

        if structure == "media-query":
            for category, entries in categories:
                lines.append(f"{indent}  /* {capitalize(category)} */")
                for entry in entries:
                    if is_new(entry.name):
                        lines.extend(f"{indent}  {line}" for line in new_token_comment("/*"))
                    lines.append(f"{indent}  --{entry.name}: {self.policy.reference(entry.light)};")
            lines.extend([f"{indent}}}", "", f"{indent}@media (prefers-color-scheme: dark) {{", f"{indent}  :root {{"])
            for _category, entries in categories:
                for entry in entries:
                    if not entry.is_static:
                        lines.append(f"{indent}    --{entry.name}: {self.policy.reference(entry.dark)};")
            lines.append(f"{indent}  }}")
        else:
            lines.extend([f"{indent}  color-scheme: light dark;", ""])
            for category, entries in categories:
                lines.append(f"{indent}  /* {capitalize(category)} */")
                for entry in entries:
                    if is_new(entry.name):
                        lines.extend(f"{indent}  {line}" for line in new_token_comment("/*"))
                    lines.append(f"{indent}  --{entry.name}: {self.policy.render(entry)};")

        return self._close(lines, indent)

    def render_spacing(self, values: Optional[Mapping[str, Any]], reference: Optional[str] = None) -> Optional[str]:
        entries = collect_spacing_entries(values)
        if not entries:
            return None
        is_new = self.context.new_detector(reference)
        lines, indent = self._open("spacing.css")
        for entry in entries:
            if is_new(entry.css_var):
                lines.extend(f"{indent}  {line}" for line in new_token_comment("/*"))
            lines.append(f"{indent}  {entry.css_var}: {entry.px_value};")
        return self._close(lines, indent)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _open(self, filename: str):
        lines = [f"/* {filename} */", *self.context.header("/*", " */"), ""]
        indent = ""
        if self.context.best_practices:
            lines.append("@layer tokens {")
            indent = "  "
        lines.append(f"{indent}:root {{")
        return lines, indent

    def _close(self, lines: List[str], indent: str) -> str:
        lines.append(f"{indent}}}")
        if indent:
            lines.append("}")
        lines.append("")
        return "\n".join(lines) + "\n"


__all__ = ["CssEmitter", "CssPolicy"]
