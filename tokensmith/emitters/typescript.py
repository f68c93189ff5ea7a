"""Primitives.ts and Colors.ts."""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Sequence

from ..conventions.classify import COLORS_TS, PRIMITIVES_TS, ReferenceSet
from ..conventions.web import BEST_PRACTICE_WEB_CONVENTIONS, WebConventions, scss_var_to_ts_name
from ..models import GeneratedArtifact
from .pipeline import ColorModel, ColorPipeline, EmitterPolicy, Primitive, SemanticColor
from .shared import EmitContext, capitalize, new_token_comment, rename_comment, segments_to_kebab

_HEX_RE = re.compile(r"#([0-9a-fA-F]+)")


class TypeScriptPolicy(EmitterPolicy):
    """Constants named by the detected TS naming case, values via ``PRIMITIVES.*``."""

    def __init__(self, naming_case: str = "screaming_snake", separator: str = "-") -> None:
        self.naming_case = naming_case
        self.separator = separator

    def primitive_name(self, segments: Sequence[str]) -> str:
        return scss_var_to_ts_name("$" + segments_to_kebab(segments), self.naming_case)

    def semantic_name(self, token_name: str) -> str:
        return scss_var_to_ts_name("$" + token_name, self.naming_case)

    def reference(self, primitive: Primitive) -> str:
        return f"${{PRIMITIVES.{primitive.name}}}"


class TypeScriptEmitter:
    """Emits TypeScript constants mirroring the SCSS color layer."""

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    def emit(
        self,
        light: Any,
        dark: Any,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        references: Optional[ReferenceSet] = None,
        primitives: Optional[Mapping[str, Any]] = None,
    ) -> List[GeneratedArtifact]:
        policy = TypeScriptPolicy(conventions.ts_naming_case, conventions.separator)
        model = ColorPipeline(policy).run(light, dark, primitives)
        primitives_ref = references.text(PRIMITIVES_TS) if references else None
        colors_ref = references.text(COLORS_TS) if references else None
        return [
            GeneratedArtifact(
                "Primitives.ts", self.render_primitives(model, conventions, primitives_ref), "typescript", "web"
            ),
            GeneratedArtifact(
                "Colors.ts", self.render_colors(model, conventions, colors_ref), "typescript", "web"
            ),
        ]

    def render_primitives(
        self,
        model: ColorModel,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        reference: Optional[str] = None,
    ) -> str:
        renames = self.context.renames(reference)
        is_new = self.context.new_detector(reference)
        annotation = ": string" if conventions.has_type_annotations else ""
        suffix = " as const" if conventions.ts_uses_as_const else ""

        lines = ["// Primitives.ts", *self.context.header("//"), ""]
        for family, members in model.families():
            old_name = renames.get(family)
            if old_name:
                lines.extend(rename_comment(old_name, family, "//"))
            lines.append(f"// {capitalize(family)} color family")
            for primitive in members:
                if is_new(primitive.name):
                    lines.extend(new_token_comment("//"))
                value = primitive.value
                if conventions.ts_hex_casing == "upper":
                    value = _HEX_RE.sub(lambda m: "#" + m.group(1).upper(), value)
                lines.append(f"export const {primitive.name}{annotation} = '{value}'{suffix};")
            lines.append("")
        return "\n".join(lines) + "\n"

    def render_colors(
        self,
        model: ColorModel,
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        reference: Optional[str] = None,
    ) -> str:
        is_new = self.context.new_detector(reference)
        policy = TypeScriptPolicy(conventions.ts_naming_case, conventions.separator)

        lines = ["import * as PRIMITIVES from './Primitives';", "", "// Colors.ts", *self.context.header("//"), ""]
        for category, entries in model.categories():
            lines.append(f"// {capitalize(category)} colors")
            for entry in entries:
                if is_new(entry.name):
                    lines.extend(new_token_comment("//"))
                lines.append(_semantic_line(entry, policy, conventions))
            lines.append("")
        return "\n".join(lines) + "\n"


def _semantic_line(entry: SemanticColor, policy: TypeScriptPolicy, conventions: WebConventions) -> str:
    annotation = ": string " if conventions.has_type_annotations else " "
    suffix = " as const" if conventions.ts_uses_as_const else ""
    return f"export const {entry.name}{annotation}= `var(--{entry.token_name}, {policy.render(entry)})`{suffix};"


__all__ = ["TypeScriptEmitter", "TypeScriptPolicy"]
