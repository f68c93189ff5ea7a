"""Spacing scale from the ``Integer`` group of the values export."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..conventions.classify import ReferenceSet
from ..conventions.web import BEST_PRACTICE_WEB_CONVENTIONS, WebConventions, scss_var_to_ts_name
from ..models import GeneratedArtifact
from .shared import EmitContext, SpacingEntry, collect_spacing_entries


class SpacingEmitter:
    """``Spacing.scss`` (variables plus custom properties) and ``Spacing.ts``."""

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    def emit(
        self,
        values: Optional[Mapping[str, Any]],
        conventions: WebConventions = BEST_PRACTICE_WEB_CONVENTIONS,
        references: Optional[ReferenceSet] = None,
    ) -> List[GeneratedArtifact]:
        entries = collect_spacing_entries(values)
        if not entries:
            return []
        rendered = (
            ("Spacing.scss", self.render_scss(entries), "scss"),
            ("Spacing.ts", self.render_ts(entries, conventions), "typescript"),
        )
        return [
            GeneratedArtifact(filename, self.context.mark_new(content, _reference(references, filename)), fmt, "web")
            for filename, content, fmt in rendered
        ]

    def render_scss(self, entries: List[SpacingEntry]) -> str:
        lines = ["// Spacing.scss", *self.context.header("//"), "", "// Spacing scale — SCSS variables"]
        for entry in entries:
            lines.append(f"{_scss_var(entry)}: {entry.px_value};")
        lines.extend(["", "// Spacing scale — CSS custom properties (for JS access and runtime use)", ":root {"])
        for entry in entries:
            lines.append(f"  {entry.css_var}: #{{{_scss_var(entry)}}}; // {entry.px_value}")
        lines.extend(["}", ""])
        return "\n".join(lines) + "\n"

    def render_ts(self, entries: List[SpacingEntry], conventions: WebConventions) -> str:
        lines = ["// Spacing.ts", *self.context.header("//"), "", "// Spacing scale (px)"]
        for entry in entries:
            name = scss_var_to_ts_name(_scss_var(entry), conventions.ts_naming_case)
            lines.append(f"export const {name} = '{entry.px_value}' as const;")
        lines.append("")
        return "\n".join(lines) + "\n"


def _scss_var(entry: SpacingEntry) -> str:
    return "$" + entry.css_var[2:]


def _reference(references: Optional[ReferenceSet], filename: str) -> Optional[str]:
    return references.for_artifact(filename) if references is not None else None


__all__ = ["SpacingEmitter"]
