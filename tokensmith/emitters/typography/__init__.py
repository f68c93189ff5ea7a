"""Typography emission.

Tokens are partitioned by name prefix: ``ios/`` styles only reach Swift,
``droid/`` styles reach Android and, with the prefix stripped, the web, and
everything else is treated as shared web typography.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from ...conventions.classify import KotlinTypographyScope, ReferenceSet
from ...conventions.typography import BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS, TypographyConventions
from ...models import GeneratedArtifact
from ..shared import EmitContext
from .kotlin import KotlinTypographyRenderer
from .parse import ParsedTypography, count_typography_styles, parse_typography
from .swift import render_typography_swift
from .web import render_typography_scss, render_typography_ts


@dataclass(frozen=True)
class TypographyOutput:
    artifacts: Tuple[GeneratedArtifact, ...]
    weight_fallbacks: Tuple[str, ...]


class TypographyEmitter:
    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    def emit(
        self,
        document: Any,
        platforms: Iterable[str],
        conventions: TypographyConventions = BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS,
        kotlin_scope: Optional[KotlinTypographyScope] = None,
        references: Optional[ReferenceSet] = None,
    ) -> TypographyOutput:
        """Render every requested platform and report styles whose weight fell back to 400."""
        parsed = parse_typography(document)
        artifacts = self.render(parsed, platforms, conventions, kotlin_scope)
        if references is not None:
            artifacts = [
                artifact.with_content(self.context.mark_new(artifact.content, references.for_artifact(artifact.filename)))
                for artifact in artifacts
            ]
        return TypographyOutput(tuple(artifacts), parsed.weight_fallbacks)

    def render(
        self,
        parsed: ParsedTypography,
        platforms: Iterable[str],
        conventions: TypographyConventions = BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS,
        kotlin_scope: Optional[KotlinTypographyScope] = None,
    ) -> List[GeneratedArtifact]:
        platforms = set(platforms)
        artifacts: List[GeneratedArtifact] = []

        web = parsed.for_platform("web")
        if "web" in platforms and web:
            artifacts.append(
                GeneratedArtifact(
                    "Typography.scss", render_typography_scss(web, conventions.scss, self.context), "scss", "web"
                )
            )
            artifacts.append(
                GeneratedArtifact(
                    "Typography.ts", render_typography_ts(web, conventions.ts, self.context), "typescript", "web"
                )
            )

        ios = parsed.for_platform("ios")
        if "ios" in platforms and ios:
            artifacts.append(
                GeneratedArtifact(
                    "Typography.swift", render_typography_swift(ios, conventions.swift, self.context), "swift", "ios"
                )
            )

        android = parsed.for_platform("android")
        if "android" in platforms and android:
            artifacts.extend(KotlinTypographyRenderer(conventions.kotlin, self.context).render(android, kotlin_scope))
        return artifacts

    def count(self, document: Any) -> int:
        return count_typography_styles(document)


__all__ = ["TypographyEmitter", "TypographyOutput", "count_typography_styles", "parse_typography"]
