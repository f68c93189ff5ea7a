"""Generation pipeline: documents and references in, artifacts, diffs and warnings out."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .analysis import (
    build_dependency_map,
    check_reference_completeness,
    compute_token_coverage,
    detect_unused_tokens,
    impact_from_diffs,
    lint_summary,
    lint_token_names,
    rules_for_platform,
    unused_summary,
    validate_cross_platform,
)
from .analysis.completeness import KOTLIN_TYPOGRAPHY, WEB_COLORS
from .analysis.lint import LintResult
from .config import KNOWN_PLATFORMS, TokensmithConfig
from .conventions import ConventionDetector, discover_detectors
from .conventions.classify import (
    COLORS_SCSS,
    COLORS_TS,
    KOTLIN_COLORS,
    PRIMITIVES_SCSS,
    PRIMITIVES_TS,
    SWIFT_COLORS,
    TYPOGRAPHY_KOTLIN,
    TYPOGRAPHY_KOTLIN_ACCESSOR,
    TYPOGRAPHY_SCSS,
    TYPOGRAPHY_SWIFT,
    TYPOGRAPHY_TS,
    KotlinTypographyScope,
    ReferenceSet,
    classify_kotlin_references,
    classify_kotlin_typography_references,
    classify_references,
)
from .conventions.kotlin import BEST_PRACTICE_KOTLIN_CONVENTIONS, KotlinConventions
from .conventions.swift import BEST_PRACTICE_SWIFT_CONVENTIONS
from .conventions.typography import BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS, TypographyConventions
from .conventions.web import BEST_PRACTICE_WEB_CONVENTIONS
from .diff import append_removed_token_comments, diff, generate_changelog
from .emitters import (
    BorderEmitter,
    CompositeEmitter,
    CssEmitter,
    EmitContext,
    KotlinEmitter,
    MotionEmitter,
    OpacityEmitter,
    RadiusEmitter,
    ScssEmitter,
    ShadowEmitter,
    SpacingEmitter,
    SwiftEmitter,
    TypeScriptEmitter,
    TypographyEmitter,
    collect_spacing_entries,
)
from .emitters.pipeline import ColorPipeline
from .emitters.scss import ScssPolicy
from .emitters.typography import count_typography_styles
from .errors import TokenDocumentError, TokensmithError
from .logging import get_logger
from .models import (
    DiffRecord,
    GeneratedArtifact,
    GenerationResult,
    GenerationStats,
    GenerationWarning,
)
from .tokens.graph import build_token_graph, detect_cycles, format_cycle_warnings
from .tokens.walker import collect_unknown_token_types, looks_like_token_document

_WEB_COLOR_SLOTS = (PRIMITIVES_SCSS, COLORS_SCSS, PRIMITIVES_TS, COLORS_TS)
_FORMAT_BY_SUFFIX = {
    ".scss": "scss",
    ".css": "css",
    ".ts": "typescript",
    ".swift": "swift",
    ".kt": "kotlin",
}


@dataclass
class GenerationRequest:
    """Inputs for one generation run."""

    light: Mapping[str, Any]
    dark: Mapping[str, Any]
    values: Optional[Mapping[str, Any]] = None
    typography: Optional[Mapping[str, Any]] = None
    primitives: Optional[Mapping[str, Any]] = None
    platforms: Sequence[str] = KNOWN_PLATFORMS
    best_practices: bool = True
    references: Mapping[str, str] = field(default_factory=dict)


@dataclass
class DetectedConventions:
    """Profiles and reference-derived scopes for one run."""

    web: Any = BEST_PRACTICE_WEB_CONVENTIONS
    swift: Any = BEST_PRACTICE_SWIFT_CONVENTIONS
    kotlin: KotlinConventions = BEST_PRACTICE_KOTLIN_CONVENTIONS
    typography: TypographyConventions = BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS
    kotlin_typography_scope: Optional[KotlinTypographyScope] = None
    swift_bugs: Tuple[str, ...] = ()
    kotlin_bugs: Tuple[str, ...] = ()
    kotlin_typography_bugs: Tuple[str, ...] = ()


class Orchestrator:
    """Coordinates detection, emission, diffing and analysis for a generation run."""

    def __init__(
        self,
        config: TokensmithConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        detectors: Optional[Mapping[str, ConventionDetector]] = None,
    ) -> None:
        self.config = config or TokensmithConfig(root=Path.cwd())
        self.clock = clock or (lambda: datetime.now(UTC))
        self._detector_overrides = dict(detectors) if detectors is not None else None
        self.logger = get_logger("orchestrator")

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run the full pipeline for ``request``."""
        self._validate(request)
        platforms = [platform for platform in KNOWN_PLATFORMS if platform in set(request.platforms)]
        mode = "best-practices" if request.best_practices else "match-existing"
        self.logger.info("Starting generation for %s (%s)", ", ".join(platforms) or "no platforms", mode)

        warnings: List[GenerationWarning] = []
        warnings.extend(self._cycle_warnings(request))
        self._log_document_shape(request)

        references = classify_references(request.references)
        if references.unclassified:
            self.logger.debug(
                "Ignoring unrecognised reference files: %s",
                ", ".join(ref.filename for ref in references.unclassified),
            )
        conventions = self._detect_conventions(references, request.best_practices)
        warnings.extend(self._reference_warnings(references, conventions, request.best_practices))

        context = EmitContext(
            best_practices=request.best_practices,
            reference_filenames=tuple(references.all_filenames()),
            now=self.clock(),
        )
        artifacts, weight_fallbacks = self._emit(request, platforms, references, conventions, context)
        self.logger.debug("Emitted %d artifact(s)", len(artifacts))

        artifacts = self._attach_references(artifacts, references, request.best_practices)
        diffs = [
            diff(artifact.reference_content, artifact.content, artifact.filename)
            for artifact in artifacts
            if artifact.reference_content is not None
        ]
        self.logger.debug("Diffed %d artifact(s) against references", len(diffs))

        dep_map = build_dependency_map(request.light)
        impact = impact_from_diffs(dep_map, diffs)
        self.logger.debug("Impact analysis found %d changed primitive(s)", len(impact))

        model = ColorPipeline(ScssPolicy()).run(request.light, request.dark, request.primitives)
        for token, reason in model.unresolved.items():
            warnings.append(
                GenerationWarning("resolution", f"Token {token} could not be resolved ({reason}); omitted", (token,))
            )
        if weight_fallbacks:
            warnings.append(
                GenerationWarning(
                    "resolution",
                    f"{len(weight_fallbacks)} typography style(s) have an unrecognised font weight; using 400",
                    tuple(weight_fallbacks),
                )
            )
        warnings.extend(self.lint_warnings(request.light, platforms))
        warnings.extend(self._unused_warnings(artifacts, dep_map))

        stats = self._stats(request, model)
        self.logger.info(
            "Generation finished: %d artifact(s), %d warning(s), %d diff(s)",
            len(artifacts),
            len(warnings),
            len(diffs),
        )
        return GenerationResult(artifacts=artifacts, stats=stats, warnings=warnings, diffs=diffs, impact=impact)

    def diff_files(self, reference: str, generated: str, filename: str) -> DiffRecord:
        """Classify the token changes between two versions of one file."""
        record = diff(reference, generated, filename)
        self.logger.debug(
            "%s: %d added, %d removed, %d modified, %d renamed",
            filename,
            len(record.added_tokens),
            len(record.removed_tokens),
            len(record.modified_tokens),
            len(record.renamed_tokens),
        )
        return record

    def lint(self, document: Mapping[str, Any], platforms: Sequence[str]) -> Dict[str, List[LintResult]]:
        """Naming lint results for ``document`` per platform."""
        return {
            platform: lint_token_names(document, rules_for_platform(platform, self.config.naming))
            for platform in platforms
        }

    def lint_warnings(self, document: Mapping[str, Any], platforms: Sequence[str]) -> List[GenerationWarning]:
        warnings: List[GenerationWarning] = []
        for platform, results in self.lint(document, platforms).items():
            if not results:
                continue
            summary = lint_summary(results)
            warnings.append(
                GenerationWarning(
                    "lint",
                    f"{platform}: {summary.errors} naming error(s), {summary.warnings} warning(s)",
                    tuple(result.message for result in results),
                )
            )
        return warnings

    def changelog(self, result: GenerationResult, platforms: Sequence[str]) -> str:
        """Markdown summary of ``result`` covering diffs, coverage and impact."""
        return generate_changelog(
            result.artifacts,
            platforms,
            diffs=result.diffs,
            coverage=compute_token_coverage(result.artifacts),
            mismatches=validate_cross_platform(result.artifacts),
            impact=result.impact,
            now=self.clock(),
        )

    def write_artifacts(self, result: GenerationResult, out_dir: Path) -> List[Path]:
        """Write every artifact to ``out_dir/<platform>/<filename>``."""
        written: List[Path] = []
        for artifact in result.artifacts:
            target = out_dir / artifact.platform / artifact.filename
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.content, encoding="utf-8")
            written.append(target)
        self.logger.info("Wrote %d file(s) to %s", len(written), out_dir)
        return written

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @staticmethod
    def _validate(request: GenerationRequest) -> None:
        for label, document in (("light", request.light), ("dark", request.dark)):
            if not isinstance(document, Mapping):
                raise TokenDocumentError(f"The {label} color export must be a JSON object")
        for label, document in (
            ("values", request.values),
            ("typography", request.typography),
            ("primitives", request.primitives),
        ):
            if document is not None and not isinstance(document, Mapping):
                raise TokenDocumentError(f"The {label} export must be a JSON object")
        unknown = sorted({platform for platform in request.platforms if platform not in KNOWN_PLATFORMS})
        if unknown:
            raise TokensmithError(f"Unknown platform(s): {', '.join(unknown)}")

    def _log_document_shape(self, request: GenerationRequest) -> None:
        if not looks_like_token_document(request.light, "color"):
            self.logger.warning("The light export contains no color tokens; color files will be empty")
        for label, document in (("light", request.light), ("values", request.values)):
            unknown = collect_unknown_token_types(document) if document is not None else {}
            if unknown:
                summary = ", ".join(f"{kind} ({count})" for kind, count in sorted(unknown.items()))
                self.logger.debug("Unknown token types in %s export: %s", label, summary)

    def _cycle_warnings(self, request: GenerationRequest) -> List[GenerationWarning]:
        # Light and dark share token paths, so each mode gets its own graph.
        warnings: List[GenerationWarning] = []
        seen = set()
        for mode in (request.light, request.dark):
            report = detect_cycles(build_token_graph(request.primitives, mode))
            for message, chain in zip(format_cycle_warnings(report), report.cycles):
                if message in seen:
                    continue
                seen.add(message)
                warnings.append(GenerationWarning("cycle", message, tuple(chain)))
        if warnings:
            self.logger.warning("Detected %d alias cycle(s)", len(warnings))
        return warnings

    def _detectors(self) -> Mapping[str, ConventionDetector]:
        if self._detector_overrides is not None:
            return self._detector_overrides
        enabled = self.config.detectors.enabled or None
        return discover_detectors(enabled)

    def _detect_conventions(self, references: ReferenceSet, best_practices: bool) -> DetectedConventions:
        detectors = self._detectors()

        def detect(name: str, reference: Optional[str], default: Any) -> Any:
            detector = detectors.get(name)
            if detector is None:
                return default
            return detector.detect(reference, best_practices=best_practices)

        def bugs(name: str, reference: Optional[str]) -> Tuple[str, ...]:
            detector = detectors.get(name)
            if detector is None or best_practices or not reference:
                return ()
            return tuple(detector.bug_warnings(reference))

        web_ref = references.text(*_WEB_COLOR_SLOTS)
        swift_ref = references.text(SWIFT_COLORS)
        kotlin_ref = references.text(KOTLIN_COLORS)
        kotlin_typography_ref = references.text(TYPOGRAPHY_KOTLIN)

        kotlin = detect("kotlin", kotlin_ref, BEST_PRACTICE_KOTLIN_CONVENTIONS)
        typography = TypographyConventions(
            scss=detect("typography-scss", references.text(TYPOGRAPHY_SCSS), BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.scss),
            ts=detect("typography-ts", references.text(TYPOGRAPHY_TS), BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.ts),
            swift=detect(
                "typography-swift", references.text(TYPOGRAPHY_SWIFT), BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.swift
            ),
            kotlin=detect("typography-kotlin", kotlin_typography_ref, BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.kotlin),
        )
        scope = None
        if not best_practices:
            scope = classify_kotlin_typography_references(
                references.files(TYPOGRAPHY_KOTLIN, TYPOGRAPHY_KOTLIN_ACCESSOR)
            )

        detected = DetectedConventions(
            web=detect("web", web_ref, BEST_PRACTICE_WEB_CONVENTIONS),
            swift=detect("swift", swift_ref, BEST_PRACTICE_SWIFT_CONVENTIONS),
            kotlin=kotlin,
            typography=typography,
            kotlin_typography_scope=scope,
            swift_bugs=bugs("swift", swift_ref),
            kotlin_bugs=bugs("kotlin", kotlin_ref),
            kotlin_typography_bugs=bugs("typography-kotlin", kotlin_typography_ref),
        )
        self.logger.debug("Detected conventions (%s)", "defaults" if best_practices else "from references")
        return detected

    def _reference_warnings(
        self, references: ReferenceSet, conventions: DetectedConventions, best_practices: bool
    ) -> List[GenerationWarning]:
        warnings: List[GenerationWarning] = []
        for label, found in (
            ("Colors.swift", conventions.swift_bugs),
            ("Kotlin colors", conventions.kotlin_bugs),
            ("Kotlin typography", conventions.kotlin_typography_bugs),
        ):
            warnings.extend(GenerationWarning("reference", f"{label}: {message}", (label,)) for message in found)

        if best_practices or not references:
            return warnings

        kotlin_scope = classify_kotlin_references(references.files(KOTLIN_COLORS))
        if kotlin_scope.warning:
            warnings.append(GenerationWarning("reference", kotlin_scope.warning, tuple(references.filenames(KOTLIN_COLORS))))
        completeness = check_reference_completeness(
            {
                KOTLIN_COLORS: references.text(KOTLIN_COLORS),
                KOTLIN_TYPOGRAPHY: references.text(TYPOGRAPHY_KOTLIN, TYPOGRAPHY_KOTLIN_ACCESSOR),
                WEB_COLORS: references.text(*_WEB_COLOR_SLOTS),
            }
        )
        warnings.extend(GenerationWarning("reference", item.message, (item.key,)) for item in completeness)
        return warnings

    def _emit(
        self,
        request: GenerationRequest,
        platforms: Sequence[str],
        references: ReferenceSet,
        conventions: DetectedConventions,
        context: EmitContext,
    ) -> Tuple[List[GeneratedArtifact], Tuple[str, ...]]:
        light, dark, primitives = request.light, request.dark, request.primitives
        artifacts: List[GeneratedArtifact] = []

        if "web" in platforms:
            artifacts.extend(ScssEmitter(context).emit(light, dark, conventions.web, references, primitives))
            artifacts.extend(TypeScriptEmitter(context).emit(light, dark, conventions.web, references, primitives))
            artifacts.extend(SpacingEmitter(context).emit(request.values, conventions.web, references))
            artifacts.extend(
                CssEmitter(context).emit(light, dark, conventions.web, references, request.values, primitives)
            )
        if "ios" in platforms:
            artifacts.extend(
                SwiftEmitter(context).emit(light, dark, conventions.swift, references, conventions.swift_bugs, primitives)
            )
        if "android" in platforms:
            scope = classify_kotlin_references(references.files(KOTLIN_COLORS)) if not request.best_practices else None
            artifacts.extend(
                KotlinEmitter(context).emit(
                    light, dark, conventions.kotlin, references, scope, conventions.kotlin_bugs, primitives
                )
            )

        weight_fallbacks: Tuple[str, ...] = ()
        if request.typography is not None:
            output = TypographyEmitter(context).emit(
                request.typography, platforms, conventions.typography, conventions.kotlin_typography_scope, references
            )
            artifacts.extend(output.artifacts)
            weight_fallbacks = output.weight_fallbacks

        if request.values is not None:
            for emitter in self._composite_emitters(context):
                artifacts.extend(emitter.emit(request.values, platforms, conventions.kotlin.package, references))
        return artifacts, weight_fallbacks

    def _composite_emitters(self, context: EmitContext) -> List[CompositeEmitter]:
        return [
            ShadowEmitter(context),
            BorderEmitter(context),
            OpacityEmitter(context),
            MotionEmitter(context, seconds_threshold=self.config.motion.seconds_threshold),
            RadiusEmitter(context),
        ]

    def _attach_references(
        self, artifacts: Sequence[GeneratedArtifact], references: ReferenceSet, best_practices: bool
    ) -> List[GeneratedArtifact]:
        attached: List[GeneratedArtifact] = []
        for artifact in artifacts:
            reference = references.for_artifact(artifact.filename)
            if reference is None:
                attached.append(artifact)
                continue
            content = artifact.content
            # REMOVED comments belong to match-existing output only.
            if not best_practices:
                content = append_removed_token_comments(content, reference, artifact.format)
            attached.append(artifact.with_content(content).with_reference(reference))
        return attached

    def _unused_warnings(self, artifacts: Sequence[GeneratedArtifact], dep_map) -> List[GenerationWarning]:
        results = detect_unused_tokens(artifacts, dep_map)
        summary = unused_summary(results)
        warnings: List[GenerationWarning] = []
        if summary.total_unused:
            warnings.append(
                GenerationWarning(
                    "unused",
                    f"{summary.total_unused} reference token(s) no longer exist in the Figma export",
                    tuple(f"{result.filename}: {name}" for result in results for name in result.unused_in_figma),
                )
            )
        if summary.total_orphaned:
            warnings.append(
                GenerationWarning(
                    "unused",
                    f"{summary.total_orphaned} primitive(s) are not referenced by any semantic token",
                    tuple(f"{result.filename}: {name}" for result in results for name in result.orphaned_primitives),
                )
            )
        return warnings

    def _stats(self, request: GenerationRequest, model) -> GenerationStats:
        values = request.values
        context = EmitContext()
        return GenerationStats(
            primitive_colors=len(model.primitives),
            semantic_colors=len(model.semantics),
            spacing_steps=len(collect_spacing_entries(values)),
            typography_styles=count_typography_styles(request.typography) if request.typography is not None else 0,
            shadow_tokens=ShadowEmitter(context).count(values) if values is not None else 0,
            border_tokens=BorderEmitter(context).count(values) if values is not None else 0,
            opacity_tokens=OpacityEmitter(context).count(values) if values is not None else 0,
            motion_tokens=(
                MotionEmitter(context, self.config.motion.seconds_threshold).count(values) if values is not None else 0
            ),
            radius_tokens=RadiusEmitter(context).count(values) if values is not None else 0,
        )


def load_token_document(path: Path) -> Dict[str, Any]:
    """Read a JSON token export, raising ``TokenDocumentError`` on malformed input."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TokenDocumentError(f"{path.name} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise TokenDocumentError(f"{path.name} must contain a JSON object at the root")
    return data


def load_reference_files(paths: Sequence[Path]) -> Dict[str, str]:
    """Read reference files keyed by basename; unsupported extensions are skipped."""
    references: Dict[str, str] = {}
    for path in paths:
        if path.suffix.lower() not in _FORMAT_BY_SUFFIX:
            continue
        references[path.name] = path.read_text(encoding="utf-8")
    return references


__all__ = [
    "DetectedConventions",
    "GenerationRequest",
    "Orchestrator",
    "load_reference_files",
    "load_token_document",
]
