"""Reference tokens missing from the export and primitives nobody references."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..diff.tokens import extract_token_names, extract_token_values
from ..models import GeneratedArtifact
from .impact import DependencyEntry, squash_name, target_keys

# Values containing these markers point at another token.
_REFERENCE_MARKERS = ("var(", "Primitives.")


@dataclass(frozen=True)
class UnusedTokenResult:
    filename: str
    unused_in_figma: Tuple[str, ...]
    orphaned_primitives: Tuple[str, ...]
    total_generated: int
    total_reference: int


@dataclass(frozen=True)
class UnusedSummary:
    total_unused: int
    total_orphaned: int


def detect_unused_tokens(
    artifacts: Sequence[GeneratedArtifact],
    dep_map: Optional[Sequence[DependencyEntry]] = None,
) -> List[UnusedTokenResult]:
    """Per artifact with a reference, list reference names the export no longer produces.

    With a dependency map, generated literals whose name matches no alias
    target are reported as orphaned primitives. Names compare case-insensitively.
    """
    results: List[UnusedTokenResult] = []
    targets = None
    if dep_map is not None:
        targets = {key for entry in dep_map for key in target_keys(entry.primitive)}

    for artifact in artifacts:
        if not artifact.reference_content:
            continue
        generated = {name.lower() for name in extract_token_names(artifact.content)}
        reference = {name.lower() for name in extract_token_names(artifact.reference_content)}

        orphaned: List[str] = []
        if targets is not None:
            values = {name.lower(): value for name, value in extract_token_values(artifact.content).items()}
            for name in sorted(generated):
                value = values.get(name)
                if value is None or any(marker in value for marker in _REFERENCE_MARKERS):
                    continue
                if squash_name(name) not in targets:
                    orphaned.append(name)

        results.append(
            UnusedTokenResult(
                filename=artifact.filename,
                unused_in_figma=tuple(sorted(reference - generated)),
                orphaned_primitives=tuple(orphaned),
                total_generated=len(generated),
                total_reference=len(reference),
            )
        )
    return results


def unused_summary(results: Sequence[UnusedTokenResult]) -> UnusedSummary:
    return UnusedSummary(
        total_unused=sum(len(result.unused_in_figma) for result in results),
        total_orphaned=sum(len(result.orphaned_primitives) for result in results),
    )


__all__ = ["UnusedSummary", "UnusedTokenResult", "detect_unused_tokens", "unused_summary"]
