"""Reference coverage and cross-platform value consistency."""

from __future__ import annotations

import re
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..diff.tokens import extract_token_name_value, extract_token_names
from ..diff.lines import split_lines
from ..models import GeneratedArtifact
from ..tokens.colors import figma_to_hex, hex_to_components

_SWIFT_HEX_RE = re.compile(r"color\(\s*hex:\s*0x([0-9a-f]{6,8})")
_KOTLIN_HEX_RE = re.compile(r"color\(\s*0x([0-9a-f]{8})")
_WEB_HEX_RE = re.compile(r"#[0-9a-f]{3,8}\b")
# Values that point at another token rather than carrying a literal.
_REFERENCE_RES = (
    re.compile(r"color\(\s*light:"),
    re.compile(r"color\(\s*uicolor\."),
    re.compile(r"^primitives\."),
    re.compile(r"^(light|dark)colortokens\."),
)
_LEADING_SIGILS_RE = re.compile(r"^[$_-]+")
_SEPARATORS_RE = re.compile(r"[-_]+")


@dataclass(frozen=True)
class TokenCoverage:
    total: int
    covered: int
    orphaned: Tuple[str, ...]
    unimplemented: Tuple[str, ...]
    coverage_percent: float


@dataclass(frozen=True)
class PlatformValue:
    platform: str
    raw_value: str
    normalized_hex: str


@dataclass(frozen=True)
class PlatformMismatch:
    token_name: str
    values: Tuple[PlatformValue, ...]


def compute_token_coverage(artifacts: Sequence[GeneratedArtifact]) -> Dict[str, TokenCoverage]:
    """Compare generated and reference names for every artifact that has a reference.

    ``orphaned`` names exist only in the reference, ``unimplemented`` names only
    in the generated file.
    """
    result: Dict[str, TokenCoverage] = OrderedDict()
    for artifact in artifacts:
        if not artifact.reference_content:
            continue
        generated = extract_token_names(artifact.content)
        reference = extract_token_names(artifact.reference_content)
        covered = generated & reference
        total = len(generated | reference)
        result[artifact.filename] = TokenCoverage(
            total=total,
            covered=len(covered),
            orphaned=tuple(sorted(reference - generated)),
            unimplemented=tuple(sorted(generated - reference)),
            coverage_percent=(len(covered) / total * 100) if total else 100.0,
        )
    return result


def normalize_token_name(name: str) -> str:
    return _SEPARATORS_RE.sub("-", _LEADING_SIGILS_RE.sub("", name)).lower()


def normalize_hex_value(raw: str) -> Optional[str]:
    """Reduce a declared color literal to ``#rrggbb``; references yield None."""
    value = raw.strip().lower()
    if any(pattern.search(value) for pattern in _REFERENCE_RES):
        return None

    match = _SWIFT_HEX_RE.search(value)
    if match:
        return f"#{match.group(1)[:6]}"

    match = _KOTLIN_HEX_RE.search(value)
    if match:
        return f"#{match.group(1)[2:]}"

    match = _WEB_HEX_RE.search(value)
    if not match:
        return None
    components = hex_to_components(match.group(0))
    if components is None:
        return None
    r, g, b, _alpha = components
    return figma_to_hex(r, g, b)


def validate_cross_platform(artifacts: Sequence[GeneratedArtifact]) -> List[PlatformMismatch]:
    """Flag tokens whose normalized name carries different colors on different platforms."""
    by_name: Dict[str, Dict[str, PlatformValue]] = OrderedDict()
    for artifact in artifacts:
        for line in split_lines(artifact.content):
            pair = extract_token_name_value(line)
            if pair is None:
                continue
            name, raw = pair
            normalized = normalize_hex_value(raw)
            if normalized is None:
                continue
            by_name.setdefault(normalize_token_name(name), {})[artifact.platform] = PlatformValue(
                platform=artifact.platform, raw_value=raw, normalized_hex=normalized
            )

    mismatches: List[PlatformMismatch] = []
    for name, platforms in by_name.items():
        if len(platforms) < 2:
            continue
        if len({value.normalized_hex for value in platforms.values()}) > 1:
            mismatches.append(PlatformMismatch(token_name=name, values=tuple(platforms.values())))
    return mismatches


__all__ = [
    "PlatformMismatch",
    "PlatformValue",
    "TokenCoverage",
    "compute_token_coverage",
    "normalize_hex_value",
    "normalize_token_name",
    "validate_cross_platform",
]
