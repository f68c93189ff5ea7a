"""Naming convention lint for token paths, per target platform."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern, Sequence, Tuple

from ..config import NamingLintConfig
from ..tokens.walker import walk_tokens

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CASE_PATTERNS: Dict[str, Pattern[str]] = {
    "kebab": re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$"),
    "camel": re.compile(r"^[a-z][a-zA-Z0-9]*$"),
    "snake": re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$"),
    "screaming_snake": re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)*$"),
    "pascal": re.compile(r"^[A-Z][a-zA-Z0-9]*$"),
}

_WHITESPACE_RE = re.compile(r"\s+")
# Segments are lower-cased, so upper-case conventions are checked on the upper-cased segment.
_UPPER_CASES = ("screaming_snake", "pascal")


@dataclass(frozen=True)
class NamingRule:
    id: str
    severity: str
    case: Optional[str] = None
    pattern: Optional[Pattern[str]] = None
    prefix: Optional[str] = None
    max_depth: Optional[int] = None


@dataclass(frozen=True)
class LintResult:
    token: str
    rule: str
    message: str
    severity: str


@dataclass(frozen=True)
class LintSummary:
    errors: int
    warnings: int


def rules_for_platform(platform: str, config: Optional[NamingLintConfig] = None) -> Tuple[NamingRule, ...]:
    """Built-in rules: one case rule (error) and a depth rule (warning)."""
    config = config or NamingLintConfig()
    if platform not in ("web", "ios", "android"):
        platform = "web"
    case = getattr(config, platform)
    return (
        NamingRule(id=f"{platform}-{case.replace('_', '-')}", severity=SEVERITY_ERROR, case=case),
        NamingRule(id=f"{platform}-no-deep", severity=SEVERITY_WARNING, max_depth=config.max_depth),
    )


def lint_segments(path: Sequence[str]) -> List[str]:
    """Path segments as names see them: ``standard`` dropped, lower-cased, spaces hyphenated."""
    return [_WHITESPACE_RE.sub("-", segment.lower()) for segment in path if segment.lower() != "standard"]


def token_path_to_name(path: Sequence[str]) -> str:
    return "-".join(lint_segments(path))


def matches_case(name: str, case: str) -> bool:
    pattern = CASE_PATTERNS.get(case)
    return bool(pattern.match(name)) if pattern else True


def lint_token_names(document: Any, rules: Sequence[NamingRule]) -> List[LintResult]:
    results: List[LintResult] = []
    for path, _token in walk_tokens(document):
        segments = lint_segments(path)
        name = "-".join(segments)
        for rule in rules:
            # Case rules apply per segment; the joined name is always kebab.
            if rule.case and not all(_segment_matches(segment, rule.case) for segment in segments):
                results.append(
                    LintResult(name, rule.id, f'Token "{name}" does not match {rule.case} naming convention', rule.severity)
                )
            if rule.pattern is not None and not rule.pattern.search(name):
                results.append(
                    LintResult(name, rule.id, f'Token "{name}" does not match pattern {rule.pattern.pattern}', rule.severity)
                )
            if rule.prefix and not name.startswith(rule.prefix):
                results.append(
                    LintResult(name, rule.id, f'Token "{name}" missing required prefix "{rule.prefix}"', rule.severity)
                )
            if rule.max_depth and len(path) > rule.max_depth:
                results.append(
                    LintResult(
                        name,
                        rule.id,
                        f'Token "{name}" exceeds max depth of {rule.max_depth} (actual: {len(path)})',
                        rule.severity,
                    )
                )
    return results


def _segment_matches(segment: str, case: str) -> bool:
    return matches_case(segment.upper() if case in _UPPER_CASES else segment, case)


def lint_summary(results: Sequence[LintResult]) -> LintSummary:
    return LintSummary(
        errors=sum(1 for result in results if result.severity == SEVERITY_ERROR),
        warnings=sum(1 for result in results if result.severity == SEVERITY_WARNING),
    )


__all__ = [
    "CASE_PATTERNS",
    "LintResult",
    "LintSummary",
    "NamingRule",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
    "lint_segments",
    "lint_summary",
    "lint_token_names",
    "matches_case",
    "rules_for_platform",
    "token_path_to_name",
]
