"""Dependency impact and token-quality analyses."""

from __future__ import annotations

from .completeness import CompletenessWarning, check_reference_completeness
from .coverage import PlatformMismatch, TokenCoverage, compute_token_coverage, validate_cross_platform
from .duplicates import DuplicateGroup, find_duplicate_values
from .impact import (
    DependencyEntry,
    build_dependency_map,
    compute_impact,
    dependency_edges,
    impact_from_diffs,
)
from .lint import LintResult, lint_summary, lint_token_names, rules_for_platform
from .unused import UnusedTokenResult, detect_unused_tokens, unused_summary

__all__ = [
    "CompletenessWarning",
    "DependencyEntry",
    "DuplicateGroup",
    "LintResult",
    "PlatformMismatch",
    "TokenCoverage",
    "UnusedTokenResult",
    "build_dependency_map",
    "check_reference_completeness",
    "compute_impact",
    "compute_token_coverage",
    "dependency_edges",
    "detect_unused_tokens",
    "find_duplicate_values",
    "impact_from_diffs",
    "lint_summary",
    "lint_token_names",
    "rules_for_platform",
    "unused_summary",
    "validate_cross_platform",
]
