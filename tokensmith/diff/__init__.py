"""Diffing regenerated files against reference files."""

from __future__ import annotations

from .changelog import generate_changelog
from .lines import (
    DiffLine,
    DiffSummary,
    Separator,
    Span,
    compute_blame_map,
    compute_line_diff,
    diff_change_indices,
    diff_stats,
    enrich_word_diffs,
    filter_diff_lines,
    unified_diff,
)
from .removed import append_removed_token_comments
from .tokens import (
    detect_family_renames,
    detect_renames,
    diff,
    extract_token_name_value,
    extract_token_names,
    extract_token_values,
    similarity,
)

__all__ = [
    "DiffLine",
    "DiffSummary",
    "Separator",
    "Span",
    "append_removed_token_comments",
    "compute_blame_map",
    "compute_line_diff",
    "detect_family_renames",
    "detect_renames",
    "diff",
    "diff_change_indices",
    "diff_stats",
    "enrich_word_diffs",
    "extract_token_name_value",
    "extract_token_names",
    "extract_token_values",
    "filter_diff_lines",
    "generate_changelog",
    "similarity",
    "unified_diff",
]
