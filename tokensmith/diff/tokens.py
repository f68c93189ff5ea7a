"""Token-level classification of a regenerated file against its reference."""

from __future__ import annotations

import re
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..models import DiffRecord, FamilyRename, ModifiedToken, RenamedToken
from .lines import ADD, REMOVE, DiffLine, compute_line_diff, split_lines

# (pattern, format) tried in order; the first match wins for a line. Typed
# declarations (``: string``, ``: Double``, ``: Dp``) are accepted before ``=``.
TOKEN_VALUE_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"\$([\w-]+)\s*:\s*(.+?)\s*;"), "scss"),
    (re.compile(r"--([\w-]+)\s*:\s*(.+?)\s*;"), "css"),
    (re.compile(r"export\s+const\s+(\w+)\s*(?::\s*[^=]+?\s*)?=\s*['\"]?(.+?)['\"]?\s*;?\s*$"), "typescript"),
    (re.compile(r"static\s+let\s+(\w+)\s*(?::\s*[^=]+?\s*)?=\s*(.+)"), "swift"),
    (re.compile(r"\bval\s+(\w+)\s*(?::\s*[^=]+?\s*)?=\s*(.+)"), "kotlin"),
)

TOKEN_NAME_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"\$([a-zA-Z][\w-]*)\s*:"),
    re.compile(r"--([a-zA-Z][\w-]*)\s*:"),
    re.compile(r"export\s+const\s+(\w+)"),
    re.compile(r"static\s+let\s+(\w+)"),
    re.compile(r"\bval\s+(\w+)"),
)

RENAME_SIMILARITY_THRESHOLD = 0.5
FAMILY_RENAME_MIN_MEMBERS = 3

_COMMENT_PREFIXES = ("//", "/*", "*", "#")


def extract_token_name_value(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(name, value)`` for a declaration line, or ``None``."""
    stripped = line.strip()
    if not stripped or stripped.startswith(_COMMENT_PREFIXES):
        return None
    for pattern, _fmt in TOKEN_VALUE_PATTERNS:
        match = pattern.search(stripped)
        if match:
            return match.group(1), match.group(2).strip()
    return None


def extract_token_values(text: str) -> Dict[str, str]:
    values: Dict[str, str] = OrderedDict()
    for line in split_lines(text):
        pair = extract_token_name_value(line)
        if pair is not None:
            values.setdefault(pair[0], pair[1])
    return values


def extract_token_name(line: str) -> Optional[str]:
    """Return the declared name on ``line`` whatever its value looks like, or ``None``."""
    stripped = line.strip()
    if not stripped or stripped.startswith(_COMMENT_PREFIXES):
        return None
    for pattern in TOKEN_NAME_PATTERNS:
        match = pattern.search(stripped)
        if match:
            return match.group(1)
    return None


def extract_token_names(text: str) -> Set[str]:
    names: Set[str] = set()
    for line in split_lines(text):
        name = extract_token_name(line)
        if name is not None:
            names.add(name)
    return names


def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in ``[0, 1]``."""
    longest = max(len(a), len(b))
    if not longest:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def common_prefix_length(a: str, b: str) -> int:
    length = 0
    for char_a, char_b in zip(a, b):
        if char_a != char_b:
            break
        length += 1
    return length


def detect_renames(
    removed: Dict[str, str],
    added: Dict[str, str],
    threshold: float = RENAME_SIMILARITY_THRESHOLD,
) -> List[RenamedToken]:
    """Pair removed and added names that carry the same value and similar names.

    ``removed`` and ``added`` map names to raw values. Names present on both
    sides are modifications, never renames. Empty and ``0`` values are too
    common to identify a token and are skipped.
    """
    by_value: Dict[str, List[str]] = {}
    for name, value in added.items():
        normalized = _rename_value(value)
        if normalized is None or name in removed:
            continue
        by_value.setdefault(normalized, []).append(name)

    renames: List[RenamedToken] = []
    claimed: Set[str] = set()
    for old_name, value in removed.items():
        normalized = _rename_value(value)
        if normalized is None or old_name in added:
            continue
        candidates = [
            name
            for name in by_value.get(normalized, ())
            if name not in claimed and similarity(old_name, name) >= threshold
        ]
        if not candidates:
            continue
        best = max(candidates, key=lambda name: (common_prefix_length(old_name, name), similarity(old_name, name)))
        claimed.add(best)
        renames.append(RenamedToken(old_name=old_name, new_name=best, value=normalized))
    return renames


def detect_family_renames(
    renames: Sequence[RenamedToken], min_members: int = FAMILY_RENAME_MIN_MEMBERS
) -> List[FamilyRename]:
    """Group renames that share one prefix substitution, e.g. ``grey-*`` to ``gray-*``."""
    groups: Dict[Tuple[str, str], List[RenamedToken]] = OrderedDict()
    for rename in renames:
        suffix = _boundary_suffix_length(rename.old_name, rename.new_name)
        old_prefix = rename.old_name[: len(rename.old_name) - suffix]
        new_prefix = rename.new_name[: len(rename.new_name) - suffix]
        if not old_prefix or not new_prefix:
            continue
        groups.setdefault((old_prefix, new_prefix), []).append(rename)
    return [
        FamilyRename(old_family=old, new_family=new, members=tuple(members))
        for (old, new), members in groups.items()
        if len(members) >= min_members
    ]


def classify_lines(lines: Iterable[DiffLine]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Split the declarations on removed and added lines into ``(removed, added)`` name maps."""
    removed: Dict[str, str] = OrderedDict()
    added: Dict[str, str] = OrderedDict()
    for line in lines:
        if line.type not in (ADD, REMOVE):
            continue
        pair = extract_token_name_value(line.text)
        if pair is None:
            continue
        target = added if line.type == ADD else removed
        target.setdefault(pair[0], pair[1])
    return removed, added


def classify_line_names(lines: Iterable[DiffLine]) -> Tuple[List[str], List[str]]:
    """Declared names on removed and added lines, in line order, as ``(removed, added)``."""
    removed: Dict[str, None] = OrderedDict()
    added: Dict[str, None] = OrderedDict()
    for line in lines:
        if line.type not in (ADD, REMOVE):
            continue
        name = extract_token_name(line.text)
        if name is None:
            continue
        (added if line.type == ADD else removed).setdefault(name, None)
    return list(removed), list(added)


def diff(reference_text: str, generated_text: str, filename: str) -> DiffRecord:
    """Classify every declaration of ``filename`` as added, removed, modified or renamed.

    A renamed token stays in both ``removed_tokens`` (old name) and
    ``added_tokens`` (new name); ``renamed_tokens`` pairs them up.
    """
    lines = compute_line_diff(reference_text, generated_text)
    removed_lines, added_lines = classify_lines(lines)
    removed_names, added_names = classify_line_names(lines)

    reference_names = extract_token_names(reference_text)
    generated_names = extract_token_names(generated_text)

    modified = [
        ModifiedToken(name=name, old_value=old_value, new_value=added_lines[name])
        for name, old_value in removed_lines.items()
        if name in added_lines and added_lines[name] != old_value
    ]
    gone = [name for name in removed_names if name not in generated_names]
    fresh = [name for name in added_names if name not in reference_names]

    renames = detect_renames(
        OrderedDict((name, removed_lines[name]) for name in gone if name in removed_lines),
        OrderedDict((name, added_lines[name]) for name in fresh if name in added_lines),
    )

    return DiffRecord(
        filename=filename,
        added_lines=sum(1 for line in lines if line.type == ADD),
        removed_lines=sum(1 for line in lines if line.type == REMOVE),
        added_tokens=tuple(fresh),
        removed_tokens=tuple(gone),
        modified_tokens=tuple(modified),
        renamed_tokens=tuple(renames),
        family_renames=tuple(detect_family_renames(renames)),
    )


def _rename_value(value: str) -> Optional[str]:
    if not value or value == "0":
        return None
    return value.lower()


def _common_suffix_length(a: str, b: str) -> int:
    length = 0
    for char_a, char_b in zip(reversed(a), reversed(b)):
        if char_a != char_b:
            break
        length += 1
    return length


def _boundary_suffix_length(a: str, b: str) -> int:
    """Shared suffix trimmed to start at a separator, so ``grey-50`` and ``gray-50`` share ``-50``."""
    length = _common_suffix_length(a, b)
    shared = a[len(a) - length :] if length else ""
    for index, char in enumerate(shared):
        if char in "-_":
            return length - index
    return length


__all__ = [
    "FAMILY_RENAME_MIN_MEMBERS",
    "RENAME_SIMILARITY_THRESHOLD",
    "TOKEN_NAME_PATTERNS",
    "TOKEN_VALUE_PATTERNS",
    "classify_line_names",
    "classify_lines",
    "common_prefix_length",
    "detect_family_renames",
    "detect_renames",
    "diff",
    "extract_token_name",
    "extract_token_name_value",
    "extract_token_names",
    "extract_token_values",
    "levenshtein",
    "similarity",
]
