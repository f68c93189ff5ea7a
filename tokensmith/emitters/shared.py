"""Naming, header and annotation helpers shared by every emitter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..diff.tokens import extract_token_name

HEADER_TITLE = "Auto-generated from Figma Variables — DO NOT EDIT"

# Old platform family name -> Figma family name.
FIGMA_NAME_MAP: Dict[str, str] = {
    "Fuchsia": "Pink",
    "fuchsia": "pink",
    "Purple": "Violet",
    "purple": "violet",
}

PLATFORM_NAME_MAP: Dict[str, str] = {figma: old for old, figma in FIGMA_NAME_MAP.items()}

CATEGORY_ORDER: Tuple[str, ...] = ("fill", "text", "icon", "background", "stroke")

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_DIGITS_RE = re.compile(r"\d+")
_WHITESPACE_RE = re.compile(r"\s+")
_IDENTIFIER_RE = re.compile(r"[\w$-]+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_NEW_MESSAGE = "NEW: This token was added in Figma design tokens but does not exist in your reference file."


@dataclass(frozen=True)
class EmitContext:
    """Run-wide settings every emitter reads when rendering a file."""

    best_practices: bool = True
    reference_filenames: Tuple[str, ...] = ()
    now: Optional[datetime] = None

    @property
    def mode(self) -> str:
        return "best-practices" if self.best_practices else "match-existing"

    def header(self, prefix: str, suffix: str = "") -> List[str]:
        return [
            line + suffix
            for line in file_header_lines(prefix, self.best_practices, self.reference_filenames, self.now)
        ]

    def renames(self, reference: Optional[str]) -> Dict[str, str]:
        if self.best_practices:
            return {}
        return detect_renames_in_reference(reference)

    def new_detector(self, reference: Optional[str]) -> Callable[[str], bool]:
        if self.best_practices:
            return _never_new
        return make_new_detector(reference)

    def mark_new(self, content: str, reference: Optional[str], style: str = "//") -> str:
        """Flag declarations in rendered ``content`` that ``reference`` does not have."""
        if self.best_practices or not reference:
            return content
        return annotate_new_declarations(content, make_new_detector(reference), style)


def file_header_lines(
    prefix: str,
    best_practices: bool,
    reference_filenames: Sequence[str] | None = None,
    now: datetime | None = None,
) -> List[str]:
    mode = "best-practices" if best_practices else "match-existing"
    lines = [
        f"{prefix} {HEADER_TITLE}",
        f"{prefix} Generated: {iso_timestamp(now)}",
        f"{prefix} Mode: {mode}",
    ]
    if not best_practices and reference_filenames:
        lines.append(f"{prefix} Reference: {', '.join(reference_filenames)}")
    return lines


def iso_timestamp(now: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision, e.g. ``2025-01-01T00:00:00.000Z``."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def comment_lines(text: str, style: str) -> str:
    if style == "/*":
        return f"/* {text} */"
    return f"{style} {text}"


def rename_comment(old_name: str, figma_name: str, style: str = "//") -> List[str]:
    first = (
        f'RENAMED: "{old_name}" in your reference file has been updated to "{figma_name}" '
        "in Figma design tokens."
    )
    second = f'Please update your codebase to use "{figma_name}" to stay in sync with the design system.'
    return [comment_lines(first, style), comment_lines(second, style)]


def new_token_comment(style: str = "//") -> List[str]:
    return [comment_lines(_NEW_MESSAGE, style)]


def annotate_new_declarations(content: str, is_new: Callable[[str], bool], style: str = "//") -> str:
    """Insert a NEW comment above every declaration whose name ``is_new`` flags."""
    lines: List[str] = []
    for line in content.split("\n"):
        name = extract_token_name(line)
        if name is not None and is_new(name):
            indent = line[: len(line) - len(line.lstrip())]
            lines.extend(indent + comment for comment in new_token_comment(style))
        lines.append(line)
    return "\n".join(lines)


def detect_rename(figma_family: str) -> Optional[str]:
    return PLATFORM_NAME_MAP.get(figma_family)


def detect_renames_in_reference(reference: Optional[str]) -> Dict[str, str]:
    """Map lower-cased Figma family -> old platform name found in ``reference``."""
    renames: Dict[str, str] = {}
    if not reference:
        return renames
    lowered = reference.lower()
    for old_name, figma_name in FIGMA_NAME_MAP.items():
        if old_name.lower() in lowered:
            renames.setdefault(figma_name.lower(), old_name)
    return renames


def make_new_detector(reference: Optional[str]) -> Callable[[str], bool]:
    """Return a predicate telling whether a generated name is absent from ``reference``.

    Every identifier in the reference is lower-cased with separators and sigils
    stripped, so the check works across camelCase, snake_case, kebab-case and
    SCREAMING_SNAKE spellings. Names are compared whole: ``grey-50`` is new next
    to a reference that only declares ``grey-500``.
    """
    if not reference:
        return _never_new
    known = {_squash(identifier) for identifier in _IDENTIFIER_RE.findall(reference)}

    def _is_new(name: str) -> bool:
        return _squash(name) not in known

    return _is_new


def _never_new(_name: str) -> bool:
    return False


def _squash(text: str) -> str:
    return _NON_ALNUM_RE.sub("", text.lower())


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def split_segment(segment: str) -> List[str]:
    """``Grey_Alpha`` -> ``['grey', 'alpha']``; ``OtherOrange`` -> ``['other', 'orange']``."""
    text = _CAMEL_BOUNDARY_RE.sub(r"\1-\2", segment.replace("_", "-")).lower()
    return [part for part in text.split("-") if part]


def segments_to_kebab(segments: Iterable[str]) -> str:
    return "-".join("-".join(split_segment(segment)) for segment in segments)


def path_to_token_name(path: Sequence[str], sep: str = "-") -> str:
    """Semantic token name with ``standard`` segments elided."""
    return sep.join(
        _WHITESPACE_RE.sub(sep, segment.lower()) for segment in path if segment.lower() != "standard"
    )


def path_to_kebab(path: Sequence[str]) -> str:
    return segments_to_kebab(elide_standard(path))


def elide_standard(path: Sequence[str]) -> List[str]:
    """Drop ``Standard`` segments unless nothing else is left."""
    kept = [segment for segment in path if segment.lower() != "standard"]
    return kept or list(path)


def path_to_camel(path: Sequence[str]) -> str:
    return to_camel(path_to_kebab(path).split("-"))


def path_to_pascal(path: Sequence[str]) -> str:
    return capitalize(path_to_camel(path))


def to_camel(parts: Sequence[str]) -> str:
    return "".join(part if index == 0 else capitalize(part) for index, part in enumerate(parts) if part)


def to_pascal(parts: Sequence[str]) -> str:
    return "".join(capitalize(part) for part in parts if part)


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def extract_sort_key(name: str) -> int:
    """Weight every number in ``name`` so ``750_69`` sorts after ``750_8``."""
    numbers = [int(n) for n in _DIGITS_RE.findall(name)]
    return sum(n * 1000 ** max(0, len(numbers) - 1 - i) for i, n in enumerate(numbers))


def extract_numeric_key(text: str) -> int:
    match = _DIGITS_RE.search(text)
    return int(match.group(0)) if match else 0


def order_categories(categories: Iterable[str]) -> List[str]:
    """Well-known color categories first, the rest alphabetically."""
    unique = list(dict.fromkeys(categories))
    known = [category for category in CATEGORY_ORDER if category in unique]
    rest = sorted(category for category in unique if category not in CATEGORY_ORDER)
    return known + rest


def format_number(value: float) -> str:
    """Render ``4.0`` as ``4`` and keep genuine fractions."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SpacingEntry:
    key: str
    raw_value: float
    css_var: str
    px_value: str


def collect_spacing_entries(values_export: Optional[Mapping[str, Any]]) -> List[SpacingEntry]:
    """Read the ``Integer`` group of a values export as a spacing scale."""
    if not isinstance(values_export, Mapping):
        return []
    integers = values_export.get("Integer")
    if not isinstance(integers, Mapping):
        return []

    entries: List[SpacingEntry] = []
    for key, token in integers.items():
        if str(key).startswith("$") or not isinstance(token, Mapping):
            continue
        raw = token.get("$value")
        if token.get("$type") != "number" or isinstance(raw, bool) or not isinstance(raw, (int, float)):
            continue
        amount = format_number(abs(raw)).replace(".", "-")
        if str(key) == "999":
            css_var = "--spacing-max"
        elif raw < 0:
            css_var = f"--spacing-neg-{amount}"
        else:
            css_var = f"--spacing-{amount}"
        entries.append(SpacingEntry(str(key), raw, css_var, f"{format_number(raw)}px"))

    return sorted(entries, key=lambda entry: entry.raw_value)


__all__ = [
    "CATEGORY_ORDER",
    "EmitContext",
    "FIGMA_NAME_MAP",
    "HEADER_TITLE",
    "PLATFORM_NAME_MAP",
    "SpacingEntry",
    "annotate_new_declarations",
    "capitalize",
    "collect_spacing_entries",
    "detect_rename",
    "detect_renames_in_reference",
    "elide_standard",
    "extract_numeric_key",
    "extract_sort_key",
    "file_header_lines",
    "format_number",
    "iso_timestamp",
    "make_new_detector",
    "new_token_comment",
    "order_categories",
    "path_to_camel",
    "path_to_kebab",
    "path_to_pascal",
    "path_to_token_name",
    "rename_comment",
    "segments_to_kebab",
    "split_segment",
    "to_camel",
    "to_pascal",
]
