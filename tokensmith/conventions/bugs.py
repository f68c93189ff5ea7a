"""Known anti-patterns in reference source files.

Findings never change what gets generated; they are surfaced as a comment block
at the top of the generated file and as ``reference`` warnings.
"""

from __future__ import annotations

import re
from typing import List, Sequence

_SWIFT_HEX_WITHOUT_HASH_RE = re.compile(r"=\s*\"([0-9A-Fa-f]{6})\"")
_KOTLIN_STATIC_ENUM_RE = re.compile(r"ICONSTATIC\w+\s*->\s*(\w+)")
_KOTLIN_FOOTNOTE_COPY_RE = re.compile(r"footnote.*this\.subhead", re.IGNORECASE)
_KOTLIN_LOCAL_TYPOGRAPHY_RE = re.compile(r"RLocalTypography|LocalTypography", re.IGNORECASE)
_KOTLIN_SLPRICE_RE = re.compile(r"slprice", re.IGNORECASE)


def detect_swift_bugs(reference: str) -> List[str]:
    warnings: List[str] = []
    missing_hash = _SWIFT_HEX_WITHOUT_HASH_RE.findall(reference)
    if missing_hash:
        warnings.append(
            f'{len(missing_hash)} hex value(s) missing "#" prefix (e.g., greenElectric = "008001"). '
            'Generated output always includes "#".'
        )
    return warnings


def detect_kotlin_color_bugs(reference: str) -> List[str]:
    warnings: List[str] = []
    targets = _KOTLIN_STATIC_ENUM_RE.findall(reference)
    if len(targets) > 1 and len(set(targets)) == 1:
        warnings.append(
            f'Static icon/text enum cases all map to "{targets[0]}" - likely a copy-paste bug. '
            "Generated output uses correct Figma mappings."
        )
    return warnings


def detect_kotlin_typography_bugs(reference: str) -> List[str]:
    warnings: List[str] = []
    if _KOTLIN_FOOTNOTE_COPY_RE.search(reference):
        warnings.append(
            'footnote copy() defaults reference "this.subhead_*" instead of "this.footnote_*" - copy-paste bug.'
        )
    if _KOTLIN_LOCAL_TYPOGRAPHY_RE.search(reference) and not _KOTLIN_SLPRICE_RE.search(reference):
        warnings.append('RLocalTypography is missing "slprice" entries. Generated output includes all tokens.')
    return warnings


def bug_warning_block(warnings: Sequence[str], comment_style: str = "//") -> List[str]:
    """Render findings as a comment block followed by a blank line."""
    if not warnings:
        return []
    if comment_style == "/*":
        lines = ["/* REFERENCE FILE ISSUES DETECTED", " *"]
        lines.extend(f" *  - {warning}" for warning in warnings)
        lines.extend(
            [
                " *",
                " *  Generated output uses correct values from Figma design tokens.",
                " *  Please review and fix the issues in your reference file.",
                " */",
            ]
        )
    else:
        lines = [f"{comment_style} REFERENCE FILE ISSUES DETECTED", comment_style]
        lines.extend(f"{comment_style}  - {warning}" for warning in warnings)
        lines.extend(
            [
                comment_style,
                f"{comment_style}  Generated output uses correct values from Figma design tokens.",
                f"{comment_style}  Please review and fix the issues in your reference file.",
            ]
        )
    lines.append("")
    return lines


__all__ = [
    "bug_warning_block",
    "detect_kotlin_color_bugs",
    "detect_kotlin_typography_bugs",
    "detect_swift_bugs",
]
