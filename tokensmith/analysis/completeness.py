"""Advisories for reference file sets that cover only part of a color or typography system."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Mapping, Optional

KOTLIN_COLORS = "kotlin_colors"
KOTLIN_TYPOGRAPHY = "kotlin_typography"
WEB_COLORS = "web_colors"

_KOTLIN_PRIMITIVE_RES = (
    re.compile(r"\bobject\s+\w+Palette\b"),
    re.compile(r"^val\s+\w+\s*=\s*Color\(", re.MULTILINE),
    re.compile(r"\bobject\s+(?:Primitives|.*Primitives)\s*\{"),
)
_KOTLIN_SEMANTIC_RES = (
    re.compile(r"\bclass\s+R\w+Colors\b"),
    re.compile(r"\bobject\s+(?:Light|Dark)ColorTokens\b"),
)
_WEB_PRIMITIVE_RES = (
    re.compile(r"\$[\w-]+-\d+\s*:"),
    re.compile(r"--[\w-]+-\d+\s*:"),
    re.compile(r"export\s+const\s+[A-Z_]+_\d+\s*="),
    re.compile(r"primitive", re.IGNORECASE),
)
_WEB_SEMANTIC_RES = (
    re.compile(r"\$text-primary|\$fill-primary", re.IGNORECASE),
    re.compile(r"--text-primary|--fill-primary", re.IGNORECASE),
    re.compile(r"TEXT_PRIMARY|FILL_PRIMARY"),
)


@dataclass(frozen=True)
class CompletenessWarning:
    key: str
    message: str


def check_reference_completeness(references: Mapping[str, Optional[str]]) -> List[CompletenessWarning]:
    """Inspect reference contents keyed by ``kotlin_colors``, ``kotlin_typography`` and ``web_colors``."""
    warnings: List[CompletenessWarning] = []

    kotlin = references.get(KOTLIN_COLORS)
    if kotlin:
        has_primitives = _any(_KOTLIN_PRIMITIVE_RES, kotlin)
        has_semantics = _any(_KOTLIN_SEMANTIC_RES, kotlin)
        if has_primitives and not has_semantics:
            warnings.append(
                CompletenessWarning(
                    KOTLIN_COLORS,
                    "You uploaded a primitives file (e.g. Color.kt) but no semantic color files "
                    "(e.g. RFillColors.kt, RTextColors.kt). Only primitives will be generated. Upload all your "
                    "color files for complete match-existing output, or remove the reference to use "
                    "best-practices mode.",
                )
            )
        elif has_semantics and not has_primitives:
            warnings.append(
                CompletenessWarning(
                    KOTLIN_COLORS,
                    "You uploaded semantic color files but no primitives file (e.g. Color.kt). Only semantic "
                    "files will be generated. Upload the primitives file for complete output.",
                )
            )

    typography = references.get(KOTLIN_TYPOGRAPHY)
    if typography:
        has_definition = (
            re.search(r"\bclass\s+\w+", typography) is not None
            and (re.search(r"@Immutable\b", typography) or re.search(r"internal\s+constructor", typography))
        ) or (
            re.search(r"\bobject\s+\w+", typography) is not None and re.search(r"\bTextStyle\s*\(", typography)
        )
        has_accessor = re.search(r"\benum\s+class\s+\w+", typography) and "MaterialTheme" in typography
        if has_accessor and not has_definition:
            warnings.append(
                CompletenessWarning(
                    KOTLIN_TYPOGRAPHY,
                    "You uploaded an accessor file (e.g. RLocalTypography.kt) but no definition file "
                    "(e.g. RTypography.kt). Upload the definition file for complete match-existing output, "
                    "or remove the reference to use best-practices mode.",
                )
            )

    web = references.get(WEB_COLORS)
    if web:
        has_primitives = _any(_WEB_PRIMITIVE_RES, web)
        has_semantics = _any(_WEB_SEMANTIC_RES, web)
        if has_primitives and not has_semantics:
            warnings.append(
                CompletenessWarning(
                    WEB_COLORS,
                    "You uploaded primitives (e.g. Primitives.scss) but no semantic color file "
                    "(e.g. Colors.scss). Only primitives will be generated.",
                )
            )
        elif has_semantics and not has_primitives:
            warnings.append(
                CompletenessWarning(
                    WEB_COLORS,
                    "You uploaded a semantic color file but no primitives file. Upload both for complete output.",
                )
            )
    return warnings


def _any(patterns, text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


__all__ = [
    "CompletenessWarning",
    "KOTLIN_COLORS",
    "KOTLIN_TYPOGRAPHY",
    "WEB_COLORS",
    "check_reference_completeness",
]
