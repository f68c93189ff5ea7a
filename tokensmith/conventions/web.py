"""SCSS, CSS and TypeScript convention detection."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .base import ConventionDetector

_SCSS_HYPHEN_RE = re.compile(r"\$\w+-\w+")
_SCSS_UNDERSCORE_RE = re.compile(r"\$\w+_\w+")
_TS_EXPORT_RE = re.compile(r"export\s+const\s+\w+")
_TS_SCREAMING_RE = re.compile(r"export\s+const\s+[A-Z][A-Z0-9_]+\s*[:=]")
_TS_CAMEL_RE = re.compile(r"export\s+const\s+[a-z][a-zA-Z0-9]+\s*[:=]")
_TS_PASCAL_RE = re.compile(r"export\s+const\s+[A-Z][a-zA-Z0-9]+[a-z][a-zA-Z0-9]*\s*[:=]")
_TS_SNAKE_RE = re.compile(r"export\s+const\s+[a-z][a-z0-9]*_[a-z0-9_]+\s*[:=]")
_TS_ANNOTATION_RE = re.compile(r"export\s+const\s+\w+\s*:\s*string\s*=")
_TS_HEX_RE = re.compile(r"['\"`]#([0-9A-Fa-f]{6,8})['\"`]")
_IMPORT_SUFFIX_RE = re.compile(r"@(?:use|import)\s+['\"]\.?/?Primitives([^'\"]*)['\"]")
_INLINE_COLOR_RE = re.compile(r"\$[\w-]+\s*:\s*var\(--[\w-]+\s*,\s*(?:light-dark\(|\$)")


@dataclass(frozen=True)
class WebConventions:
    """Stylistic axes for SCSS/CSS/TypeScript output."""

    scss_separator: str = "hyphen"
    ts_naming_case: str = "screaming_snake"
    import_style: str = "use"
    has_type_annotations: bool = True
    scss_color_structure: str = "modern"
    ts_hex_casing: str = "lower"
    ts_uses_as_const: bool = False
    import_suffix: str = ""

    @property
    def separator(self) -> str:
        return "_" if self.scss_separator == "underscore" else "-"


BEST_PRACTICE_WEB_CONVENTIONS = WebConventions()


class WebConventionDetector(ConventionDetector):
    """Inspects SCSS and TypeScript reference text.

    Reference files for both languages may be concatenated: every check targets
    syntax that only one of the two languages produces.
    """

    name = "web"

    def defaults(self) -> WebConventions:
        return BEST_PRACTICE_WEB_CONVENTIONS

    def inspect(self, reference: str) -> WebConventions:
        defaults = BEST_PRACTICE_WEB_CONVENTIONS
        has_ts = bool(_TS_EXPORT_RE.search(reference))
        return WebConventions(
            scss_separator=_detect_separator(reference, defaults.scss_separator),
            ts_naming_case=_detect_ts_naming_case(reference, defaults.ts_naming_case),
            import_style=_detect_import_style(reference, defaults.import_style),
            has_type_annotations=(
                bool(_TS_ANNOTATION_RE.search(reference)) if has_ts else defaults.has_type_annotations
            ),
            scss_color_structure=_detect_color_structure(reference, defaults.scss_color_structure),
            ts_hex_casing=_detect_hex_casing(reference, defaults.ts_hex_casing),
            ts_uses_as_const="as const" in reference if has_ts else defaults.ts_uses_as_const,
            import_suffix=_detect_import_suffix(reference, defaults.import_suffix),
        )


def scss_var_to_ts_name(scss_var: str, naming_case: str) -> str:
    """Convert ``$grey-750`` style names to a TypeScript identifier.

    >>> scss_var_to_ts_name("$grey-alpha-750-8", "screaming_snake")
    'GREY_ALPHA_750_8'
    """
    bare = scss_var[1:] if scss_var.startswith("$") else scss_var
    parts = [part for part in re.split(r"[-_]", bare) if part]
    if naming_case == "screaming_snake":
        return "_".join(part.upper() for part in parts)
    if naming_case == "snake":
        return "_".join(parts)
    if naming_case == "camel":
        return "".join(part if i == 0 else part[:1].upper() + part[1:] for i, part in enumerate(parts))
    if naming_case == "pascal":
        return "".join(part[:1].upper() + part[1:] for part in parts)
    return "-".join(parts)


def css_var_to_ts_name(css_var: str, naming_case: str) -> str:
    return scss_var_to_ts_name("$" + css_var.removeprefix("--"), naming_case)


def _detect_separator(text: str, default: str) -> str:
    hyphens = len(_SCSS_HYPHEN_RE.findall(text))
    underscores = len(_SCSS_UNDERSCORE_RE.findall(text))
    if not hyphens and not underscores:
        return default
    return "underscore" if underscores > hyphens else "hyphen"


def _detect_ts_naming_case(text: str, default: str) -> str:
    screaming = len(_TS_SCREAMING_RE.findall(text))
    camel = len(_TS_CAMEL_RE.findall(text))
    pascal = len(_TS_PASCAL_RE.findall(text))
    snake = len(_TS_SNAKE_RE.findall(text))
    if not any((screaming, camel, pascal, snake)):
        return default
    if screaming >= camel and screaming >= pascal and screaming >= snake:
        return "screaming_snake"
    if snake > camel and snake >= pascal:
        return "snake"
    if pascal > camel:
        return "pascal"
    return "camel"


def _detect_import_style(text: str, default: str) -> str:
    if "@use " in text:
        return "use"
    if "@import " in text:
        return "import"
    return default


def _detect_color_structure(text: str, default: str) -> str:
    if "prefers-color-scheme" in text:
        return "media-query"
    if ":root" not in text and _INLINE_COLOR_RE.search(text):
        return "inline"
    if "light-dark(" in text or "@property" in text:
        return "modern"
    return default


def _detect_hex_casing(text: str, default: str) -> str:
    upper = lower = 0
    for match in _TS_HEX_RE.finditer(text):
        digits = match.group(1)
        if any(ch.isalpha() for ch in digits):
            if digits == digits.upper():
                upper += 1
            elif digits == digits.lower():
                lower += 1
    if not upper and not lower:
        return default
    return "upper" if upper > lower else "lower"


def _detect_import_suffix(text: str, default: str) -> str:
    match = _IMPORT_SUFFIX_RE.search(text)
    if match is None:
        return default
    return match.group(1)


__all__ = [
    "BEST_PRACTICE_WEB_CONVENTIONS",
    "WebConventionDetector",
    "WebConventions",
    "css_var_to_ts_name",
    "scss_var_to_ts_name",
]
