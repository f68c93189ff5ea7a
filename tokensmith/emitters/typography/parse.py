"""Parsing of the typography export into platform-tagged entries."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..shared import capitalize

PLATFORM_ANDROID = "android"
PLATFORM_IOS = "ios"
PLATFORM_SHARED = "shared"

WEIGHT_NAME_MAP: Dict[str, int] = {
    "thin": 100,
    "hairline": 100,
    "extralight": 200,
    "extra-light": 200,
    "ultralight": 200,
    "light": 300,
    "regular": 400,
    "normal": 400,
    "book": 400,
    "medium": 500,
    "semibold": 600,
    "semi-bold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "extra-bold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

SKIP_VARIANT_RE = re.compile(r"\((underline|strikethrough|headline)\)", re.IGNORECASE)

_MODIFIER_RE = re.compile(r"\s*\(([^)]+)\)")
_SEPARATORS_RE = re.compile(r"[\s_]+")
_DASHES_RE = re.compile(r"-+")


@dataclass(frozen=True)
class TypographyValue:
    font_family: str
    font_size: float
    font_weight: float
    line_height: float
    letter_spacing: float


@dataclass(frozen=True)
class TypographyEntry:
    full_key: str
    short_key: str
    category: str
    target_platform: str
    value: TypographyValue
    figma_name: str

    def for_web(self) -> "TypographyEntry":
        """Android entries are shared with the web under their unprefixed key."""
        if self.target_platform == PLATFORM_ANDROID:
            return replace(self, full_key=self.short_key)
        return self


@dataclass(frozen=True)
class ParsedTypography:
    entries: Tuple[TypographyEntry, ...]
    weight_fallbacks: Tuple[str, ...]

    def for_platform(self, platform: str) -> List[TypographyEntry]:
        if platform == "web":
            return [entry.for_web() for entry in self.entries if entry.target_platform != PLATFORM_IOS]
        if platform == "ios":
            return [entry for entry in self.entries if entry.target_platform == PLATFORM_IOS]
        if platform == "android":
            return [entry for entry in self.entries if entry.target_platform == PLATFORM_ANDROID]
        return []


def normalize_font_weight(raw: Any) -> Tuple[float, bool]:
    """Return ``(weight, used_fallback)``; names like ``SemiBold`` map to 600, unknowns to 400."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw > 0:
        return raw, False
    if isinstance(raw, str):
        try:
            parsed = float(raw)
        except ValueError:
            parsed = 0
        if parsed > 0:
            return (int(parsed) if parsed.is_integer() else parsed), False
        lookup = WEIGHT_NAME_MAP.get(raw.strip().lower())
        if lookup:
            return lookup, False
    return 400, True


def typography_group(document: Any) -> Optional[Mapping[str, Any]]:
    """Locate the flat ``name -> token`` mapping inside a typography export."""
    if not isinstance(document, Mapping):
        return None
    raw = document.get("typography")
    if isinstance(raw, Mapping):
        return raw
    if any(_is_typography(value) for value in document.values()):
        return document
    return None


def count_typography_styles(document: Any) -> int:
    group = typography_group(document)
    if group is None:
        return 0
    return sum(1 for value in group.values() if _is_typography(value))


def parse_typography(document: Any, skip_variants: bool = True) -> ParsedTypography:
    group = typography_group(document)
    if group is None:
        return ParsedTypography((), ())

    entries: List[TypographyEntry] = []
    fallbacks: List[str] = []
    for name, token in group.items():
        if not _is_typography(token):
            continue
        name = str(name)
        value = token.get("$value") if isinstance(token.get("$value"), Mapping) else {}
        parts = name.split("/")
        prefix = parts[0].lower()
        platform = {"ios": PLATFORM_IOS, "droid": PLATFORM_ANDROID}.get(prefix, PLATFORM_SHARED)

        full_key = style_name_to_key(name)
        short_key = full_key
        if platform != PLATFORM_SHARED and full_key.startswith(prefix + "-"):
            short_key = full_key[len(prefix) + 1 :]

        weight, used_fallback = normalize_font_weight(value.get("fontWeight"))
        if used_fallback:
            fallbacks.append(name)

        entries.append(
            TypographyEntry(
                full_key=full_key,
                short_key=short_key,
                category=_category(parts),
                target_platform=platform,
                value=TypographyValue(
                    font_family=str(value.get("fontFamily") or ""),
                    font_size=_number(value.get("fontSize")),
                    font_weight=weight,
                    line_height=_number(value.get("lineHeight")),
                    letter_spacing=round(_number(value.get("letterSpacing")), 3),
                ),
                figma_name=name,
            )
        )

    if skip_variants:
        entries = [entry for entry in entries if not SKIP_VARIANT_RE.search(entry.figma_name)]
    return ParsedTypography(tuple(entries), tuple(fallbacks))


def style_name_to_key(name: str) -> str:
    """``droid/body/body-R`` -> ``droid-body-r``; ``ios/Title/Title 2 (Bold)`` -> ``ios-title-2-bold``.

    A segment repeating its parent's name contributes only the new suffix, and
    parenthesised modifiers become trailing key parts.
    """
    parts = name.split("/")
    result: List[str] = []
    for index, part in enumerate(parts):
        modifiers = [_normalize(match) for match in _MODIFIER_RE.findall(part)]
        normalized = _normalize(_MODIFIER_RE.sub("", part))
        if not normalized:
            result.extend(modifiers)
            continue
        if index > 0 and result:
            previous = _normalize(_MODIFIER_RE.sub("", parts[index - 1]))
            if normalized.startswith(previous) and normalized != previous:
                suffix = normalized[len(previous) :].lstrip("-")
                if suffix:
                    result.append(suffix)
                result.extend(modifiers)
                continue
        result.append(normalized)
        result.extend(modifiers)
    return "-".join(part for part in result if part)


def group_entries(entries: List[TypographyEntry]) -> Dict[str, List[TypographyEntry]]:
    """Group entries under labels such as ``Android (droid) — Body`` in first-seen order."""
    labels = {PLATFORM_ANDROID: "Android (droid)", PLATFORM_IOS: "iOS", PLATFORM_SHARED: "Shared"}
    grouped: Dict[str, List[TypographyEntry]] = {}
    for entry in entries:
        label = f"{labels[entry.target_platform]} — {capitalize(entry.category.replace('-', ' '))}"
        grouped.setdefault(label, []).append(entry)
    return grouped


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------


def trim_float(value: float, digits: int = 4) -> str:
    """Fixed precision without trailing zeros: ``0.0625`` stays, ``1.5000`` -> ``1.5``."""
    text = f"{value:.{digits}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def px_to_rem(px: float) -> str:
    return f"{trim_float(px / 16)}rem"


def unitless_line_height(line_height: float, font_size: float) -> str:
    if not font_size:
        return "1"
    return trim_float(line_height / font_size)


def px_to_em(letter_spacing: float, font_size: float) -> str:
    if not font_size or not letter_spacing:
        return "0"
    return f"{trim_float(letter_spacing / font_size)}em"


def kebab_to_camel(text: str) -> str:
    return re.sub(r"-([a-z0-9])", lambda match: match.group(1).upper(), text)


def kebab_to_snake(text: str) -> str:
    return re.sub(r"_(\d)", r"\1", text.replace("-", "_"))


def resolve_name(short_key: str, name_map: Mapping[str, str], naming_style: str = "camel") -> str:
    """Prefer a name recovered from the reference, else derive one from ``short_key``."""
    camel = kebab_to_camel(short_key)
    mapped = name_map.get(camel.lower())
    if mapped:
        return mapped
    if naming_style == "snake":
        return kebab_to_snake(short_key)
    return camel


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _is_typography(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("$type") == "typography"


def _normalize(text: str) -> str:
    text = _SEPARATORS_RE.sub("-", text.strip().lower())
    return _DASHES_RE.sub("-", text).strip("-")


def _category(parts: List[str]) -> str:
    part = parts[1] if len(parts) > 1 else parts[0]
    return _DASHES_RE.sub("-", re.sub(r"\s+", "-", part.lower()))


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


__all__ = [
    "PLATFORM_ANDROID",
    "PLATFORM_IOS",
    "PLATFORM_SHARED",
    "ParsedTypography",
    "SKIP_VARIANT_RE",
    "TypographyEntry",
    "TypographyValue",
    "WEIGHT_NAME_MAP",
    "count_typography_styles",
    "group_entries",
    "kebab_to_camel",
    "kebab_to_snake",
    "normalize_font_weight",
    "parse_typography",
    "px_to_em",
    "px_to_rem",
    "resolve_name",
    "style_name_to_key",
    "trim_float",
    "typography_group",
    "unitless_line_height",
]
