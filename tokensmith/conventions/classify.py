"""Sorting uploaded reference files into the slots the emitters read from."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

PRIMITIVES_SCSS = "primitives_scss"
COLORS_SCSS = "colors_scss"
PRIMITIVES_CSS = "primitives_css"
COLORS_CSS = "colors_css"
PRIMITIVES_TS = "primitives_ts"
COLORS_TS = "colors_ts"
SPACING_SCSS = "spacing_scss"
SPACING_TS = "spacing_ts"
SPACING_CSS = "spacing_css"
SWIFT_COLORS = "swift_colors"
KOTLIN_COLORS = "kotlin_colors"
TYPOGRAPHY_SCSS = "typography_scss"
TYPOGRAPHY_TS = "typography_ts"
TYPOGRAPHY_SWIFT = "typography_swift"
TYPOGRAPHY_KOTLIN = "typography_kotlin"
TYPOGRAPHY_KOTLIN_ACCESSOR = "typography_kotlin_accessor"

# Generated filenames each slot is compared against.
SLOT_ARTIFACTS: Dict[str, Tuple[str, ...]] = {
    PRIMITIVES_SCSS: ("Primitives.scss",),
    COLORS_SCSS: ("Colors.scss",),
    PRIMITIVES_CSS: ("primitives.css",),
    COLORS_CSS: ("colors.css",),
    PRIMITIVES_TS: ("Primitives.ts",),
    COLORS_TS: ("Colors.ts",),
    SPACING_SCSS: ("Spacing.scss",),
    SPACING_TS: ("Spacing.ts",),
    SPACING_CSS: ("spacing.css",),
    SWIFT_COLORS: ("Colors.swift",),
    KOTLIN_COLORS: ("Color.kt", "Colors.kt"),
    TYPOGRAPHY_SCSS: ("Typography.scss",),
    TYPOGRAPHY_TS: ("Typography.ts",),
    TYPOGRAPHY_SWIFT: ("Typography.swift",),
    TYPOGRAPHY_KOTLIN: ("Typography.kt",),
    TYPOGRAPHY_KOTLIN_ACCESSOR: ("LocalTypography.kt",),
}

_WEB_PRIMITIVE_RE = re.compile(r"\$[\w-]+-\d+:|--[\w-]+-\d+:|_[A-Z]+_\d+\s*=")
_TS_PRIMITIVE_RE = re.compile(r"export\s+const\s+[A-Z]+_\d+")
_WEB_TYPOGRAPHY_RE = re.compile(r"font-size|fontSize|@mixin\s+[\w-]*(?:typo|font|text)", re.IGNORECASE)
_SPACING_RE = re.compile(r"spacing", re.IGNORECASE)
_SWIFT_TYPOGRAPHY_RE = re.compile(r"\bUIFont\b|\bFont\.(?:system|custom)\b|\bfontData\b|\bTypography")
_KOTLIN_TYPOGRAPHY_RE = re.compile(r"\bTextStyle\b|\bFontWeight\b")
_KOTLIN_ENUM_RE = re.compile(r"\benum\s+class\s+(\w+)")
_KOTLIN_ACCESSOR_CONTAINER_RE = re.compile(r"MaterialTheme\.(\w+)\.")
_KOTLIN_PALETTE_RE = re.compile(r"\bobject\s+\w+Palette\b")
_KOTLIN_TOP_LEVEL_COLOR_RE = re.compile(r"^val\s+\w+\s*=\s*Color\(", re.MULTILINE)
_KOTLIN_PRIMITIVES_OBJECT_RE = re.compile(r"\bobject\s+\w*Primitives\s*\{")
_KOTLIN_THEME_OBJECTS_RE = re.compile(r"\bobject\s+\w*(?:Light|Dark)(?:ColorTokens)?\s*\{")


@dataclass(frozen=True)
class ReferenceFile:
    filename: str
    content: str


@dataclass
class ReferenceSet:
    """Reference files grouped by slot, preserving upload order."""

    slots: Dict[str, List[ReferenceFile]] = field(default_factory=dict)
    unclassified: List[ReferenceFile] = field(default_factory=list)

    def add(self, slot: Optional[str], reference: ReferenceFile) -> None:
        if slot is None:
            self.unclassified.append(reference)
            return
        self.slots.setdefault(slot, []).append(reference)

    def text(self, *slots: str) -> Optional[str]:
        """Concatenated content of every file in ``slots``, or None when empty."""
        contents = [ref.content for slot in slots for ref in self.slots.get(slot, [])]
        return "\n".join(contents) if contents else None

    def filenames(self, *slots: str) -> List[str]:
        return [ref.filename for slot in slots for ref in self.slots.get(slot, [])]

    def files(self, *slots: str) -> List[ReferenceFile]:
        return [ref for slot in slots for ref in self.slots.get(slot, [])]

    def all_filenames(self) -> List[str]:
        names = [ref.filename for refs in self.slots.values() for ref in refs]
        names.extend(ref.filename for ref in self.unclassified)
        return names

    def for_artifact(self, filename: str) -> Optional[str]:
        """Reference text an artifact is diffed against.

        An uploaded file with the same basename wins; otherwise the slot whose
        generated filenames include ``filename`` is used. Multi-file Kotlin
        category classes (``RFillColors.kt``) fall back to the Kotlin colors slot.
        """
        for refs in self.slots.values():
            for ref in refs:
                if PurePath(ref.filename).name == filename:
                    return ref.content
        for slot, artifacts in SLOT_ARTIFACTS.items():
            if filename in artifacts and slot in self.slots:
                return self.text(slot)
        if filename.endswith("Colors.kt"):
            return self.text(KOTLIN_COLORS)
        return None

    def __bool__(self) -> bool:
        return bool(self.slots)


@dataclass(frozen=True)
class KotlinReferenceScope:
    """Which halves of the Kotlin color output the references cover."""

    has_primitives: bool = False
    has_semantics: bool = False
    semantic_categories: Tuple[str, ...] = ()
    class_prefix: str = ""
    warning: Optional[str] = None

    @property
    def generate_primitives(self) -> bool:
        return self.has_primitives or not self.has_semantics

    @property
    def generate_semantics(self) -> bool:
        return self.has_semantics or not self.has_primitives


@dataclass(frozen=True)
class KotlinTypographyScope:
    """Definition vs accessor files found among Kotlin typography references."""

    has_definition: bool = False
    has_accessor: bool = False
    definition_filename: Optional[str] = None
    definition_content: Optional[str] = None
    accessor_class_name: Optional[str] = None
    accessor_container_ref: Optional[str] = None
    accessor_filename: Optional[str] = None

    @property
    def generate_definition(self) -> bool:
        return self.has_definition or not self.has_accessor

    @property
    def generate_accessor(self) -> bool:
        return self.has_accessor


def classify_reference_file(filename: str, content: str) -> Optional[str]:
    """Return the slot for one uploaded reference file, or None if unrecognised."""
    name = PurePath(filename).name
    lowered = name.lower()
    suffix = PurePath(lowered).suffix

    if suffix in (".scss", ".css"):
        is_scss = suffix == ".scss"
        if "typo" in lowered or "font" in lowered or _WEB_TYPOGRAPHY_RE.search(content):
            return TYPOGRAPHY_SCSS
        if _SPACING_RE.search(lowered):
            return SPACING_SCSS if is_scss else SPACING_CSS
        if "primitive" in lowered or _WEB_PRIMITIVE_RE.search(content):
            return PRIMITIVES_SCSS if is_scss else PRIMITIVES_CSS
        return COLORS_SCSS if is_scss else COLORS_CSS
    if suffix == ".ts":
        if "typo" in lowered or "font" in lowered or "fontSize" in content:
            return TYPOGRAPHY_TS
        if _SPACING_RE.search(lowered):
            return SPACING_TS
        if "primitive" in lowered or _TS_PRIMITIVE_RE.search(content) or _WEB_PRIMITIVE_RE.search(content):
            return PRIMITIVES_TS
        return COLORS_TS
    if suffix == ".swift":
        if "typo" in lowered or "font" in lowered or _SWIFT_TYPOGRAPHY_RE.search(content):
            return TYPOGRAPHY_SWIFT
        return SWIFT_COLORS
    if suffix == ".kt":
        if _KOTLIN_ENUM_RE.search(content) and "MaterialTheme" in content and "TextStyle" in content:
            return TYPOGRAPHY_KOTLIN_ACCESSOR
        if "typo" in lowered or _KOTLIN_TYPOGRAPHY_RE.search(content):
            return TYPOGRAPHY_KOTLIN
        return KOTLIN_COLORS
    return None


def classify_references(files: Mapping[str, str] | Iterable[Tuple[str, str]]) -> ReferenceSet:
    """Group ``filename -> content`` pairs by slot."""
    pairs = files.items() if isinstance(files, Mapping) else files
    references = ReferenceSet()
    for filename, content in pairs:
        reference = ReferenceFile(filename=filename, content=content)
        references.add(classify_reference_file(filename, content), reference)
    return references


def classify_kotlin_references(files: Iterable[ReferenceFile]) -> KotlinReferenceScope:
    files = list(files)
    if not files:
        return KotlinReferenceScope()

    has_primitives = False
    has_semantics = False
    for ref in files:
        content = ref.content
        if (
            _KOTLIN_PALETTE_RE.search(content)
            or _KOTLIN_TOP_LEVEL_COLOR_RE.search(content)
            or _KOTLIN_PRIMITIVES_OBJECT_RE.search(content)
        ):
            has_primitives = True
        if _KOTLIN_THEME_OBJECTS_RE.search(content):
            has_semantics = True

    combined = "\n".join(ref.content for ref in files)
    prefix, categories = _kotlin_color_class_info(combined)
    if categories:
        has_semantics = True

    warning = None
    if "Color(" in combined and not has_semantics and not has_primitives:
        warning = (
            "Kotlin reference files were uploaded but no color class pattern was detected. "
            f"Expected a naming convention like `class {prefix}FillColors`, `class {prefix}TextColors`, etc."
        )
    return KotlinReferenceScope(
        has_primitives=has_primitives,
        has_semantics=has_semantics,
        semantic_categories=tuple(categories),
        class_prefix=prefix,
        warning=warning,
    )


def classify_kotlin_typography_references(files: Iterable[ReferenceFile]) -> KotlinTypographyScope:
    definition: Optional[ReferenceFile] = None
    accessor: Optional[ReferenceFile] = None
    for ref in files:
        content = ref.content
        if _KOTLIN_ENUM_RE.search(content) and "MaterialTheme" in content:
            accessor = ref
            continue
        is_class_definition = re.search(r"\bclass\s+\w+", content) and (
            "@Immutable" in content or re.search(r"internal\s+constructor", content)
        )
        is_object_definition = re.search(r"\bobject\s+\w+", content) and re.search(r"\bTextStyle\s*\(", content)
        if is_class_definition or is_object_definition:
            definition = ref

    if definition is None and accessor is None:
        return KotlinTypographyScope()

    enum_match = _KOTLIN_ENUM_RE.search(accessor.content) if accessor else None
    container_match = _KOTLIN_ACCESSOR_CONTAINER_RE.search(accessor.content) if accessor else None
    return KotlinTypographyScope(
        has_definition=definition is not None,
        has_accessor=accessor is not None,
        definition_filename=PurePath(definition.filename).name if definition else None,
        definition_content=definition.content if definition else None,
        accessor_class_name=enum_match.group(1) if enum_match else None,
        accessor_container_ref=container_match.group(1) if container_match else None,
        accessor_filename=PurePath(accessor.filename).name if accessor else None,
    )


def _kotlin_color_class_info(content: str) -> Tuple[str, List[str]]:
    """Detect ``class <Prefix><Category>Colors`` declarations."""
    prefix = ""
    categories: List[str] = []
    for match in re.finditer(r"\bclass\s+R(\w+)Colors\b", content):
        prefix = "R"
        category = match.group(1).lower()
        if category not in categories:
            categories.append(category)
    return prefix, categories


__all__ = [
    "KotlinReferenceScope",
    "KotlinTypographyScope",
    "ReferenceFile",
    "ReferenceSet",
    "SLOT_ARTIFACTS",
    "classify_kotlin_references",
    "classify_kotlin_typography_references",
    "classify_reference_file",
    "classify_references",
]
