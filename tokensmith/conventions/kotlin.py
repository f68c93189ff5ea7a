"""Kotlin / Jetpack Compose color convention detection."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .base import ConventionDetector
from .bugs import detect_kotlin_color_bugs

DEFAULT_OBJECT_NAME = "AppColors"
DEFAULT_PACKAGE = "com.example.design"

_PASCAL_RE = re.compile(r"\b(?:val|var)\s+[A-Z][a-zA-Z0-9]+\s*(?:=|by\s)")
_CAMEL_RE = re.compile(r"\b(?:val|var)\s+[a-z][a-zA-Z0-9]+\s*(?:=|by\s)")
_OBJECT_RE = re.compile(r"\bobject\s+(\w+)\s*\{")
_PACKAGE_RE = re.compile(r"^package\s+([\w.]+)", re.MULTILINE)
_PALETTE_RE = re.compile(r"\bobject\s+\w+Palette\s*\{")
_CATEGORY_CLASS_RE = re.compile(r"\bclass\s+R(\w+)Colors\b")
_CLASS_PREFIX_RE = re.compile(r"\bclass\s+(R)\w+Colors\b")
_ENUM_RE = re.compile(r"\benum\s+class\s+R\w+Color\b")
_INTERNAL_SET_RE = re.compile(r"\binternal\s+set\b")
_COPY_RE = re.compile(r"\bfun\s+copy\(")
_PARAM_FACTORY_RE = re.compile(r"\bfun\s+\w+(?:Dark|Light)Colors\s*\(\s*\n\s*\w+\s*:\s*Color")


@dataclass(frozen=True)
class KotlinConventions:
    """Naming and file architecture of a Compose color reference."""

    naming_case: str = "camel"
    object_name: str = DEFAULT_OBJECT_NAME
    package: str = DEFAULT_PACKAGE
    primitive_style: str = "flat"
    semantic_categories: Tuple[str, ...] = field(default_factory=tuple)
    class_prefix: str = ""
    uses_composition_local: bool = False
    uses_enum: bool = False
    uses_mutable_state: bool = False
    uses_internal_set: bool = False
    uses_copy_method: bool = False
    uses_parameterized_factories: bool = False

    @property
    def is_multi_file(self) -> bool:
        return bool(self.semantic_categories)

    @property
    def primitives_object(self) -> str:
        return "Primitives" if self.object_name == DEFAULT_OBJECT_NAME else f"{self.object_name}Primitives"

    @property
    def light_object(self) -> str:
        return "LightColorTokens" if self.object_name == DEFAULT_OBJECT_NAME else f"{self.object_name}Light"

    @property
    def dark_object(self) -> str:
        return "DarkColorTokens" if self.object_name == DEFAULT_OBJECT_NAME else f"{self.object_name}Dark"


BEST_PRACTICE_KOTLIN_CONVENTIONS = KotlinConventions()


class KotlinConventionDetector(ConventionDetector):
    name = "kotlin"

    def defaults(self) -> KotlinConventions:
        return BEST_PRACTICE_KOTLIN_CONVENTIONS

    def inspect(self, reference: str) -> KotlinConventions:
        pascal = len(_PASCAL_RE.findall(reference))
        camel = len(_CAMEL_RE.findall(reference))

        object_match = _OBJECT_RE.search(reference)
        package_match = _PACKAGE_RE.search(reference)
        prefix_match = _CLASS_PREFIX_RE.search(reference)

        return KotlinConventions(
            naming_case="pascal" if pascal > camel else "camel",
            object_name=object_match.group(1) if object_match else DEFAULT_OBJECT_NAME,
            package=package_match.group(1) if package_match else DEFAULT_PACKAGE,
            primitive_style="palette-objects" if _PALETTE_RE.search(reference) else "flat",
            semantic_categories=tuple(m.group(1).lower() for m in _CATEGORY_CLASS_RE.finditer(reference)),
            class_prefix=prefix_match.group(1) if prefix_match else "",
            uses_composition_local="compositionLocalOf" in reference,
            uses_enum=bool(_ENUM_RE.search(reference)),
            uses_mutable_state="mutableStateOf" in reference,
            uses_internal_set=bool(_INTERNAL_SET_RE.search(reference)),
            uses_copy_method=bool(_COPY_RE.search(reference)),
            uses_parameterized_factories=bool(_PARAM_FACTORY_RE.search(reference)),
        )

    def bug_warnings(self, reference: Optional[str]) -> List[str]:
        return detect_kotlin_color_bugs(reference) if reference else []


__all__ = [
    "BEST_PRACTICE_KOTLIN_CONVENTIONS",
    "DEFAULT_OBJECT_NAME",
    "DEFAULT_PACKAGE",
    "KotlinConventionDetector",
    "KotlinConventions",
]
