"""Typography convention detection for SCSS, TypeScript, Swift and Kotlin.

Each language has its own detector and sub-profile so a reference can be
supplied for any subset of platforms; languages without a reference keep the
best-practices sub-profile.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .base import ConventionDetector
from .bugs import detect_kotlin_typography_bugs

DEFAULT_TYPOGRAPHY_PACKAGE = "com.example.design"


@dataclass(frozen=True)
class ScssTypographyConventions:
    var_prefix: str = "$typo-"
    has_css_custom_properties: bool = True
    has_mixins: bool = True
    mixin_prefix: str = "typo-"
    includes_font_family: bool = True
    includes_font_weight: bool = True
    size_unit: str = "rem"
    height_unit: str = "unitless"
    spacing_unit: str = "em"
    two_tier: bool = False


@dataclass(frozen=True)
class TsTypographyConventions:
    naming_case: str = "camel"
    const_prefix: str = "typo"
    includes_font_family: bool = True
    has_interface: bool = True
    interface_name: Optional[str] = "TypographyToken"
    value_format: str = "number"
    two_tier: bool = False
    export_weights: bool = False


@dataclass(frozen=True)
class SwiftTypographyConventions:
    architecture: str = "struct"
    type_name: str = "TypographyStyle"
    data_struct_name: Optional[str] = None
    data_struct_props: Tuple[str, ...] = ()
    ui_framework: str = "swiftui"
    includes_tracking: bool = True
    uses_dynamic_type_scaling: bool = False
    dynamic_type_method_name: Optional[str] = None
    name_map: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class KotlinTypographyConventions:
    architecture: str = "object"
    container_name: str = "TypographyTokens"
    class_name: Optional[str] = None
    package: str = DEFAULT_TYPOGRAPHY_PACKAGE
    uses_text_style: bool = True
    custom_data_class: Optional[str] = None
    data_class_props: Tuple[str, ...] = ()
    includes_m3_builder: bool = True
    includes_line_height_style: bool = False
    naming_style: str = "camel"
    is_immutable: bool = False
    name_map: Dict[str, str] = field(default_factory=dict)
    bug_warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypographyConventions:
    scss: ScssTypographyConventions = field(default_factory=ScssTypographyConventions)
    ts: TsTypographyConventions = field(default_factory=TsTypographyConventions)
    swift: SwiftTypographyConventions = field(default_factory=SwiftTypographyConventions)
    kotlin: KotlinTypographyConventions = field(default_factory=KotlinTypographyConventions)


BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS = TypographyConventions()


# ----------------------------------------------------------------------
# SCSS
# ----------------------------------------------------------------------

_SCSS_VAR_LINE_RE = re.compile(r"^\$[\w-]+:\s")
_SCSS_VAR_PREFIX_RE = re.compile(r"^\$([\w-]+?)-(?:size|height|spacing|weight)")
_SCSS_MIXIN_RE = re.compile(r"^@mixin\s+([\w-]+)")


class ScssTypographyDetector(ConventionDetector):
    name = "typography-scss"

    def defaults(self) -> ScssTypographyConventions:
        return BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.scss

    def inspect(self, reference: str) -> ScssTypographyConventions:
        lines = [line.strip() for line in reference.splitlines()]
        var_lines = [line for line in lines if _SCSS_VAR_LINE_RE.match(line)]
        prefix_match = _SCSS_VAR_PREFIX_RE.match(var_lines[0]) if var_lines else None
        mixin_names = [m.group(1) for m in (_SCSS_MIXIN_RE.match(line) for line in lines) if m]
        has_mixins = bool(mixin_names)

        return ScssTypographyConventions(
            var_prefix=f"${prefix_match.group(1)}-" if prefix_match else "$font-",
            has_css_custom_properties=any(":root" in line or "--" in line for line in lines),
            has_mixins=has_mixins,
            mixin_prefix=_common_mixin_prefix(mixin_names),
            includes_font_family=any("font-family" in line and not line.startswith("//") for line in lines),
            includes_font_weight=any("weight" in line for line in var_lines),
            size_unit="rem" if any(re.search(r"size.*rem", line) for line in var_lines) else "px",
            height_unit="rem" if any(re.search(r"height.*rem", line) for line in var_lines) else "unitless",
            spacing_unit=(
                "em"
                if any(re.search(r"spacing.*em", line) and "rem" not in line for line in var_lines)
                else "px"
            ),
            two_tier=bool(var_lines) and has_mixins,
        )


def _common_mixin_prefix(names: List[str]) -> str:
    """Longest hyphen-aligned prefix shared by every mixin name."""
    if not names:
        return "font-"
    prefix = ""
    for segment in names[0].split("-"):
        candidate = f"{prefix}{segment}-"
        if all(name.startswith(candidate) for name in names):
            prefix = candidate
        else:
            break
    return prefix or "font-"


# ----------------------------------------------------------------------
# TypeScript
# ----------------------------------------------------------------------

_TS_EXPORT_CONST_RE = re.compile(r"^export\s+const\s")
_TS_PRIVATE_CONST_RE = re.compile(r"^const\s+[A-Z]")
_TS_SCREAMING_RE = re.compile(r"export\s+const\s+[A-Z_]+\s")
_TS_CONST_PREFIX_RE = re.compile(r"export\s+const\s+([A-Z]+_)")
_TS_INTERFACE_RE = re.compile(r"^(?:export\s+)?interface\s+(\w+)")
_TS_ALIAS_EXPORT_RE = re.compile(r"=\s+[A-Z_]+\s*;")


class TsTypographyDetector(ConventionDetector):
    name = "typography-ts"

    def defaults(self) -> TsTypographyConventions:
        return BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.ts

    def inspect(self, reference: str) -> TsTypographyConventions:
        lines = [line.strip() for line in reference.splitlines()]
        exports = [line for line in lines if _TS_EXPORT_CONST_RE.match(line)]
        private_consts = [line for line in lines if _TS_PRIVATE_CONST_RE.match(line)]
        prefix_match = _TS_CONST_PREFIX_RE.search(exports[0]) if exports else None
        interface_match = next((m for m in (_TS_INTERFACE_RE.match(line) for line in lines) if m), None)

        return TsTypographyConventions(
            naming_case=(
                "screaming_snake" if any(_TS_SCREAMING_RE.search(line) for line in exports) else "camel"
            ),
            const_prefix=prefix_match.group(1) if prefix_match else "FONT_",
            includes_font_family=any("fontFamily" in line and not line.startswith("//") for line in lines),
            has_interface=interface_match is not None,
            interface_name=interface_match.group(1) if interface_match else None,
            value_format="string" if any(re.search(r"fontSize:\s*'", line) for line in lines) else "number",
            two_tier=bool(private_consts) and any(_TS_ALIAS_EXPORT_RE.search(line) for line in exports),
            export_weights=any("WEIGHT" in line for line in exports),
        )


# ----------------------------------------------------------------------
# Swift
# ----------------------------------------------------------------------

_SWIFT_ENUM_RE = re.compile(r"^\s*(?:public\s+)?enum\s+(\w+)")
_SWIFT_CASE_RE = re.compile(r"^\s*case\s+(\w+)")
_SWIFT_STRUCT_RE = re.compile(r"^\s*(?:public\s+)?struct\s+(\w+)")
_SWIFT_FONT_DATA_RE = re.compile(r"var\s+fontData\s*:\s*(\w+)")
_SWIFT_PROP_RE = re.compile(r"\b(?:let|var)\s+(\w+)\s*:")
_SWIFT_STATIC_LET_RE = re.compile(r"^\s*static\s+let\s+(\w+)")
_SWIFT_UIKIT_RE = re.compile(r"\bUIFont\b|\bimport\s+UIKit\b")
_SWIFT_SWIFTUI_RE = re.compile(r"\bimport\s+SwiftUI\b|\bFont\.system\b|\bFont\.custom\b")
_SWIFT_TRACKING_RE = re.compile(r"\btracking\b|\bletterSpacing\b", re.IGNORECASE)
_SWIFT_DYNAMIC_METHOD_RE = re.compile(r"\bstatic\s+func\s+(\w+)\s*\(\s*_\s+\w+\s*:\s*CGFloat")
_SWIFT_CONTENT_SIZE_RE = re.compile(r"UIContentSizeCategory|preferredContentSizeCategory")


class SwiftTypographyDetector(ConventionDetector):
    name = "typography-swift"

    def defaults(self) -> SwiftTypographyConventions:
        return BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.swift

    def inspect(self, reference: str) -> SwiftTypographyConventions:
        lines = reference.splitlines()
        enum_match = next((m for m in (_SWIFT_ENUM_RE.match(line) for line in lines) if m), None)
        is_enum = enum_match is not None and any(_SWIFT_CASE_RE.match(line) for line in lines)
        struct_match = next(
            (
                m
                for m in (_SWIFT_STRUCT_RE.match(line) for line in lines if "ViewModifier" not in line)
                if m
            ),
            None,
        )
        if is_enum:
            type_name = enum_match.group(1)  # type: ignore[union-attr]
        elif struct_match is not None:
            type_name = struct_match.group(1)
        else:
            type_name = "TypographyStyle"

        data_struct_name: Optional[str] = None
        data_struct_props: List[str] = []
        if is_enum:
            data_struct_name = _find_data_struct(reference, lines, type_name)
            if data_struct_name:
                data_struct_props = _struct_properties(lines, data_struct_name)

        has_uikit = any(_SWIFT_UIKIT_RE.search(line) for line in lines)
        has_swiftui = any(_SWIFT_SWIFTUI_RE.search(line) for line in lines)
        if has_uikit and has_swiftui:
            ui_framework = "both"
        elif has_uikit:
            ui_framework = "uikit"
        else:
            ui_framework = "swiftui"

        dynamic_method: Optional[str] = None
        method_match = _SWIFT_DYNAMIC_METHOD_RE.search(reference)
        if method_match:
            candidate = method_match.group(1)
            called = re.search(
                rf"{re.escape(type_name)}\.{candidate}\(|self\.{candidate}\(", reference
            )
            if _SWIFT_CONTENT_SIZE_RE.search(reference) or called:
                dynamic_method = candidate

        name_re = _SWIFT_CASE_RE if is_enum else _SWIFT_STATIC_LET_RE
        name_map: Dict[str, str] = {}
        for line in lines:
            match = name_re.match(line)
            if match:
                name_map[match.group(1).lower()] = match.group(1)

        return SwiftTypographyConventions(
            architecture="enum" if is_enum else "struct",
            type_name=type_name,
            data_struct_name=data_struct_name,
            data_struct_props=tuple(data_struct_props),
            ui_framework=ui_framework,
            includes_tracking=any(
                _SWIFT_TRACKING_RE.search(line) and not line.strip().startswith("//") for line in lines
            ),
            uses_dynamic_type_scaling=dynamic_method is not None,
            dynamic_type_method_name=dynamic_method,
            name_map=name_map,
        )


def _find_data_struct(reference: str, lines: List[str], type_name: str) -> Optional[str]:
    font_data = _SWIFT_FONT_DATA_RE.search(reference)
    if font_data:
        return font_data.group(1)
    for line in lines:
        match = _SWIFT_STRUCT_RE.match(line)
        if match and match.group(1) != type_name and not re.search(r"ViewModifier|Constants", line):
            return match.group(1)
    return None


def _struct_properties(lines: List[str], struct_name: str) -> List[str]:
    props: List[str] = []
    inside = False
    depth = 0
    for line in lines:
        if f"struct {struct_name}" in line:
            inside = True
            depth = 0
        if not inside:
            continue
        depth += line.count("{") - line.count("}")
        match = _SWIFT_PROP_RE.search(line)
        if match:
            props.append(match.group(1))
        if depth <= 0 and "}" in line:
            break
    return props


# ----------------------------------------------------------------------
# Kotlin
# ----------------------------------------------------------------------

_KT_PACKAGE_RE = re.compile(r"^\s*package\s+([\w.]+)")
_KT_IMMUTABLE_RE = re.compile(r"^\s*@Immutable\b")
_KT_CLASS_RE = re.compile(r"^\s*class\s+(\w+)(?:.*constructor|\s*\()")
_KT_OBJECT_RE = re.compile(r"^\s*(?:internal\s+)?object\s+(\w+)")
_KT_TOP_LEVEL_VAL_RE = re.compile(r"^val\s+\w+")
_KT_SNAKE_VAL_RE = re.compile(r"^\s*val\s+[a-z]+_[a-z]")
_KT_CAMEL_VAL_RE = re.compile(r"^\s*val\s+[a-z]+[A-Z]")
_KT_DATA_CLASS_RE = re.compile(r"^\s*data\s+class\s+(\w+)")
_KT_NAME_RE = re.compile(r"^\s*val\s+(\w+)\s*[=:]")


class KotlinTypographyDetector(ConventionDetector):
    name = "typography-kotlin"

    def defaults(self) -> KotlinTypographyConventions:
        return BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS.kotlin

    def inspect(self, reference: str) -> KotlinTypographyConventions:
        lines = reference.splitlines()
        package_match = next((m for m in (_KT_PACKAGE_RE.match(line) for line in lines) if m), None)
        is_immutable = any(_KT_IMMUTABLE_RE.match(line) for line in lines)
        class_match = next((m for m in (_KT_CLASS_RE.match(line) for line in lines) if m), None)
        object_match = next((m for m in (_KT_OBJECT_RE.match(line) for line in lines) if m), None)

        architecture = "object"
        container_name = "TypographyTokens"
        class_name: Optional[str] = None
        if class_match and (is_immutable or "internal constructor" in reference):
            architecture = "class"
            class_name = container_name = class_match.group(1)
        elif object_match:
            container_name = object_match.group(1)
        elif "companion object" in reference:
            architecture = "companion"
        elif any(_KT_TOP_LEVEL_VAL_RE.match(line.strip()) for line in lines):
            architecture = "top-level"

        snake = sum(1 for line in lines if _KT_SNAKE_VAL_RE.match(line))
        camel = sum(1 for line in lines if _KT_CAMEL_VAL_RE.match(line))

        data_class_match = next((m for m in (_KT_DATA_CLASS_RE.match(line) for line in lines) if m), None)
        data_class = data_class_match.group(1) if data_class_match else None
        data_props: List[str] = []
        if data_class:
            declaration = next(line for line in lines if f"data class {data_class}" in line)
            params = re.search(r"\((.*)\)", declaration)
            for segment in (params.group(1) if params else "").split(","):
                prop = re.search(r"val\s+(\w+)", segment)
                if prop:
                    data_props.append(prop.group(1))

        name_map: Dict[str, str] = {}
        for line in lines:
            match = _KT_NAME_RE.match(line)
            if match:
                name_map[match.group(1).lower()] = match.group(1)

        return KotlinTypographyConventions(
            architecture=architecture,
            container_name=container_name,
            class_name=class_name,
            package=package_match.group(1) if package_match else DEFAULT_TYPOGRAPHY_PACKAGE,
            uses_text_style=any(re.search(r"\bTextStyle\s*\(", line) for line in lines),
            custom_data_class=data_class,
            data_class_props=tuple(data_props),
            includes_m3_builder=any(
                re.search(r"\bTypography\s*\(", line) or "MaterialTheme" in line for line in lines
            ),
            includes_line_height_style=any(re.search(r"\bLineHeightStyle\s*\(", line) for line in lines),
            naming_style="snake" if snake > camel else "camel",
            is_immutable=is_immutable,
            name_map=name_map,
            bug_warnings=tuple(detect_kotlin_typography_bugs(reference)),
        )

    def bug_warnings(self, reference: Optional[str]) -> List[str]:
        return detect_kotlin_typography_bugs(reference) if reference else []


def detect_typography_conventions(
    scss: Optional[str] = None,
    ts: Optional[str] = None,
    swift: Optional[str] = None,
    kotlin: Optional[str] = None,
    best_practices: bool = True,
) -> TypographyConventions:
    """Detect each language's typography profile from its own reference."""
    if best_practices or not any((scss, ts, swift, kotlin)):
        return BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS
    return TypographyConventions(
        scss=ScssTypographyDetector().detect(scss, best_practices=False),
        ts=TsTypographyDetector().detect(ts, best_practices=False),
        swift=SwiftTypographyDetector().detect(swift, best_practices=False),
        kotlin=KotlinTypographyDetector().detect(kotlin, best_practices=False),
    )


__all__ = [
    "BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS",
    "DEFAULT_TYPOGRAPHY_PACKAGE",
    "KotlinTypographyConventions",
    "KotlinTypographyDetector",
    "ScssTypographyConventions",
    "ScssTypographyDetector",
    "SwiftTypographyConventions",
    "SwiftTypographyDetector",
    "TsTypographyConventions",
    "TsTypographyDetector",
    "TypographyConventions",
    "detect_typography_conventions",
]
