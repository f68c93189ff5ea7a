"""Tests for the color convention detectors and detector discovery."""

from __future__ import annotations

import pytest

from tokensmith.conventions import discover_detectors
from tokensmith.conventions.kotlin import (
    BEST_PRACTICE_KOTLIN_CONVENTIONS,
    DEFAULT_PACKAGE,
    KotlinConventionDetector,
)
from tokensmith.conventions.swift import BEST_PRACTICE_SWIFT_CONVENTIONS, SwiftConventionDetector
from tokensmith.conventions.web import (
    BEST_PRACTICE_WEB_CONVENTIONS,
    WebConventionDetector,
    css_var_to_ts_name,
    scss_var_to_ts_name,
)


def test_best_practices_mode_ignores_reference() -> None:
    reference = "$text_primary: var(--text_primary);"

    assert WebConventionDetector().detect(reference, best_practices=True) == BEST_PRACTICE_WEB_CONVENTIONS
    assert WebConventionDetector().detect("   ", best_practices=False) == BEST_PRACTICE_WEB_CONVENTIONS


def test_web_detector_reads_separator_ts_case_and_structure() -> None:
    reference = "\n".join(
        [
            "@import './Primitives.module';",
            ":root { --text_primary: #{$grey_750}; }",
            "@media (prefers-color-scheme: dark) { :root { --text_primary: #{$grey_50}; } }",
            "$text_primary: var(--text_primary);",
            "$fill_primary: var(--fill_primary);",
            "export const textPrimary = 'var(--text_primary)';",
            "export const GREY_HEX = '#ABCDEF';",
        ]
    )

    profile = WebConventionDetector().detect(reference, best_practices=False)

    assert profile.scss_separator == "underscore"
    assert profile.separator == "_"
    assert profile.import_style == "import"
    assert profile.import_suffix == ".module"
    assert profile.scss_color_structure == "media-query"
    assert profile.has_type_annotations is False
    assert profile.ts_hex_casing == "upper"


def test_web_detector_picks_camel_case_exports() -> None:
    reference = "export const textPrimary = 'a';\nexport const textSecondary = 'b';\n"

    assert WebConventionDetector().inspect(reference).ts_naming_case == "camel"


def test_inline_structure_detected_without_root_block() -> None:
    reference = "$text-primary: var(--text-primary, light-dark($grey-750, $grey-50));"

    assert WebConventionDetector().inspect(reference).scss_color_structure == "inline"


def test_scss_var_to_ts_name_cases() -> None:
    assert scss_var_to_ts_name("$grey-alpha-750-8", "screaming_snake") == "GREY_ALPHA_750_8"
    assert scss_var_to_ts_name("$grey-alpha-750", "camel") == "greyAlpha750"
    assert scss_var_to_ts_name("$grey-alpha-750", "pascal") == "GreyAlpha750"
    assert scss_var_to_ts_name("$grey_alpha", "snake") == "grey_alpha"
    assert css_var_to_ts_name("--spacing-4", "screaming_snake") == "SPACING_4"


def test_swift_detector_reads_keyword_and_case() -> None:
    detector = SwiftConventionDetector()

    camel_var = detector.detect("static var textPrimary = Color.grey750", best_practices=False)
    snake_let = detector.detect(
        "static let text_primary = Color.grey_750\nstatic let fill_primary = Color.grey_900",
        best_practices=False,
    )

    assert camel_var.use_computed_var is True
    assert camel_var.keyword == "var"
    assert camel_var.naming_case == "camel"
    assert snake_let.naming_case == "snake"
    assert snake_let.keyword == "let"
    assert detector.detect(None, best_practices=False) == BEST_PRACTICE_SWIFT_CONVENTIONS


def test_swift_bug_warnings_flag_missing_hash() -> None:
    warnings = SwiftConventionDetector().bug_warnings('static let greenElectric = "008001"')

    assert len(warnings) == 1
    assert "1 hex value(s)" in warnings[0]


def test_kotlin_detector_reads_container_and_package() -> None:
    reference = "\n".join(
        [
            "package com.acme.theme",
            "",
            "object BrandColors {",
            "    val textPrimary = Color(0xFF404040)",
            "}",
        ]
    )

    profile = KotlinConventionDetector().detect(reference, best_practices=False)

    assert profile.object_name == "BrandColors"
    assert profile.package == "com.acme.theme"
    assert profile.naming_case == "camel"
    assert profile.light_object == "BrandColorsLight"
    assert profile.is_multi_file is False


def test_kotlin_detector_reads_multi_file_architecture() -> None:
    reference = "\n".join(
        [
            "class RFillColors(",
            "    primary: Color,",
            ") {",
            "    var primary by mutableStateOf(primary, structuralEqualityPolicy())",
            "        internal set",
            "    fun copy(primary: Color = this.primary): RFillColors = RFillColors(primary)",
            "}",
            "class RTextColors(primary: Color)",
            "val LocalFillColor = compositionLocalOf { FillLightColorScheme }",
        ]
    )

    profile = KotlinConventionDetector().inspect(reference)

    assert profile.semantic_categories == ("fill", "text")
    assert profile.class_prefix == "R"
    assert profile.uses_mutable_state
    assert profile.uses_internal_set
    assert profile.uses_copy_method
    assert profile.uses_composition_local
    assert profile.is_multi_file


def test_kotlin_defaults_and_copy_paste_bug() -> None:
    detector = KotlinConventionDetector()
    reference = "ICONSTATICWHITE -> white\nICONSTATICBLACK -> white\n"

    assert detector.detect(None, best_practices=False) == BEST_PRACTICE_KOTLIN_CONVENTIONS
    assert BEST_PRACTICE_KOTLIN_CONVENTIONS.package == DEFAULT_PACKAGE
    assert detector.bug_warnings(reference) == [
        'Static icon/text enum cases all map to "white" - likely a copy-paste bug. '
        "Generated output uses correct Figma mappings."
    ]


def test_discover_detectors_returns_builtins() -> None:
    detectors = discover_detectors()

    assert {"web", "swift", "kotlin", "typography-kotlin"} <= set(detectors)


def test_discover_detectors_expands_typography_alias() -> None:
    detectors = discover_detectors(["web", "typography"])

    assert set(detectors) == {
        "web",
        "typography-scss",
        "typography-ts",
        "typography-swift",
        "typography-kotlin",
    }


def test_discover_detectors_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown detectors requested: nope"):
        discover_detectors(["nope"])
