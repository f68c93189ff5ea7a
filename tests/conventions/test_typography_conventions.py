"""Tests for tokensmith.conventions.typography."""

from __future__ import annotations

from tokensmith.conventions.typography import (
    BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS,
    KotlinTypographyDetector,
    ScssTypographyDetector,
    SwiftTypographyDetector,
    TsTypographyDetector,
    detect_typography_conventions,
)


def test_detect_typography_conventions_defaults_without_references() -> None:
    assert detect_typography_conventions(best_practices=False) == BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS
    assert detect_typography_conventions(scss="$x: 1;", best_practices=True) == BEST_PRACTICE_TYPOGRAPHY_CONVENTIONS


def test_scss_two_tier_profile() -> None:
    reference = "\n".join(
        [
            "$font-body-size: 1rem;",
            "$font-body-weight: 400;",
            "$font-body-spacing: 0.01em;",
            "@mixin font-body {",
            "  font-family: 'Inter';",
            "}",
            "@mixin font-heading {",
            "}",
        ]
    )

    profile = ScssTypographyDetector().inspect(reference)

    assert profile.var_prefix == "$font-body-"
    assert profile.has_mixins
    assert profile.mixin_prefix == "font-"
    assert profile.size_unit == "rem"
    assert profile.spacing_unit == "em"
    assert profile.includes_font_family
    assert profile.includes_font_weight
    assert profile.two_tier


def test_ts_screaming_profile() -> None:
    reference = "\n".join(
        [
            "export interface FontToken {",
            "  fontSize: string;",
            "}",
            "export const FONT_BODY = { fontSize: '16px' };",
            "export const FONT_WEIGHT_BOLD = 700;",
        ]
    )

    profile = TsTypographyDetector().inspect(reference)

    assert profile.naming_case == "screaming_snake"
    assert profile.const_prefix == "FONT_"
    assert profile.interface_name == "FontToken"
    assert profile.value_format == "string"
    assert profile.export_weights


def test_swift_enum_profile_collects_case_names() -> None:
    reference = "\n".join(
        [
            "import SwiftUI",
            "enum AppFont {",
            "    case titleLarge",
            "    case bodyRegular",
            "    var fontData: FontData { .init(size: 16) }",
            "}",
            "struct FontData {",
            "    let size: CGFloat",
            "    let weight: Font.Weight",
            "}",
        ]
    )

    profile = SwiftTypographyDetector().inspect(reference)

    assert profile.architecture == "enum"
    assert profile.type_name == "AppFont"
    assert profile.data_struct_name == "FontData"
    assert profile.data_struct_props == ("size", "weight")
    assert profile.ui_framework == "swiftui"
    assert profile.name_map == {"titlelarge": "titleLarge", "bodyregular": "bodyRegular"}


def test_kotlin_class_profile() -> None:
    reference = "\n".join(
        [
            "package com.acme.type",
            "@Immutable",
            "class RTypography internal constructor(",
            "    val body_r: TextStyle,",
            "    val footnote_r: TextStyle,",
            ")",
        ]
    )

    profile = KotlinTypographyDetector().inspect(reference)

    assert profile.architecture == "class"
    assert profile.class_name == "RTypography"
    assert profile.package == "com.acme.type"
    assert profile.is_immutable
    assert profile.naming_style == "snake"
    assert profile.name_map["body_r"] == "body_r"


def test_kotlin_typography_bug_warnings() -> None:
    reference = "fun copy(footnote_r: TextStyle = this.subhead_r)\nobject RLocalTypography"

    warnings = KotlinTypographyDetector().bug_warnings(reference)

    assert len(warnings) == 2
    assert "copy-paste bug" in warnings[0]
    assert "slprice" in warnings[1]
