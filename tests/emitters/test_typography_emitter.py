"""Tests for tokensmith.emitters.typography."""

from __future__ import annotations

from tests._fixtures.tokens import typography as typography_token

from tokensmith.conventions.classify import classify_references
from tokensmith.conventions.typography import (
    KotlinTypographyConventions,
    ScssTypographyConventions,
    SwiftTypographyConventions,
    TypographyConventions,
)
from tokensmith.emitters.shared import EmitContext
from tokensmith.emitters.typography import TypographyEmitter, count_typography_styles, parse_typography
from tokensmith.emitters.typography.parse import (
    normalize_font_weight,
    px_to_em,
    px_to_rem,
    style_name_to_key,
    unitless_line_height,
)


def _by_name(artifacts):
    return {artifact.filename: artifact for artifact in artifacts}


def test_style_name_to_key_collapses_repeated_parents() -> None:
    assert style_name_to_key("droid/body/body-R") == "droid-body-r"
    assert style_name_to_key("ios/Title/Title 2 (Bold)") == "ios-title-2-bold"
    assert style_name_to_key("Body/Body-R") == "body-r"


def test_normalize_font_weight() -> None:
    assert normalize_font_weight(700) == (700, False)
    assert normalize_font_weight("600") == (600, False)
    assert normalize_font_weight("SemiBold") == (600, False)
    assert normalize_font_weight("Wobbly") == (400, True)
    assert normalize_font_weight(None) == (400, True)


def test_unit_conversions() -> None:
    assert px_to_rem(16) == "1rem"
    assert px_to_rem(14) == "0.875rem"
    assert unitless_line_height(40, 32) == "1.25"
    assert unitless_line_height(20, 0) == "1"
    assert px_to_em(1, 16) == "0.0625em"
    assert px_to_em(0, 16) == "0"


def test_parse_typography_partitions_by_prefix(typography) -> None:
    parsed = parse_typography(typography)

    assert [entry.full_key for entry in parsed.for_platform("web")] == ["body-r", "heading-l", "body-m"]
    assert [entry.short_key for entry in parsed.for_platform("ios")] == ["title-1"]
    assert [entry.full_key for entry in parsed.for_platform("android")] == ["droid-body-m"]
    assert parsed.weight_fallbacks == ()
    assert count_typography_styles(typography) == 4


def test_parse_typography_skips_decoration_variants_and_records_fallbacks() -> None:
    document = {
        "typography": {
            "Body/Body-R": typography_token(weight="Mystery"),
            "Body/Body-R (Underline)": typography_token(),
        }
    }

    parsed = parse_typography(document)

    assert [entry.full_key for entry in parsed.entries] == ["body-r"]
    assert parsed.weight_fallbacks == ("Body/Body-R",)


def test_parse_typography_accepts_flat_documents() -> None:
    document = {"Body/Body-R": typography_token(), "note": {"$type": "string", "$value": "x"}}

    assert count_typography_styles(document) == 1
    assert count_typography_styles({"colors": {}}) == 0
    assert parse_typography(None).entries == ()


def test_emitter_renders_requested_platforms_only(typography) -> None:
    output = TypographyEmitter().emit(typography, ["web"])

    assert [artifact.filename for artifact in output.artifacts] == ["Typography.scss", "Typography.ts"]


def test_web_typography_defaults(typography) -> None:
    artifacts = _by_name(TypographyEmitter().emit(typography, ["web"]).artifacts)

    scss = artifacts["Typography.scss"].content
    assert "  --typo-body-r-size: 1rem;" in scss
    assert "  --typo-heading-l-line-height: 1.25;" in scss
    assert "// Android (droid) — Body" in scss
    assert "@mixin typo-body-m {" in scss
    assert "  font-weight: 500;" in scss

    ts = artifacts["Typography.ts"].content
    assert "export interface TypographyToken {" in ts
    assert "export const typoBodyR: TypographyToken = {" in ts
    assert "  fontSizeRem: '2rem'," in ts


def test_scss_two_tier_output(typography) -> None:
    conventions = TypographyConventions(
        scss=ScssTypographyConventions(var_prefix="$font-", mixin_prefix="font-", two_tier=True, size_unit="px")
    )

    artifacts = _by_name(TypographyEmitter().emit(typography, ["web"], conventions).artifacts)

    scss = artifacts["Typography.scss"].content
    assert "$font-weight-400: 400;" in scss
    assert "$font-body-r-size: 16px;" in scss
    assert "@mixin font-body-r {" in scss
    assert "  font-size: $font-body-r-size;" in scss


def test_swift_struct_typography(typography) -> None:
    artifacts = _by_name(TypographyEmitter().emit(typography, ["ios"]).artifacts)

    swift = artifacts["Typography.swift"].content
    assert artifacts["Typography.swift"].platform == "ios"
    assert "public struct TypographyStyle {" in swift
    assert (
        "  static let title1 = TypographyStyle("
        "font: Font.system(size: 28, weight: .bold, design: .default), lineSpacing: 6)"
    ) in swift


def test_swift_enum_typography(typography) -> None:
    conventions = TypographyConventions(
        swift=SwiftTypographyConventions(
            architecture="enum", type_name="AppFont", ui_framework="uikit", name_map={"title1": "titleOne"}
        )
    )

    swift = _by_name(TypographyEmitter().emit(typography, ["ios"], conventions).artifacts)["Typography.swift"].content

    assert "public enum AppFont: String {" in swift
    assert "    case titleOne" in swift
    assert "            return FontData(fontWeight: .bold, size: 28, lineHeight: 34)" in swift
    assert "    let fontWeight: UIFont.Weight" in swift


def test_kotlin_typography_object(typography) -> None:
    artifacts = _by_name(TypographyEmitter().emit(typography, ["android"]).artifacts)

    kotlin = artifacts["Typography.kt"].content
    assert "object TypographyTokens {" in kotlin
    assert "    val bodyM = TextStyle(" in kotlin
    assert "        fontWeight = FontWeight.Medium," in kotlin
    assert "        fontSize = 14.sp," in kotlin


def test_kotlin_typography_snake_names(typography) -> None:
    conventions = TypographyConventions(kotlin=KotlinTypographyConventions(naming_style="snake"))

    kotlin = _by_name(TypographyEmitter().emit(typography, ["android"], conventions).artifacts)["Typography.kt"].content

    assert "    val body_m = TextStyle(" in kotlin


def test_typography_styles_missing_from_the_reference_are_flagged(typography) -> None:
    references = classify_references({"Typography.ts": "export const typoBodyR: TypographyToken = {};\n"})
    emitter = TypographyEmitter(EmitContext(best_practices=False))

    ts = _by_name(emitter.emit(typography, ["web"], references=references).artifacts)["Typography.ts"].content

    lines = ts.splitlines()
    heading = lines.index("export const typoHeadingL: TypographyToken = {")
    body = lines.index("export const typoBodyR: TypographyToken = {")
    assert lines[heading - 1].startswith("// NEW:")
    assert not lines[body - 1].startswith("// NEW:")
