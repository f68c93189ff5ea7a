"""Tests for the color pipeline and the per-language color emitters."""

from __future__ import annotations

from tests._fixtures.tokens import color, nest

from tokensmith.conventions.classify import KotlinReferenceScope
from tokensmith.conventions.kotlin import KotlinConventions
from tokensmith.conventions.swift import SwiftConventions
from tokensmith.conventions.web import WebConventions
from tokensmith.emitters.css import CssEmitter
from tokensmith.emitters.kotlin import KotlinEmitter
from tokensmith.emitters.pipeline import ColorPipeline
from tokensmith.emitters.scss import ScssEmitter, ScssPolicy
from tokensmith.emitters.shared import EmitContext
from tokensmith.emitters.swift import SwiftEmitter
from tokensmith.emitters.typescript import TypeScriptEmitter, TypeScriptPolicy


def _by_name(artifacts):
    return {artifact.filename: artifact for artifact in artifacts}


def test_pipeline_pairs_light_and_dark_primitives(light, dark) -> None:
    model = ColorPipeline(ScssPolicy()).run(light, dark)

    assert len(model.primitives) == 8
    assert [family for family, _ in model.families()] == ["blue", "grey"]
    grey = dict(model.families())["grey"]
    assert [p.name for p in grey] == ["$grey-0", "$grey-50", "$grey-300", "$grey-500", "$grey-750", "$grey-900"]
    assert [category for category, _ in model.categories()] == ["fill", "text", "icon"]

    text_primary = next(entry for entry in model.semantics if entry.token_name == "text-primary")
    assert text_primary.light.figma_name == "Colour/Grey/750"
    assert text_primary.dark.figma_name == "Colour/Grey/50"
    assert not text_primary.is_static
    assert model.unresolved == {}


def test_static_tokens_render_a_single_reference(light, dark) -> None:
    model = ColorPipeline(ScssPolicy()).run(light, dark)
    static = next(entry for entry in model.semantics if entry.token_name == "text-static-white")

    assert static.is_static
    assert ScssPolicy().render(static) == "#{$grey-0}"


def test_missing_dark_token_keeps_light_value(light) -> None:
    model = ColorPipeline(ScssPolicy()).run(light, {})

    assert all(entry.light == entry.dark for entry in model.semantics)
    assert all(entry.is_static for entry in model.semantics)


def test_alias_cycles_are_omitted_and_reported() -> None:
    light = nest(
        {
            "Text/A": color("#404040", "Text/B"),
            "Text/B": color("#404040", "Text/A"),
            "Text/Primary": color("#404040", "Colour/Grey/750"),
        }
    )

    model = ColorPipeline(ScssPolicy()).run(light, light)

    assert [entry.token_name for entry in model.semantics] == ["text-primary"]
    assert model.unresolved == {"Text/A": "cycle", "Text/B": "cycle"}


def test_semantic_chains_resolve_to_the_final_primitive() -> None:
    light = nest(
        {
            "Text/Primary": color("#404040", "Colour/Grey/750"),
            "Icon/Primary": color("#404040", "Text/Primary"),
        }
    )

    model = ColorPipeline(ScssPolicy()).run(light, light)

    icon = next(entry for entry in model.semantics if entry.token_name == "icon-primary")
    assert icon.light.name == "$grey-750"
    assert set(model.primitives) == {"Colour/Grey/750"}


def test_scss_emitter_modern_output(light, dark, fixed_now) -> None:
    artifacts = _by_name(ScssEmitter(EmitContext(now=fixed_now)).emit(light, dark))

    primitives = artifacts["Primitives.scss"].content
    colors = artifacts["Colors.scss"].content
    assert primitives.startswith("// Primitives.scss\n// Auto-generated from Figma Variables — DO NOT EDIT\n")
    assert "// Generated: 2026-10-18T12:00:00.000Z" in primitives
    assert "// Mode: best-practices" in primitives
    assert "$grey-750: #404040;" in primitives
    assert primitives.index("// blue") < primitives.index("// grey")

    assert colors.startswith("@use './Primitives' as *;")
    assert "@property --text-primary {" in colors
    assert "  --text-primary: light-dark(#{$grey-750}, #{$grey-50});" in colors
    assert "  --text-static-white: #{$grey-0};" in colors
    assert "$text-primary: var(--text-primary);" in colors


def test_scss_emitter_follows_detected_structure(light, dark) -> None:
    conventions = WebConventions(scss_separator="underscore", import_style="import", scss_color_structure="media-query")

    colors = _by_name(ScssEmitter().emit(light, dark, conventions))["Colors.scss"].content

    assert colors.startswith("@import './Primitives';")
    assert "  --text_primary: #{$grey_750};" in colors
    assert "    --text_primary: #{$grey_50};" in colors
    assert "--text_static_white: #{$grey_0};" in colors.split("@media")[0]
    assert "--text_static_white" not in colors.split("@media")[1].split("// SCSS variable aliases")[0]


def test_scss_emitter_inline_structure(light, dark) -> None:
    conventions = WebConventions(scss_color_structure="inline")

    colors = _by_name(ScssEmitter().emit(light, dark, conventions))["Colors.scss"].content

    assert "$text-primary: var(--text-primary, light-dark($grey-750, $grey-50));" in colors
    assert "$text-static-white: var(--text-static-white, $grey-0);" in colors


def test_css_emitter_wraps_best_practices_output_in_layer(light, dark, values) -> None:
    artifacts = _by_name(CssEmitter().emit(light, dark, values=values))

    colors = artifacts["colors.css"].content
    assert "@layer tokens {" in colors
    assert "    --text-primary: light-dark(var(--grey-750), var(--grey-50));" in colors
    assert "    --text-static-white: var(--grey-0);" in colors
    assert "    --grey-750: #404040;" in artifacts["primitives.css"].content
    assert "    --spacing-4: 4px;" in artifacts["spacing.css"].content


def test_css_emitter_match_existing_media_query(light, dark) -> None:
    emitter = CssEmitter(EmitContext(best_practices=False, reference_filenames=("colors.css",)))

    artifacts = _by_name(emitter.emit(light, dark, WebConventions(scss_color_structure="media-query")))

    colors = artifacts["colors.css"].content
    assert "@layer" not in colors
    assert "/* Reference: colors.css */" in colors
    assert "  --text-primary: var(--grey-750);" in colors
    assert "    --text-primary: var(--grey-50);" in colors
    assert "spacing.css" not in artifacts


def test_typescript_emitter_default_output(light, dark) -> None:
    artifacts = _by_name(TypeScriptEmitter().emit(light, dark))

    assert "export const GREY_750: string = '#404040';" in artifacts["Primitives.ts"].content
    colors = artifacts["Colors.ts"].content
    assert colors.startswith("import * as PRIMITIVES from './Primitives';")
    assert (
        "export const TEXT_PRIMARY: string = "
        "`var(--text-primary, light-dark(${PRIMITIVES.GREY_750}, ${PRIMITIVES.GREY_50}))`;"
    ) in colors
    assert "export const TEXT_STATIC_WHITE: string = `var(--text-static-white, ${PRIMITIVES.GREY_0})`;" in colors


def test_typescript_emitter_honors_detected_conventions(light, dark) -> None:
    conventions = WebConventions(
        ts_naming_case="camel", has_type_annotations=False, ts_hex_casing="upper", ts_uses_as_const=True
    )

    artifacts = _by_name(TypeScriptEmitter().emit(light, dark, conventions))

    primitives = artifacts["Primitives.ts"].content
    assert "export const grey900 = '#1A1A1A' as const;" in primitives
    assert "export const textPrimary = `var(--text-primary, " in artifacts["Colors.ts"].content


def test_swift_emitter_output(light, dark) -> None:
    (artifact,) = SwiftEmitter().emit(light, dark)

    assert artifact.filename == "Colors.swift"
    assert artifact.platform == "ios"
    content = artifact.content
    assert "  static let grey750 = Color(hex: 0x404040)" in content
    assert "  static let textPrimary = Color(light: .grey750, dark: .grey50)" in content
    assert "  static let textStaticWhite = Color.grey0" in content
    assert "  static let textStaticWhite = UIColor(Color.grey0)" in content
    assert "REFERENCE FILE ISSUES DETECTED" not in content


def test_swift_emitter_snake_var_and_bug_block(light, dark) -> None:
    conventions = SwiftConventions(naming_case="snake", use_computed_var=True)

    (artifact,) = SwiftEmitter().emit(light, dark, conventions, bug_warnings=["1 hex value(s) missing"])

    assert "  static var grey_750 = Color(hex: 0x404040)" in artifact.content
    assert "  static var text_primary = Color(light: .grey_750, dark: .grey_50)" in artifact.content
    assert "// REFERENCE FILE ISSUES DETECTED" in artifact.content
    assert "//  - 1 hex value(s) missing" in artifact.content


def test_kotlin_emitter_single_file_layout(light, dark) -> None:
    artifacts = _by_name(KotlinEmitter().emit(light, dark))

    assert set(artifacts) == {"Color.kt", "Colors.kt"}
    palette = artifacts["Color.kt"].content
    assert "package com.example.design" in palette
    assert "object Primitives {" in palette
    assert "    val grey750 = Color(0xFF404040)" in palette

    semantics = artifacts["Colors.kt"].content
    light_block, dark_block = semantics.split("object DarkColorTokens {")
    assert "object LightColorTokens {" in light_block
    assert "    val textPrimary = Primitives.grey750" in light_block
    assert "    val textPrimary = Primitives.grey50" in dark_block
    assert "    val textStaticWhite = Primitives.grey0" in dark_block


def test_kotlin_emitter_palette_objects() -> None:
    light = nest({"Text/Primary": color("#404040", "Colour/Grey/750")})
    conventions = KotlinConventions(primitive_style="palette-objects")

    artifacts = _by_name(KotlinEmitter().emit(light, light, conventions))

    assert "object GreyPalette {" in artifacts["Color.kt"].content
    assert "    val colorGrey750 = Color(0xFF404040)" in artifacts["Color.kt"].content
    assert "    val textPrimary = GreyPalette.colorGrey750" in artifacts["Colors.kt"].content


def test_kotlin_emitter_multi_file_categories(light, dark) -> None:
    conventions = KotlinConventions(
        semantic_categories=("fill", "text", "icon"),
        class_prefix="R",
        uses_mutable_state=True,
        uses_copy_method=True,
        uses_composition_local=True,
    )

    artifacts = _by_name(
        KotlinEmitter().emit(light, dark, conventions, scope=KotlinReferenceScope(has_semantics=True))
    )

    assert set(artifacts) == {"RFillColors.kt", "RTextColors.kt", "RIconColors.kt"}
    text = artifacts["RTextColors.kt"].content
    assert "class RTextColors(" in text
    assert "    var textPrimary by mutableStateOf(textPrimary, structuralEqualityPolicy())" in text
    assert "    fun copy(" in text
    assert "fun textLightColors() = RTextColors(" in text
    assert "    textPrimary = Primitives.grey750," in text
    assert "val LocalTextColor = compositionLocalOf { TextLightColorScheme }" in text


def test_equal_sort_keys_fall_back_to_lexical_order(fixed_now) -> None:
    entries = {
        "Text/Muted": color("#111111", "Colour/Grey/Other/500"),
        "Text/Body": color("#222222", "Colour/Grey/500"),
    }
    forward = nest(entries)
    backward = nest(dict(reversed(list(entries.items()))))

    outputs = []
    for document in (forward, backward):
        model = ColorPipeline(ScssPolicy()).run(document, document)
        assert [p.name for p in dict(model.families())["grey"]] == ["$grey-500", "$grey-other-500"]
        outputs.append(ScssEmitter(EmitContext(now=fixed_now)).render_primitives(model))

    assert outputs[0] == outputs[1]


def test_new_markers_sit_above_each_new_primitive(light, dark) -> None:
    context = EmitContext(best_practices=False)
    reference = "$grey-500: #737373;\n$grey-750: #404040;\n"
    model = ColorPipeline(ScssPolicy()).run(light, dark)

    lines = ScssEmitter(context).render_primitives(model, reference).splitlines()

    def marked(prefix: str) -> bool:
        index = next(i for i, line in enumerate(lines) if line.startswith(prefix))
        return lines[index - 1].startswith("// NEW:")

    assert marked("$grey-50:")
    assert not marked("$grey-500:")
    assert not marked("$grey-750:")
    assert marked("$grey-900:")


def test_typed_typescript_primitives_get_new_markers(light, dark) -> None:
    context = EmitContext(best_practices=False)
    reference = "export const GREY_500: string = '#737373';\n"
    model = ColorPipeline(TypeScriptPolicy()).run(light, dark)

    lines = TypeScriptEmitter(context).render_primitives(model, reference=reference).splitlines()

    grey_50 = next(i for i, line in enumerate(lines) if line.startswith("export const GREY_50:"))
    grey_500 = next(i for i, line in enumerate(lines) if line.startswith("export const GREY_500:"))
    assert lines[grey_50 - 1].startswith("// NEW:")
    assert not lines[grey_500 - 1].startswith("// NEW:")
