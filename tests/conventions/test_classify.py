"""Tests for tokensmith.conventions.classify."""

from __future__ import annotations

from tokensmith.conventions.classify import (
    COLORS_SCSS,
    COLORS_TS,
    KOTLIN_COLORS,
    PRIMITIVES_CSS,
    PRIMITIVES_SCSS,
    PRIMITIVES_TS,
    SPACING_SCSS,
    SWIFT_COLORS,
    TYPOGRAPHY_KOTLIN,
    TYPOGRAPHY_KOTLIN_ACCESSOR,
    TYPOGRAPHY_SCSS,
    TYPOGRAPHY_SWIFT,
    ReferenceFile,
    classify_kotlin_references,
    classify_kotlin_typography_references,
    classify_reference_file,
    classify_references,
)


def test_classify_reference_file_by_name_and_content() -> None:
    assert classify_reference_file("styles/Primitives.scss", "$grey-750: #404040;") == PRIMITIVES_SCSS
    assert classify_reference_file("Colors.scss", "$text-primary: var(--text-primary);") == COLORS_SCSS
    assert classify_reference_file("tokens.css", ":root { --grey-750: #404040; }") == PRIMITIVES_CSS
    assert classify_reference_file("Spacing.scss", "$spacing-4: 4px;") == SPACING_SCSS
    assert classify_reference_file("Type.scss", "@mixin font-body { font-size: 1rem; }") == TYPOGRAPHY_SCSS
    assert classify_reference_file("palette.ts", "export const GREY_750 = '#404040';") == PRIMITIVES_TS
    assert classify_reference_file("Colors.ts", "export const TEXT_PRIMARY = 'var(--text-primary)';") == COLORS_TS
    assert classify_reference_file("Colors.swift", "static let textPrimary = Color.grey750") == SWIFT_COLORS
    assert classify_reference_file("AppFont.swift", "enum AppFont { case body }") == TYPOGRAPHY_SWIFT
    assert classify_reference_file("Color.kt", "val Grey750 = Color(0xFF404040)") == KOTLIN_COLORS
    assert classify_reference_file("Type.kt", "val body = TextStyle(fontSize = 16.sp)") == TYPOGRAPHY_KOTLIN
    assert (
        classify_reference_file(
            "LocalTypography.kt",
            "enum class RTypo { BODY }\nMaterialTheme.rTypography.body\nTextStyle",
        )
        == TYPOGRAPHY_KOTLIN_ACCESSOR
    )
    assert classify_reference_file("notes.txt", "anything") is None


def test_reference_set_groups_files_and_matches_artifacts() -> None:
    references = classify_references(
        {
            "Primitives.scss": "$grey-750: #404040;",
            "legacy/Colors.scss": "$text-primary: var(--text-primary);",
            "Color.kt": "object AppColorsLight {\n    val textPrimary = Color(0xFF404040)\n}",
            "README.md": "# docs",
        }
    )

    assert references
    assert references.text(PRIMITIVES_SCSS) == "$grey-750: #404040;"
    assert references.text(SWIFT_COLORS) is None
    assert references.filenames(COLORS_SCSS) == ["legacy/Colors.scss"]
    assert references.all_filenames()[-1] == "README.md"
    assert references.for_artifact("Colors.scss") == "$text-primary: var(--text-primary);"
    assert references.for_artifact("Colors.kt") == references.text(KOTLIN_COLORS)
    assert references.for_artifact("RFillColors.kt") == references.text(KOTLIN_COLORS)
    assert references.for_artifact("Typography.swift") is None


def test_empty_reference_set_is_falsy() -> None:
    assert not classify_references([])


def test_kotlin_scope_detects_primitives_only_reference() -> None:
    scope = classify_kotlin_references(
        [ReferenceFile("Color.kt", "object Primitives {\n    val grey750 = Color(0xFF404040)\n}")]
    )

    assert scope.has_primitives
    assert not scope.has_semantics
    assert scope.generate_primitives
    assert not scope.generate_semantics
    assert scope.warning is None


def test_kotlin_scope_detects_category_classes() -> None:
    scope = classify_kotlin_references(
        [ReferenceFile("RFillColors.kt", "class RFillColors(primary: Color)\nclass RTextColors(primary: Color)")]
    )

    assert scope.has_semantics
    assert scope.semantic_categories == ("fill", "text")
    assert scope.class_prefix == "R"
    assert not scope.generate_primitives


def test_kotlin_scope_warns_when_no_pattern_matches() -> None:
    scope = classify_kotlin_references(
        [ReferenceFile("Theme.kt", "class Theme {\n    val accent = Color(0xFF404040)\n}")]
    )

    assert scope.warning is not None
    assert "no color class pattern was detected" in scope.warning
    assert scope.generate_primitives and scope.generate_semantics


def test_kotlin_typography_scope_separates_definition_and_accessor() -> None:
    definition = ReferenceFile(
        "src/RTypography.kt",
        "@Immutable\nclass RTypography internal constructor(\n    val body_r: TextStyle,\n)",
    )
    accessor = ReferenceFile(
        "src/LocalTypography.kt",
        "enum class RTypo { BODY_R }\nval style = MaterialTheme.rTypography.body_r",
    )

    scope = classify_kotlin_typography_references([definition, accessor])

    assert scope.has_definition and scope.has_accessor
    assert scope.definition_filename == "RTypography.kt"
    assert scope.accessor_filename == "LocalTypography.kt"
    assert scope.accessor_class_name == "RTypo"
    assert scope.accessor_container_ref == "rTypography"
    assert scope.generate_definition and scope.generate_accessor


def test_kotlin_typography_scope_defaults_without_matches() -> None:
    scope = classify_kotlin_typography_references([ReferenceFile("Color.kt", "val x = Color(0xFF000000)")])

    assert not scope.has_definition
    assert scope.generate_definition
    assert not scope.generate_accessor
