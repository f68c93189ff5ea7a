"""Tests for tokensmith.emitters.shared."""

from __future__ import annotations

from tokensmith.emitters.shared import (
    EmitContext,
    annotate_new_declarations,
    detect_renames_in_reference,
    elide_standard,
    extract_sort_key,
    format_number,
    iso_timestamp,
    make_new_detector,
    order_categories,
    path_to_camel,
    path_to_kebab,
    path_to_pascal,
    path_to_token_name,
    rename_comment,
    split_segment,
)


def test_header_lines_carry_mode_and_reference(fixed_now) -> None:
    context = EmitContext(best_practices=False, reference_filenames=("Colors.scss", "Colors.ts"), now=fixed_now)

    assert context.header("//") == [
        "// Auto-generated from Figma Variables — DO NOT EDIT",
        "// Generated: 2026-10-18T12:00:00.000Z",
        "// Mode: match-existing",
        "// Reference: Colors.scss, Colors.ts",
    ]
    assert EmitContext(now=fixed_now).header("/*", " */")[-1] == "/* Mode: best-practices */"


def test_iso_timestamp_has_millisecond_precision(fixed_now) -> None:
    assert iso_timestamp(fixed_now.replace(microsecond=123456)) == "2026-10-18T12:00:00.123Z"


def test_naming_helpers() -> None:
    assert split_segment("Grey_Alpha") == ["grey", "alpha"]
    assert split_segment("OtherOrange") == ["other", "orange"]
    assert path_to_token_name(("Text", "Standard", "Primary")) == "text-primary"
    assert path_to_token_name(("Text", "On Brand")) == "text-on-brand"
    assert order_categories(["stroke", "zeta", "text", "alpha", "fill"]) == ["fill", "text", "stroke", "alpha", "zeta"]
    assert format_number(4.0) == "4"
    assert format_number(0.5) == "0.5"


def test_extract_sort_key_weights_every_number() -> None:
    assert extract_sort_key("grey-alpha-750_8") < extract_sort_key("grey-alpha-750_69")
    assert extract_sort_key("grey-50") < extract_sort_key("grey-750")


def test_rename_and_new_detection_only_in_match_existing_mode() -> None:
    reference = "$purple-500: #7c3aed;\n$text-primary: var(--text-primary);"

    assert detect_renames_in_reference(reference) == {"violet": "Purple"}
    assert EmitContext().renames(reference) == {}
    assert EmitContext(best_practices=False).renames(reference) == {"violet": "Purple"}

    is_new = make_new_detector(reference)
    assert not is_new("TEXT_PRIMARY")
    assert is_new("textSecondary")
    assert not EmitContext().new_detector(reference)("textSecondary")


def test_rename_comment_uses_comment_style() -> None:
    lines = rename_comment("Purple", "violet", "/*")

    assert lines[0].startswith('/* RENAMED: "Purple" in your reference file')
    assert lines[1].endswith("*/")


def test_path_helpers_elide_standard_segments() -> None:
    assert path_to_kebab(("Easing", "Standard")) == "easing"
    assert path_to_camel(("Radius", "Standard", "Large")) == "radiusLarge"
    assert path_to_pascal(("Motion", "Easing", "standard")) == "MotionEasing"
    assert elide_standard(("Standard",)) == ["Standard"]


def test_new_detector_compares_whole_names() -> None:
    is_new = make_new_detector("$grey-500: #737373;\n  static let textPrimary = Color.grey500\n")

    assert is_new("$grey-50")
    assert not is_new("--grey-500")
    assert not is_new("GREY_500")
    assert not is_new("text_primary")


def test_mark_new_flags_each_missing_declaration() -> None:
    content = "// Radius.swift\npublic enum Radius {\n  public static let sm: CGFloat = 4\n  public static let lg: CGFloat = 12\n}\n"

    marked = EmitContext(best_practices=False).mark_new(content, "static let sm = 4")

    assert marked.splitlines()[2:5] == [
        "  public static let sm: CGFloat = 4",
        "  // NEW: This token was added in Figma design tokens but does not exist in your reference file.",
        "  public static let lg: CGFloat = 12",
    ]
    assert annotate_new_declarations(content, lambda _name: False) == content
    assert EmitContext().mark_new(content, "static let sm = 4") == content
