"""Tests for tokensmith.analysis.completeness."""

from __future__ import annotations

from tokensmith.analysis.completeness import (
    KOTLIN_COLORS,
    KOTLIN_TYPOGRAPHY,
    WEB_COLORS,
    check_reference_completeness,
)

KOTLIN_PRIMITIVES = "object GreyPalette {\n    val colorGrey750 = Color(0xFF404040)\n}\n"
KOTLIN_SEMANTICS = "class RTextColors(\n    val primary: Color,\n)\n"


def test_complete_references_produce_no_warnings() -> None:
    references = {
        KOTLIN_COLORS: KOTLIN_PRIMITIVES + KOTLIN_SEMANTICS,
        WEB_COLORS: "$grey-750: #404040;\n$text-primary: $grey-750;\n",
    }

    assert check_reference_completeness(references) == []


def test_kotlin_primitives_without_semantics() -> None:
    warnings = check_reference_completeness({KOTLIN_COLORS: KOTLIN_PRIMITIVES})

    assert [warning.key for warning in warnings] == [KOTLIN_COLORS]
    assert warnings[0].message.startswith("You uploaded a primitives file")


def test_kotlin_semantics_without_primitives() -> None:
    warnings = check_reference_completeness({KOTLIN_COLORS: KOTLIN_SEMANTICS})

    assert "no primitives file" in warnings[0].message


def test_typography_accessor_without_definition() -> None:
    accessor = "enum class RTypographyKey { Body }\nval current = MaterialTheme.typography\n"

    warnings = check_reference_completeness({KOTLIN_TYPOGRAPHY: accessor})

    assert [warning.key for warning in warnings] == [KOTLIN_TYPOGRAPHY]


def test_typography_definition_is_complete() -> None:
    definition = "@Immutable\nclass RTypography internal constructor(\n    val body: TextStyle,\n)\n"

    assert check_reference_completeness({KOTLIN_TYPOGRAPHY: definition}) == []


def test_web_primitives_without_semantics() -> None:
    warnings = check_reference_completeness({WEB_COLORS: "$grey-750: #404040;\n", KOTLIN_COLORS: None})

    assert [warning.key for warning in warnings] == [WEB_COLORS]
