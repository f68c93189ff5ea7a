"""Tests for tokensmith.tokens.colors."""

from __future__ import annotations

from tests._fixtures.tokens import color

from tokensmith.tokens.colors import (
    color_components,
    figma_to_hex,
    figma_to_kotlin_hex,
    figma_to_string_hex,
    figma_to_swift_hex,
    hex_to_components,
    resolve_color_value,
)


def test_figma_to_hex_appends_alpha_only_when_translucent() -> None:
    assert figma_to_hex(1, 0, 0) == "#ff0000"
    assert figma_to_hex(1, 0, 0, 0.5) == "#ff000080"
    assert figma_to_string_hex(1, 0, 0) == "#FF0000"


def test_components_are_clamped() -> None:
    assert figma_to_hex(1.4, -0.2, 0) == "#ff0000"


def test_native_literals_use_platform_byte_order() -> None:
    assert figma_to_swift_hex(1, 0, 0) == "0xFF0000"
    assert figma_to_swift_hex(1, 0, 0, 0.5) == "0xFF000080"
    assert figma_to_kotlin_hex(1, 0, 0) == "0xFFFF0000"
    assert figma_to_kotlin_hex(1, 0, 0, 0.5) == "0x80FF0000"


def test_color_components_rejects_malformed_payloads() -> None:
    assert color_components({"components": [1, 0, 0], "alpha": 1}) == (1.0, 0.0, 0.0, 1.0)
    assert color_components({"components": [1, 0]}) is None
    assert color_components({"components": "abc"}) is None
    assert color_components({"components": [1, 0, 0], "alpha": True}) is None
    assert color_components("#ff0000") is None


def test_resolve_color_value_prefers_exported_hex_for_opaque_colors() -> None:
    assert resolve_color_value(color("#404040")) == "#404040"


def test_resolve_color_value_rebuilds_translucent_colors() -> None:
    assert resolve_color_value(color("#000000", alpha=0.5)) == "#00000080"


def test_resolve_color_value_without_hex_field_is_none() -> None:
    token = {"$type": "color", "$value": {"components": [0, 0, 0], "alpha": 1}}

    assert resolve_color_value(token) is None


def test_hex_to_components_expands_short_form() -> None:
    assert hex_to_components("#fff") == (1.0, 1.0, 1.0, 1.0)
    assert hex_to_components("#00000080")[3] == 128 / 255
    assert hex_to_components("#12") is None
    assert hex_to_components("#zzzzzz") is None
