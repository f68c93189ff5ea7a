"""Tests for tokensmith.tokens.walker."""

from __future__ import annotations

from tests._fixtures.tokens import color, nest, number

from tokensmith.tokens.walker import (
    collect_unknown_token_types,
    get_token_at_path,
    looks_like_token_document,
    walk_color_tokens,
    walk_tokens,
    walk_tokens_of_kind,
)


def test_walk_tokens_yields_paths_in_document_order() -> None:
    document = nest(
        {
            "Text/Primary": color("#404040"),
            "Text/Secondary": color("#737373"),
            "Spacing/4": number(4),
        }
    )

    paths = [path for path, _token in walk_tokens(document)]

    assert paths == [("Text", "Primary"), ("Text", "Secondary"), ("Spacing", "4")]


def test_walk_tokens_skips_metadata_keys_and_non_mapping_values() -> None:
    document = {
        "$schema": "https://example.com/schema.json",
        "$extensions": {"Hidden": color("#000000")},
        "Broken": "not a group",
        "Text": {"Primary": color("#404040"), "Note": 3},
    }

    paths = [path for path, _token in walk_tokens(document)]

    assert paths == [("Text", "Primary")]


def test_walk_tokens_does_not_descend_into_token_leaves() -> None:
    token = color("#404040")
    token["nested"] = color("#FFFFFF")

    assert walk_tokens({"Text": token}) == [(("Text",), token)]


def test_kind_filters() -> None:
    document = nest({"Text/Primary": color("#404040"), "Spacing/4": number(4)})

    assert [path for path, _ in walk_color_tokens(document)] == [("Text", "Primary")]
    assert [path for path, _ in walk_tokens_of_kind(document, "number")] == [("Spacing", "4")]


def test_get_token_at_path_checks_kind() -> None:
    document = nest({"Text/Primary": color("#404040")})

    assert get_token_at_path(document, ["Text", "Primary"]) is not None
    assert get_token_at_path(document, ["Text", "Primary"], "color") is not None
    assert get_token_at_path(document, ["Text", "Primary"], "number") is None
    assert get_token_at_path(document, ["Text"]) is None
    assert get_token_at_path(document, ["Text", "Missing"]) is None


def test_collect_unknown_token_types_counts_unrecognised_kinds() -> None:
    document = {
        "a": {"$type": "color", "$value": {}},
        "b": {"$type": "sparkle", "$value": 1},
        "c": {"$type": "sparkle", "$value": 2},
    }

    assert collect_unknown_token_types(document) == {"sparkle": 2}


def test_looks_like_token_document() -> None:
    assert looks_like_token_document(nest({"Text/Primary": color("#404040")}), "color")
    assert not looks_like_token_document({"Spacing": {"4": number(4)}}, "color")
    assert not looks_like_token_document(["not", "a", "mapping"], "color")
