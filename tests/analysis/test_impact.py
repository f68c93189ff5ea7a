"""Tests for tokensmith.analysis.impact."""

from __future__ import annotations

from tokensmith.analysis.impact import (
    DependencyEntry,
    build_dependency_map,
    compute_impact,
    dependency_edges,
    impact_from_diffs,
    squash_name,
    target_keys,
)
from tokensmith.models import DependencyEdge, DiffRecord, ModifiedToken, RenamedToken


def test_build_dependency_map_reads_alias_targets(light) -> None:
    dep_map = build_dependency_map(light)

    assert dep_map[0] == DependencyEntry(semantic="Fill/Primary", primitive="Colour/Grey/900", hex="#1A1A1A")
    assert [entry.primitive for entry in dep_map] == [
        "Colour/Grey/900",
        "Colour/Grey/750",
        "Colour/Grey/500",
        "Colour/Grey/0",
        "Colour/Blue/600",
    ]
    assert dependency_edges(dep_map)[1] == DependencyEdge(from_token="Text/Primary", to_token="Colour/Grey/750")


def test_target_keys_and_squash_name() -> None:
    assert target_keys("Colour/Grey/750") == ["colourgrey750", "grey750", "750"]
    assert squash_name("GREY_750") == squash_name("grey-750") == "grey750"


def test_compute_impact_matches_generated_names(light) -> None:
    impact = compute_impact(build_dependency_map(light), modified=["grey-750"])

    assert len(impact) == 1
    assert impact[0].primitive_name == "Colour/Grey/750"
    assert impact[0].change_type == "modified"
    assert impact[0].affected_semantics == ("Text/Primary",)


def test_compute_impact_follows_semantic_aliases(light) -> None:
    dep_map = build_dependency_map(light) + [
        DependencyEntry(semantic="Button/Label", primitive="Text/Primary", hex="#404040")
    ]

    impact = compute_impact(dep_map, modified=["Grey750"])

    assert impact[0].affected_semantics == ("Text/Primary", "Button/Label")


def test_later_change_kinds_take_precedence(light) -> None:
    impact = compute_impact(build_dependency_map(light), modified=["grey-750"], removed=["GREY_750"])

    assert impact[0].change_type == "removed"


def test_compute_impact_without_changes_is_empty(light) -> None:
    assert compute_impact(build_dependency_map(light)) == []


def test_impact_from_diffs(light) -> None:
    record = DiffRecord(
        filename="Primitives.scss",
        added_lines=1,
        removed_lines=2,
        removed_tokens=("grey-500",),
        modified_tokens=(ModifiedToken("blue-600", "#2563eb", "#1d4ed8"),),
    )

    impact = impact_from_diffs(build_dependency_map(light), [record])

    assert [(entry.primitive_name, entry.change_type) for entry in impact] == [
        ("Colour/Grey/500", "removed"),
        ("Colour/Blue/600", "modified"),
    ]


def test_impact_from_diffs_reports_renamed_primitives_as_renamed(light) -> None:
    record = DiffRecord(
        filename="Primitives.scss",
        added_lines=1,
        removed_lines=1,
        added_tokens=("gray-750",),
        removed_tokens=("grey-750",),
        renamed_tokens=(RenamedToken("grey-750", "gray-750", "#404040"),),
    )

    impact = impact_from_diffs(build_dependency_map(light), [record])

    assert [(entry.primitive_name, entry.change_type) for entry in impact] == [("Colour/Grey/750", "renamed")]
