"""Tests for tokensmith.diff.changelog."""

from __future__ import annotations

from tokensmith.analysis.coverage import PlatformMismatch, PlatformValue, TokenCoverage
from tokensmith.diff.changelog import MAX_ITEMS, build_sections, generate_changelog
from tokensmith.models import DiffRecord, FamilyRename, GeneratedArtifact, ImpactEntry, ModifiedToken, RenamedToken


def _artifact(reference: str | None = "$a: 1;\n") -> GeneratedArtifact:
    return GeneratedArtifact(
        filename="Colors.scss",
        content="$a: 1;\n$b: 2;\n",
        format="scss",
        platform="web",
        reference_content=reference,
    )


def test_generate_changelog_renders_populated_sections(fixed_now) -> None:
    record = DiffRecord(
        filename="Colors.scss",
        added_lines=1,
        removed_lines=0,
        added_tokens=("b",),
        modified_tokens=(ModifiedToken("c", "#000000", "#111111"),),
    )
    impact = [ImpactEntry("Colour/Grey/750", "modified", ("Text/Primary", "Button/Label"))]

    changelog = generate_changelog([_artifact()], ["web"], diffs=[record], impact=impact, now=fixed_now)

    assert changelog.startswith("## Tokensmith — Oct 18, 2026\n")
    assert "**Platform:** Web (SCSS · CSS · TypeScript)" in changelog
    assert "### Changes\n- Colors.scss: +1 added, -0 removed, 1 unchanged\n" in changelog
    assert "- `b` (Colors.scss)" in changelog
    assert "- `c`: #000000 → #111111 (Colors.scss)" in changelog
    assert "- `Colour/Grey/750` (modified) → 2 semantic tokens" in changelog
    assert "### Removed tokens" not in changelog


def test_generate_changelog_without_artifacts_is_empty(fixed_now) -> None:
    assert generate_changelog([], ["web"], now=fixed_now) == ""


def test_changes_section_reports_new_files() -> None:
    sections = build_sections([_artifact(), _artifact(reference=None)], [], {}, [], [])

    assert sections[0].items[1] == "Colors.scss: new file (2 lines)"


def test_changes_section_is_empty_without_references() -> None:
    sections = build_sections([_artifact(reference=None)], [], {}, [], [])

    assert sections[0].items == []


def test_long_token_lists_are_capped() -> None:
    names = tuple(f"token-{index}" for index in range(MAX_ITEMS + 3))
    record = DiffRecord(filename="Colors.scss", added_lines=13, removed_lines=0, added_tokens=names)

    added = build_sections([_artifact()], [record], {}, [], [])[1]

    assert len(added.items) == MAX_ITEMS + 1
    assert added.items[-1] == "… +3 more (Colors.scss)"


def test_family_members_are_not_repeated_as_renames() -> None:
    members = tuple(RenamedToken(f"grey-{n}", f"gray-{n}", "#000000") for n in (50, 500, 750))
    loose = RenamedToken("brand", "brand-primary", "#2563eb")
    record = DiffRecord(
        filename="Primitives.scss",
        added_lines=4,
        removed_lines=4,
        renamed_tokens=members + (loose,),
        family_renames=(FamilyRename("grey", "gray", members),),
    )

    sections = {section.title: section for section in build_sections([_artifact()], [record], {}, [], [])}

    assert sections["Family renames"].items == ["grey → gray (3 tokens) (Primitives.scss)"]
    assert sections["Possible renames"].items == ["`brand` → `brand-primary` (Primitives.scss)"]


def test_coverage_and_mismatch_sections() -> None:
    coverage = {"Colors.scss": TokenCoverage(3, 1, ("old",), ("new", "newer"), 100 / 3)}
    mismatch = PlatformMismatch(
        "grey-750",
        (PlatformValue("web", "#404040", "#404040"), PlatformValue("ios", "Color(hex: 0x404041)", "#404041")),
    )

    sections = {
        section.title: section for section in build_sections([_artifact()], [], coverage, [mismatch], [])
    }

    assert sections["Token coverage"].items == ["Colors.scss: 1/3 (33.3%) · 1 orphaned · 2 unimplemented"]
    assert sections["Cross-platform mismatches"].items == ["`grey-750`: web=#404040, ios=#404041"]
