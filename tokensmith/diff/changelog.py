"""Markdown changelog for a generation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import DiffRecord, GeneratedArtifact, ImpactEntry
from .lines import compute_line_diff, diff_stats, split_lines

MAX_ITEMS = 10
CHANGELOG_TEMPLATE = "changelog.md.j2"
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

PLATFORM_LABELS = {
    "web": "Web (SCSS · CSS · TypeScript)",
    "ios": "iOS (Swift)",
    "android": "Android (Kotlin)",
}


@dataclass
class ChangelogSection:
    title: str
    items: List[str] = field(default_factory=list)


def generate_changelog(
    artifacts: Sequence[GeneratedArtifact],
    platforms: Iterable[str],
    diffs: Sequence[DiffRecord] = (),
    coverage: Optional[Mapping[str, Any]] = None,
    mismatches: Sequence[Any] = (),
    impact: Sequence[ImpactEntry] = (),
    now: Optional[datetime] = None,
    templates_dir: Optional[Path] = None,
) -> str:
    """Render the changelog markdown; an empty run yields an empty string.

    ``coverage`` maps filenames to objects exposing ``covered``, ``total``,
    ``coverage_percent``, ``orphaned`` and ``unimplemented``; ``mismatches``
    items expose ``token_name`` and ``values`` (``platform``/``normalized_hex``).
    """
    if not artifacts:
        return ""
    now = now or datetime.now(timezone.utc)
    sections = build_sections(artifacts, diffs, coverage or {}, mismatches, impact)
    env = _create_env(templates_dir)
    return env.get_template(CHANGELOG_TEMPLATE).render(
        date=f"{now:%b} {now.day}, {now.year}",
        platform=", ".join(PLATFORM_LABELS.get(platform, platform) for platform in platforms),
        sections=[section for section in sections if section.items],
    )


def build_sections(
    artifacts: Sequence[GeneratedArtifact],
    diffs: Sequence[DiffRecord],
    coverage: Mapping[str, Any],
    mismatches: Sequence[Any],
    impact: Sequence[ImpactEntry],
) -> List[ChangelogSection]:
    changes = ChangelogSection("Changes")
    if any(artifact.reference_content is not None for artifact in artifacts):
        for artifact in artifacts:
            if artifact.reference_content is None:
                changes.items.append(f"{artifact.filename}: new file ({len(split_lines(artifact.content))} lines)")
                continue
            stats = diff_stats(compute_line_diff(artifact.reference_content, artifact.content))
            changes.items.append(
                f"{artifact.filename}: +{stats.added} added, -{stats.removed} removed, {stats.unchanged} unchanged"
            )

    added = ChangelogSection("New tokens")
    removed = ChangelogSection("Removed tokens")
    modified = ChangelogSection("Modified tokens")
    families = ChangelogSection("Family renames")
    for record in diffs:
        added.items.extend(_capped([f"`{name}` ({record.filename})" for name in record.added_tokens], record.filename))
        removed.items.extend(
            _capped([f"`{name}` ({record.filename})" for name in record.removed_tokens], record.filename)
        )
        modified.items.extend(
            _capped(
                [
                    f"`{mod.name}`: {mod.old_value} → {mod.new_value} ({record.filename})"
                    for mod in record.modified_tokens
                ],
                record.filename,
            )
        )
        families.items.extend(
            f"{family.old_family} → {family.new_family} ({len(family.members)} tokens) ({record.filename})"
            for family in record.family_renames
        )

    grouped = {
        member.old_name for record in diffs for family in record.family_renames for member in family.members
    }
    renames = ChangelogSection(
        "Possible renames",
        _capped(
            [
                f"`{rename.old_name}` → `{rename.new_name}` ({record.filename})"
                for record in diffs
                for rename in record.renamed_tokens
                if rename.old_name not in grouped
            ]
        ),
    )

    coverage_section = ChangelogSection("Token coverage")
    for filename, result in coverage.items():
        line = f"{filename}: {result.covered}/{result.total} ({result.coverage_percent:.1f}%)"
        if result.orphaned:
            line += f" · {len(result.orphaned)} orphaned"
        if result.unimplemented:
            line += f" · {len(result.unimplemented)} unimplemented"
        coverage_section.items.append(line)

    mismatch_section = ChangelogSection(
        "Cross-platform mismatches",
        _capped(
            [
                f"`{mismatch.token_name}`: "
                + ", ".join(f"{value.platform}={value.normalized_hex}" for value in mismatch.values)
                for mismatch in mismatches
            ]
        ),
    )

    impact_section = ChangelogSection(
        "Impact analysis",
        [
            f"`{entry.primitive_name}` ({entry.change_type}) → {len(entry.affected_semantics)} semantic tokens"
            for entry in impact
            if entry.affected_semantics
        ][:MAX_ITEMS],
    )

    return [
        changes,
        added,
        removed,
        modified,
        families,
        renames,
        coverage_section,
        mismatch_section,
        impact_section,
    ]


def _capped(items: List[str], filename: Optional[str] = None) -> List[str]:
    if len(items) <= MAX_ITEMS:
        return items
    more = f"… +{len(items) - MAX_ITEMS} more"
    if filename:
        more += f" ({filename})"
    return items[:MAX_ITEMS] + [more]


def _create_env(templates_dir: Optional[Path]) -> Environment:
    directories = [str(templates_dir)] if templates_dir else []
    directories.append(str(DEFAULT_TEMPLATES_DIR))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = ["ChangelogSection", "PLATFORM_LABELS", "build_sections", "generate_changelog"]
