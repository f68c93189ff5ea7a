"""Base class for single-kind token emitters (shadow, border, motion, radius, opacity)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..conventions.classify import ReferenceSet
from ..conventions.kotlin import DEFAULT_PACKAGE
from ..models import GeneratedArtifact
from .shared import EmitContext


class CompositeEmitter(ABC):
    """Collects entries from a values document and renders one file per platform."""

    scss_filename: str = ""
    swift_filename: str = ""
    kotlin_filename: str = ""

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    @abstractmethod
    def collect(self, document: Any) -> List[Any]:
        """Return the sorted entries this emitter renders."""

    @abstractmethod
    def render_scss(self, entries: Sequence[Any]) -> str:
        """Render SCSS variables plus a ``:root`` custom-property block."""

    @abstractmethod
    def render_swift(self, entries: Sequence[Any]) -> str:
        """Render the SwiftUI source file."""

    @abstractmethod
    def render_kotlin(self, entries: Sequence[Any], package: str) -> str:
        """Render the Compose source file."""

    def count(self, document: Any) -> int:
        return len(self.collect(document))

    def emit(
        self,
        document: Any,
        platforms: Iterable[str],
        kotlin_package: str = DEFAULT_PACKAGE,
        references: Optional[ReferenceSet] = None,
    ) -> List[GeneratedArtifact]:
        entries = self.collect(document)
        if not entries:
            return []
        platforms = set(platforms)
        rendered: List[Tuple[str, str, str, str]] = []
        if "web" in platforms:
            rendered.append((self.scss_filename, self.render_scss(entries), "scss", "web"))
        if "ios" in platforms:
            rendered.append((self.swift_filename, self.render_swift(entries), "swift", "ios"))
        if "android" in platforms:
            rendered.append((self.kotlin_filename, self.render_kotlin(entries, kotlin_package), "kotlin", "android"))
        return [
            GeneratedArtifact(filename, self._mark_new(filename, content, references), fmt, platform)
            for filename, content, fmt, platform in rendered
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _mark_new(self, filename: str, content: str, references: Optional[ReferenceSet]) -> str:
        reference = references.for_artifact(filename) if references is not None else None
        return self.context.mark_new(content, reference)

    def _open(self, filename: str) -> List[str]:
        return [f"// {filename}", *self.context.header("//"), ""]

    def _open_kotlin(self, filename: str, package: str, imports: Sequence[str]) -> List[str]:
        lines = [*self._open(filename), f"package {package}", ""]
        if imports:
            lines.extend(f"import {name}" for name in imports)
            lines.append("")
        return lines


def root_block(names: Iterable[str]) -> List[str]:
    """``:root`` block re-exporting SCSS variables (given without ``$``) as custom properties."""
    lines = [":root {"]
    lines.extend(f"  --{name}: #{{${name}}};" for name in names)
    lines.extend(["}", ""])
    return lines


def finish(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def number_value(token: Any) -> Optional[float]:
    """The numeric ``$value`` of a ``number`` token, or None."""
    if not isinstance(token, Mapping) or token.get("$type") != "number":
        return None
    value = token.get("$value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def prefixed(prefix: str, name: str) -> str:
    """``prefixed("radius", "radius-sm")`` stays ``radius-sm``; ``prefixed("radius", "sm")`` is ``radius-sm``."""
    if name == prefix or name.startswith(prefix + "-"):
        return name
    return f"{prefix}-{name}"


def path_mentions(path: Sequence[str], keywords: Iterable[str]) -> bool:
    joined = " ".join(path).lower()
    return any(keyword in joined for keyword in keywords)


__all__ = ["CompositeEmitter", "finish", "number_value", "path_mentions", "prefixed", "root_block"]
