"""Convention detectors and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, Sequence, Set

from .base import ConventionDetector
from .kotlin import KotlinConventionDetector, KotlinConventions
from .swift import SwiftConventionDetector, SwiftConventions
from .typography import (
    KotlinTypographyDetector,
    ScssTypographyDetector,
    SwiftTypographyDetector,
    TsTypographyDetector,
    TypographyConventions,
    detect_typography_conventions,
)
from .web import WebConventionDetector, WebConventions, scss_var_to_ts_name

_ENTRY_POINT_GROUP = "tokensmith.detectors"

_BUILTIN_FACTORIES: Dict[str, Callable[[], ConventionDetector]] = {
    "web": WebConventionDetector,
    "swift": SwiftConventionDetector,
    "kotlin": KotlinConventionDetector,
    "typography-scss": ScssTypographyDetector,
    "typography-ts": TsTypographyDetector,
    "typography-swift": SwiftTypographyDetector,
    "typography-kotlin": KotlinTypographyDetector,
}

# Shorthand accepted in configuration for all four typography detectors.
_ALIASES: Dict[str, Sequence[str]] = {
    "typography": ("typography-scss", "typography-ts", "typography-swift", "typography-kotlin"),
}


def discover_detectors(enabled: Sequence[str] | None = None) -> Dict[str, ConventionDetector]:
    """Return instantiated detectors keyed by name, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = set()
        for name in enabled:
            key = name.lower()
            enabled_set.update(_ALIASES.get(key, (key,)))

    detectors: Dict[str, ConventionDetector] = {}

    def _add(name: str, factory: Callable[[], ConventionDetector]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in detectors:
            return
        instance = factory()
        if not isinstance(instance, ConventionDetector):
            raise TypeError(f"Detector factory for '{name}' did not return a ConventionDetector instance")
        detectors[key] = instance
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - broken third-party plugin
            raise RuntimeError(f"Failed to load detector entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> ConventionDetector:
            return _coerce_detector(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown detectors requested: {missing}")

    return detectors


def _coerce_detector(obj: object) -> ConventionDetector:
    if isinstance(obj, ConventionDetector):
        return obj
    if isinstance(obj, type) and issubclass(obj, ConventionDetector):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, ConventionDetector):
            return instance
    raise TypeError("Detector entry point must be a ConventionDetector subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ConventionDetector",
    "KotlinConventions",
    "SwiftConventions",
    "TypographyConventions",
    "WebConventions",
    "detect_typography_conventions",
    "discover_detectors",
    "scss_var_to_ts_name",
]
