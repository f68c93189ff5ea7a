"""Configuration loading for tokensmith (.tokensmith.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".tokensmith.yml"

KNOWN_PLATFORMS = ("web", "ios", "android")
KNOWN_NAMING_CASES = ("kebab", "camel", "snake", "screaming_snake", "pascal")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MotionConfig:
    """Duration normalization for motion tokens."""

    # Durations strictly below this value are read as seconds.
    seconds_threshold: float = 10.0


@dataclass
class NamingLintConfig:
    """Expected naming case per platform for generated token names."""

    web: str = "kebab"
    ios: str = "camel"
    android: str = "camel"
    max_depth: int = 5


@dataclass
class DetectorConfig:
    """Convention detector enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class TokensmithConfig:
    """Represents the settings defined in .tokensmith.yml."""

    root: Path
    platforms: List[str] = field(default_factory=lambda: list(KNOWN_PLATFORMS))
    best_practices: bool = True
    output_dir: Optional[Path] = None
    references: List[Path] = field(default_factory=list)
    motion: MotionConfig = field(default_factory=MotionConfig)
    naming: NamingLintConfig = field(default_factory=NamingLintConfig)
    detectors: DetectorConfig = field(default_factory=DetectorConfig)


def load_config(config_path: Path) -> TokensmithConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TokensmithConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = TokensmithConfig(root=root)

    platforms = _as_str_list(data.get("platforms"))
    if platforms:
        unknown = sorted({p for p in platforms if p not in KNOWN_PLATFORMS})
        if unknown:
            raise ConfigError(f"Unknown platforms in {CONFIG_FILENAME}: {', '.join(unknown)}")
        config.platforms = platforms

    best_practices = _as_bool(data.get("best_practices"))
    if best_practices is not None:
        config.best_practices = best_practices

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = root / output_dir

    config.references = [root / ref for ref in _as_str_list(data.get("references"))]

    motion_data = _as_dict(data.get("motion"))
    threshold = _as_float(motion_data.get("seconds_threshold"))
    if threshold is not None:
        if threshold < 0:
            raise ConfigError("motion.seconds_threshold must not be negative")
        config.motion.seconds_threshold = threshold

    naming_data = _as_dict(_as_dict(data.get("lint")).get("naming"))
    if naming_data:
        for platform in KNOWN_PLATFORMS:
            case = _as_str(naming_data.get(platform))
            if case is None:
                continue
            if case not in KNOWN_NAMING_CASES:
                raise ConfigError(f"Unknown naming case for {platform}: {case}")
            setattr(config.naming, platform, case)
        max_depth = _as_int(naming_data.get("max_depth"))
        if max_depth is not None:
            config.naming.max_depth = max_depth

    detector_data = _as_dict(data.get("detectors"))
    if detector_data:
        config.detectors.enabled = _as_str_list(detector_data.get("enabled"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
