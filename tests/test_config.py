"""Tests for tokensmith.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tokensmith.config import ConfigError, TokensmithConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, TokensmithConfig)
    assert config.root == tmp_path.resolve()
    assert config.platforms == ["web", "ios", "android"]
    assert config.best_practices is True
    assert config.output_dir is None
    assert config.references == []
    assert config.motion.seconds_threshold == 10.0
    assert config.naming.web == "kebab"
    assert config.naming.max_depth == 5
    assert config.detectors.enabled == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".tokensmith.yml"
    config_file.write_text(
        """
platforms: [web, android]
best_practices: "no"
output_dir: generated
references:
  - design/Primitives.scss
  - design/Colors.scss
motion:
  seconds_threshold: 5
lint:
  naming:
    android: snake
    max_depth: 4
detectors:
  enabled: [web, kotlin]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.platforms == ["web", "android"]
    assert config.best_practices is False
    assert config.output_dir == tmp_path.resolve() / "generated"
    assert config.references == [
        tmp_path.resolve() / "design/Primitives.scss",
        tmp_path.resolve() / "design/Colors.scss",
    ]
    assert config.motion.seconds_threshold == 5.0
    assert (config.naming.web, config.naming.android, config.naming.max_depth) == ("kebab", "snake", 4)
    assert config.detectors.enabled == ["web", "kotlin"]


def test_load_config_accepts_a_sibling_path(tmp_path: Path) -> None:
    (tmp_path / ".tokensmith.yml").write_text("platforms: ios\n", encoding="utf-8")

    config = load_config(tmp_path / "light.json")

    assert config.platforms == ["ios"]


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".tokensmith.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).platforms == ["web", "ios", "android"]


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "must contain a mapping"),
        ("platforms: [web, desktop]\n", "Unknown platforms in .tokensmith.yml: desktop"),
        ("motion:\n  seconds_threshold: -1\n", "must not be negative"),
        ("lint:\n  naming:\n    ios: title\n", "Unknown naming case for ios: title"),
        ("platforms: [web\n", "Failed to parse .tokensmith.yml"),
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".tokensmith.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
