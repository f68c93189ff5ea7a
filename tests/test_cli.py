"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.tokens import color, nest, write_json
from tokensmith.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "diff", "a.scss", "b.scss"])
    assert args.verbose is True
    assert args.command == "diff"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["lint", "--light", "light.json", "--verbose"])
    assert args.verbose is True
    assert args.command == "lint"


def test_cli_collects_repeated_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "generate",
            "--light",
            "light.json",
            "--dark",
            "dark.json",
            "--platform",
            "web",
            "--platform",
            "ios",
            "--reference",
            "Colors.scss",
            "--reference",
            "Primitives.scss",
            "--match-existing",
        ]
    )
    assert args.platforms == ["web", "ios"]
    assert args.reference == ["Colors.scss", "Primitives.scss"]
    assert args.match_existing is True
    assert args.out is None


def test_cli_rejects_unknown_platform() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["generate", "--light", "l.json", "--dark", "d.json", "--platform", "desktop"])


def test_generate_writes_files_and_changelog(tmp_path: Path, light, dark, capsys) -> None:
    light_path = write_json(tmp_path / "light.json", light)
    dark_path = write_json(tmp_path / "dark.json", dark)
    out_dir = tmp_path / "out"
    changelog = tmp_path / "CHANGELOG.md"

    main(
        [
            "generate",
            "--light",
            str(light_path),
            "--dark",
            str(dark_path),
            "--platform",
            "web",
            "--out",
            str(out_dir),
            "--changelog",
            str(changelog),
            "--config",
            str(tmp_path),
        ]
    )

    output = capsys.readouterr().out
    assert "Wrote " in output
    assert (out_dir / "web" / "Colors.scss").exists()
    assert changelog.read_text(encoding="utf-8").startswith("## Tokensmith — ")


def test_generate_lists_artifacts_without_out_dir(tmp_path: Path, light, dark, capsys) -> None:
    main(
        [
            "generate",
            "--light",
            str(write_json(tmp_path / "light.json", light)),
            "--dark",
            str(write_json(tmp_path / "dark.json", dark)),
            "--platform",
            "ios",
            "--config",
            str(tmp_path),
        ]
    )

    assert "ios/Colors.swift" in capsys.readouterr().out.splitlines()


def test_generate_reports_malformed_documents(tmp_path: Path, dark, capsys) -> None:
    broken = tmp_path / "light.json"
    broken.write_text("{", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "generate",
                "--light",
                str(broken),
                "--dark",
                str(write_json(tmp_path / "dark.json", dark)),
                "--config",
                str(tmp_path),
            ]
        )

    assert excinfo.value.code == 1
    assert "tokensmith generate failed: light.json is not valid JSON" in capsys.readouterr().err


def test_diff_prints_token_changes(tmp_path: Path, capsys) -> None:
    reference = tmp_path / "reference.scss"
    reference.write_text("$a: #000000;\n$gone: #123456;\n", encoding="utf-8")
    generated = tmp_path / "Colors.scss"
    generated.write_text("$a: #111111;\n$fresh: #abcdef;\n", encoding="utf-8")

    main(["diff", str(reference), str(generated)])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Colors.scss: +2 -2 lines; 1 added, 1 removed, 1 modified, 0 renamed"
    assert "  + fresh" in lines
    assert "  - gone" in lines
    assert "  ~ a: #000000 -> #111111" in lines


def test_lint_exits_with_error_count(tmp_path: Path, capsys) -> None:
    document = nest({"Text/Main Bg": color("#FFFFFF"), "Text/Primary": color("#404040")})
    light_path = write_json(tmp_path / "light.json", document)

    with pytest.raises(SystemExit) as excinfo:
        main(["lint", "--light", str(light_path), "--platform", "ios", "--config", str(tmp_path)])

    captured = capsys.readouterr()
    assert excinfo.value.code == 1
    assert 'ios: error: Token "text-main-bg" does not match camel naming convention' in captured.out
    assert "1 naming error(s)" in captured.err


def test_lint_passes_clean_documents(tmp_path: Path, light, capsys) -> None:
    main(["lint", "--light", str(write_json(tmp_path / "light.json", light)), "--config", str(tmp_path)])

    assert capsys.readouterr().out.splitlines() == [
        "web: no naming issues",
        "ios: no naming issues",
        "android: no naming issues",
    ]


def test_log_file_receives_run_summary(tmp_path: Path, light, dark) -> None:
    log_file = tmp_path / "logs" / "tokensmith.log"

    main(
        [
            "--log-file",
            str(log_file),
            "generate",
            "--light",
            str(write_json(tmp_path / "light.json", light)),
            "--dark",
            str(write_json(tmp_path / "dark.json", dark)),
            "--platform",
            "web",
            "--config",
            str(tmp_path),
        ]
    )

    assert "Generation finished" in log_file.read_text(encoding="utf-8")
