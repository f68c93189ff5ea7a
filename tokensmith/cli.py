"""CLI entrypoints for tokensmith commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analysis.lint import SEVERITY_ERROR
from .config import KNOWN_PLATFORMS, ConfigError, load_config
from .errors import TokensmithError
from .logging import configure_logging
from .orchestrator import GenerationRequest, Orchestrator, load_reference_files, load_token_document


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_platform_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--platform",
        action="append",
        choices=KNOWN_PLATFORMS,
        dest="platforms",
        help="Target platform; repeat for several (defaults to the configured platforms).",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .tokensmith.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokensmith",
        description="Generate platform source code from Figma design tokens and explain what changed.",
    )
    _add_verbose_option(parser)
    parser.add_argument("--log-file", help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate color, spacing, typography and composite token files.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("--light", required=True, help="Light-mode color export (JSON).")
    generate_parser.add_argument("--dark", required=True, help="Dark-mode color export (JSON).")
    generate_parser.add_argument("--values", help="Values export with spacing and composite tokens (JSON).")
    generate_parser.add_argument("--typography", help="Typography export (JSON).")
    generate_parser.add_argument("--primitives", help="Primitive palette export used as a fallback (JSON).")
    _add_platform_option(generate_parser)
    generate_parser.add_argument(
        "--reference",
        action="append",
        default=None,
        help="Existing source file to match and diff against; repeat for several.",
    )
    generate_parser.add_argument(
        "--match-existing",
        action="store_true",
        help="Follow the conventions detected in the reference files instead of best practices.",
    )
    generate_parser.add_argument("--out", help="Directory to write generated files into.")
    generate_parser.add_argument("--changelog", help="Write a markdown changelog to this path.")
    _add_config_option(generate_parser)

    diff_parser = subparsers.add_parser(
        "diff",
        help="Classify token changes between a reference file and a regenerated file.",
    )
    _add_verbose_option(diff_parser, suppress_default=True)
    diff_parser.add_argument("reference", help="The existing file.")
    diff_parser.add_argument("generated", help="The regenerated file.")

    lint_parser = subparsers.add_parser(
        "lint",
        help="Check token names against the configured naming rules.",
    )
    _add_verbose_option(lint_parser, suppress_default=True)
    lint_parser.add_argument("--light", required=True, help="Color export to lint (JSON).")
    _add_platform_option(lint_parser)
    _add_config_option(lint_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tokensmith commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "generate":
        try:
            _run_generate(args)
        except (FileNotFoundError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except TokensmithError as exc:
            parser.exit(1, f"tokensmith generate failed: {exc}\nRun with --verbose for more details.\n")
    elif args.command == "diff":
        try:
            _run_diff(args)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
    elif args.command == "lint":
        try:
            errors = _run_lint(args)
        except (FileNotFoundError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except TokensmithError as exc:
            parser.exit(1, f"tokensmith lint failed: {exc}\n")
        if errors:
            parser.exit(1, f"{errors} naming error(s)\n")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(args: argparse.Namespace) -> None:
    config = load_config(Path(args.config))
    orchestrator = Orchestrator(config=config)

    reference_paths = [Path(path) for path in args.reference] if args.reference else list(config.references)
    best_practices = config.best_practices and not args.match_existing
    request = GenerationRequest(
        light=load_token_document(Path(args.light)),
        dark=load_token_document(Path(args.dark)),
        values=_optional_document(args.values),
        typography=_optional_document(args.typography),
        primitives=_optional_document(args.primitives),
        platforms=args.platforms or config.platforms,
        best_practices=best_practices,
        references=load_reference_files(reference_paths),
    )
    result = orchestrator.generate(request)

    out_dir = Path(args.out) if args.out else config.output_dir
    if out_dir is not None:
        written = orchestrator.write_artifacts(result, out_dir)
        print(f"Wrote {len(written)} file(s) to {_relativize(out_dir)}")
    else:
        for artifact in result.artifacts:
            print(f"{artifact.platform}/{artifact.filename}")

    for warning in result.warnings:
        print(f"warning [{warning.type}]: {warning.message}")
    for record in result.diffs:
        if record.has_changes:
            print(_format_diff_summary(record))

    if args.changelog:
        changelog = orchestrator.changelog(result, request.platforms)
        changelog_path = Path(args.changelog)
        changelog_path.write_text(changelog, encoding="utf-8")
        print(f"Changelog written to {_relativize(changelog_path)}")


def _run_diff(args: argparse.Namespace) -> None:
    reference_path = Path(args.reference)
    generated_path = Path(args.generated)
    reference = reference_path.read_text(encoding="utf-8")
    generated = generated_path.read_text(encoding="utf-8")
    record = Orchestrator().diff_files(reference, generated, generated_path.name)

    print(_format_diff_summary(record))
    for name in record.added_tokens:
        print(f"  + {name}")
    for name in record.removed_tokens:
        print(f"  - {name}")
    for token in record.modified_tokens:
        print(f"  ~ {token.name}: {token.old_value} -> {token.new_value}")
    for rename in record.renamed_tokens:
        print(f"  > {rename.old_name} -> {rename.new_name}")
    for family in record.family_renames:
        print(f"  >> {family.old_family}* -> {family.new_family}* ({len(family.members)} tokens)")


def _run_lint(args: argparse.Namespace) -> int:
    config = load_config(Path(args.config))
    orchestrator = Orchestrator(config=config)
    document = load_token_document(Path(args.light))
    platforms = args.platforms or config.platforms

    errors = 0
    for platform, results in orchestrator.lint(document, platforms).items():
        if not results:
            print(f"{platform}: no naming issues")
            continue
        for result in results:
            print(f"{platform}: {result.severity}: {result.message}")
            if result.severity == SEVERITY_ERROR:
                errors += 1
    return errors


def _format_diff_summary(record) -> str:
    return (
        f"{record.filename}: +{record.added_lines} -{record.removed_lines} lines; "
        f"{len(record.added_tokens)} added, {len(record.removed_tokens)} removed, "
        f"{len(record.modified_tokens)} modified, {len(record.renamed_tokens)} renamed"
    )


def _optional_document(path: str | None):
    return load_token_document(Path(path)) if path else None


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
