"""CLI entrypoints for l10n-extract commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import FatalInputError
from .logging import configure_logging
from .orchestrator import ExtractionResult, Extractor
from .project.pubspec import load_pubspec


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Show debug output, tagged with the component that produced it.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only show warnings and errors; the summary is still printed.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the Flutter project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="l10n-extract",
        description="Extract hardcoded Flutter strings into ARB files for localization.",
    )
    _add_verbosity_options(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Scan Dart sources, emit the ARB template and l10n.yaml.",
    )
    _add_verbosity_options(extract_parser, suppress_default=True)
    _add_path_argument(extract_parser)
    extract_parser.add_argument(
        "-i",
        "--input",
        dest="input_dir",
        default=None,
        help="Directory to scan, relative to the project root (default: lib).",
    )
    extract_parser.add_argument(
        "-o",
        "--output",
        dest="output_dir",
        default=None,
        help="Directory for localization files (default: lib/l10n).",
    )
    extract_parser.add_argument(
        "--template-arb",
        default=None,
        help="Template ARB file name (default: app_en.arb).",
    )
    extract_parser.add_argument(
        "-c",
        "--class-name",
        default=None,
        help="Name of the generated localization class (default: AppLocalizations).",
    )
    extract_parser.add_argument(
        "--locale",
        default=None,
        help="Locale written to @@locale in the template ARB (default: en).",
    )
    extract_parser.add_argument(
        "--import-uri",
        default=None,
        help="Import URI of the generated localizations module; derived from pubspec.yaml when omitted.",
    )
    extract_parser.add_argument(
        "-r",
        "--replace",
        action="store_true",
        default=None,
        help="Replace hardcoded strings with localization calls.",
    )
    extract_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview source rewrites as unified diffs without writing any files.",
    )
    extract_parser.add_argument(
        "--no-check-deps",
        dest="check_dependencies",
        action="store_false",
        default=None,
        help="Skip the pubspec.yaml dependency check.",
    )
    extract_parser.add_argument(
        "--no-gen",
        dest="run_generator",
        action="store_false",
        default=None,
        help="Do not run `flutter gen-l10n` after replacing strings.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Report localization dependencies missing from pubspec.yaml.",
    )
    _add_verbosity_options(check_parser, suppress_default=True)
    _add_path_argument(check_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for l10n-extract commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    extractor = Extractor()

    if args.command == "extract":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            config = load_config(Path(args.path)).with_overrides(
                input_dir=args.input_dir,
                output_dir=args.output_dir,
                template_arb=args.template_arb,
                class_name=args.class_name,
                locale=args.locale,
                import_uri=args.import_uri,
                replace=True if dry_run else args.replace,
                dry_run=dry_run,
                check_dependencies=args.check_dependencies,
                run_generator=args.run_generator,
            )
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        try:
            result = extractor.run(config)
        except FatalInputError as exc:
            parser.exit(1, f"Error: {exc}\n")
        except Exception as exc:  # pragma: no cover - unexpected failure
            parser.exit(1, f"l10n-extract failed: {exc}\nRun with --verbose for more details.\n")
        _print_summary(result)
    elif args.command == "check":
        try:
            pubspec = load_pubspec(Path(args.path).expanduser().resolve())
        except FatalInputError as exc:
            parser.exit(1, f"Error: {exc}\n")
        missing = extractor.report_dependencies(pubspec)
        if missing:
            parser.exit(1, "Missing localization dependencies. Run: flutter pub get after adding them.\n")
        print("All localization dependencies present")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _print_summary(result: ExtractionResult) -> None:
    if result.dry_run:
        for path, diff in sorted(result.diffs.items()):
            print(diff or f"(no diff for {path})")
    print(
        f"Scanned {result.files_scanned} files, "
        f"{'would modify' if result.dry_run else 'modified'} {len(result.files_modified)}, "
        f"found {result.resource_count} localizable strings"
    )
    if result.arb_path is not None:
        print(f"ARB template written to {_relativize(result.arb_path)}")
    if result.l10n_config_path is not None:
        print(f"Generator config written to {_relativize(result.l10n_config_path)}")
    if result.failed_files:
        print(f"Skipped {len(result.failed_files)} unreadable or unwritable files")
    if result.generator is not None and not result.generator.ok:
        print('Run "flutter gen-l10n" manually to generate the localizations class')


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
