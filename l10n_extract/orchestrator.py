"""Pipeline orchestration for extraction and rewrite runs."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from .config import ExtractorConfig, as_mapping
from .engine.ignore import IgnoreFilter
from .engine.keys import KeyGenerator
from .engine.rewriter import Replacement, RewriteOutcome, Rewriter
from .engine.scanner import LiteralScanner
from .engine.variables import build_placeholders, describe, detect_variables, unescape_literal
from .errors import InputNotFoundError, ManifestNotFoundError, ManifestParseError
from .logging import get_logger
from .project.gen_l10n import GeneratorOutcome, GeneratorRunner
from .project.pubspec import (
    Pubspec,
    import_statement,
    load_pubspec,
    missing_dependencies,
    resolve_import_uri,
)
from .source_scanner import SourceScanner
from .stores.arb import write_arb
from .stores.generator_config import (
    L10N_CONFIG_FILENAME,
    GeneratorConfig,
    write_generator_config,
)
from .stores.resource_table import ResourceTable


@dataclass
class ScanState:
    """Mutable state owned by a single extraction run."""

    table: ResourceTable = field(default_factory=ResourceTable)
    keys: KeyGenerator = field(init=False)
    modified_files: Set[str] = field(default_factory=set)
    failed_files: List[str] = field(default_factory=list)
    diffs: Dict[str, str] = field(default_factory=dict)
    files_scanned: int = 0

    def __post_init__(self) -> None:
        self.keys = KeyGenerator(self.table)


@dataclass
class ExtractionResult:
    """Summary of an extraction run."""

    files_scanned: int
    files_modified: List[str]
    failed_files: List[str]
    resource_count: int
    arb_path: Optional[Path] = None
    l10n_config_path: Optional[Path] = None
    missing_dependencies: List[str] = field(default_factory=list)
    diffs: Dict[str, str] = field(default_factory=dict)
    generator: Optional[GeneratorOutcome] = None
    dry_run: bool = False


class Extractor:
    """Coordinates scanning, key assignment, rewriting and emission."""

    def __init__(
        self,
        literal_scanner: LiteralScanner | None = None,
        source_scanner: SourceScanner | None = None,
        generator_runner: GeneratorRunner | None = None,
        ignore_filter: IgnoreFilter | None = None,
    ) -> None:
        self.literal_scanner = literal_scanner or LiteralScanner()
        self.source_scanner = source_scanner or SourceScanner()
        self._generator_runner = generator_runner
        self._ignore_filter = ignore_filter
        self.logger = get_logger("orchestrator")

    def run(self, config: ExtractorConfig) -> ExtractionResult:
        """Scan the configured input, emit resources and optionally rewrite sources."""
        root = config.root.expanduser().resolve()
        config = config.with_overrides(root=root)
        input_path = config.input_path
        if not input_path.is_dir():
            raise InputNotFoundError(str(input_path))
        self.logger.debug("Effective configuration: %s", as_mapping(config))

        pubspec: Optional[Pubspec] = None
        missing: List[str] = []
        if config.check_dependencies:
            pubspec = load_pubspec(root)
            missing = self.report_dependencies(pubspec)

        rewriter = None
        if config.replace:
            rewriter = Rewriter(config.class_name, self._resolve_import(config, root, pubspec))

        ignore_filter = self._ignore_filter or IgnoreFilter(config.ignore_patterns)
        exclude = list(config.exclude_paths)
        exclude.append(f"{config.output_dir.rstrip('/')}/generated/")

        self.logger.info("Scanning for Dart files in %s", input_path)
        sources = self.source_scanner.scan(root, input_path, exclude=exclude)
        self.logger.debug("Discovered %d Dart files", len(sources))

        state = ScanState()
        for source in sources:
            self.process_file(
                root / source.path,
                state,
                rewriter=rewriter,
                ignore_filter=ignore_filter,
                dry_run=config.dry_run,
                display_path=source.path,
            )

        result = ExtractionResult(
            files_scanned=state.files_scanned,
            files_modified=sorted(state.modified_files),
            failed_files=list(state.failed_files),
            resource_count=len(state.table),
            missing_dependencies=missing,
            diffs=dict(state.diffs),
            dry_run=config.dry_run,
        )

        if len(state.table) == 0:
            self.logger.info("No hardcoded strings found.")
            return result

        self.logger.info("Found %d unique localizable strings", len(state.table))
        if config.dry_run:
            self.logger.info("Dry run: skipping %s and %s", config.arb_path, L10N_CONFIG_FILENAME)
            return result

        result.arb_path = write_arb(state.table, config.arb_path, locale=config.locale)
        self.logger.info("Generated: %s", result.arb_path)
        result.l10n_config_path = write_generator_config(
            GeneratorConfig(
                arb_dir=config.output_dir.rstrip("/"),
                template_arb_file=config.template_arb,
                output_class=config.class_name,
            ),
            root / L10N_CONFIG_FILENAME,
        )
        self.logger.info("Generated: %s", result.l10n_config_path)

        if config.replace:
            self.logger.info(
                "Updated %d files with localization calls", len(state.modified_files)
            )
            if config.run_generator:
                runner = self._generator_runner or GeneratorRunner(
                    timeout=config.generator_timeout
                )
                result.generator = runner.run(root)
        return result

    def process_file(
        self,
        path: Path,
        state: ScanState,
        *,
        rewriter: Rewriter | None = None,
        ignore_filter: IgnoreFilter | None = None,
        dry_run: bool = False,
        display_path: str | None = None,
    ) -> bool:
        """Process one file; I/O failures are logged and recorded, never raised."""
        label = display_path or str(path)
        try:
            with path.open(encoding="utf-8", newline="") as handle:
                content = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Skipping %s: could not read file (%s)", label, exc)
            state.failed_files.append(label)
            return False
        state.files_scanned += 1

        outcome = self.process_source(
            content, state, rewriter=rewriter, ignore_filter=ignore_filter
        )
        if outcome.skipped_const:
            self.logger.warning(
                "%s: left %d literals inside constant expressions unchanged",
                label,
                outcome.skipped_const,
            )
        if rewriter is None or not outcome.changed:
            return False
        if outcome.import_skipped_part:
            self.logger.warning(
                "%s is a part file; add the localizations import to its library", label
            )

        if dry_run:
            state.diffs[label] = "".join(
                difflib.unified_diff(
                    content.splitlines(keepends=True),
                    outcome.content.splitlines(keepends=True),
                    fromfile=f"a/{label}",
                    tofile=f"b/{label}",
                )
            )
            state.modified_files.add(label)
            return True

        try:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(outcome.content)
        except OSError as exc:
            self.logger.warning("Skipping %s: could not write file (%s)", label, exc)
            state.failed_files.append(label)
            return False
        self.logger.debug("Rewrote %d literals in %s", outcome.replaced, label)
        state.modified_files.add(label)
        return True

    def process_source(
        self,
        content: str,
        state: ScanState,
        *,
        rewriter: Rewriter | None = None,
        ignore_filter: IgnoreFilter | None = None,
    ) -> RewriteOutcome:
        """Record every eligible literal in ``content`` and rewrite it when asked."""
        active_filter = ignore_filter or self._ignore_filter or IgnoreFilter()
        replacements: List[Replacement] = []

        for literal in self.literal_scanner.scan(content):
            text = literal.inner_text
            if active_filter.should_ignore(text):
                continue
            template = detect_variables(text)
            if not template.is_simple:
                self.logger.debug(
                    "Skipping %s: interpolation is not a plain identifier",
                    literal.original_text,
                )
                continue

            key = state.keys.generate(text)
            if template.has_variables:
                state.table.record(
                    key,
                    unescape_literal(template.template),
                    describe(template.variables),
                    build_placeholders(template.variables),
                )
            else:
                state.table.record(key, unescape_literal(text), describe(()))
            replacements.append(Replacement(literal, key, template.variables))

        if rewriter is None or not replacements:
            return RewriteOutcome(content=content, replaced=0)
        return rewriter.rewrite(content, replacements)

    def report_dependencies(self, pubspec: Pubspec) -> List[str]:
        """Warn about localization dependencies missing from pubspec.yaml."""
        missing = missing_dependencies(pubspec)
        if missing:
            self.logger.warning("Missing required dependencies in pubspec.yaml:")
            self.logger.warning("Add these to your dependencies section:")
            for snippet in missing:
                self.logger.warning("  %s", snippet)
            self.logger.warning("Then run: flutter pub get")
        return missing

    def _resolve_import(
        self, config: ExtractorConfig, root: Path, pubspec: Optional[Pubspec]
    ) -> Optional[str]:
        uri = config.import_uri
        if uri is None:
            if pubspec is None:
                try:
                    pubspec = load_pubspec(root)
                except (ManifestNotFoundError, ManifestParseError) as exc:
                    self.logger.debug("Cannot derive the import from pubspec.yaml: %s", exc)
                    pubspec = None
            uri = resolve_import_uri(pubspec.name if pubspec else None, config.output_dir)
        if uri is None:
            self.logger.warning(
                "Could not resolve the localizations import; set import_uri to add it automatically"
            )
            return None
        return import_statement(uri)


__all__ = ["ExtractionResult", "Extractor", "ScanState"]
