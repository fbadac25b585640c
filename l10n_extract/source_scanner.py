"""Discovery of Dart source files to feed the extraction engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .errors import InputNotFoundError
from .models import SourceFile

SOURCE_SUFFIX = ".dart"

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".dart_tool",
    ".idea",
    ".vscode",
    ".fvm",
    "build",
    "node_modules",
}

# Code generators own these files; rewriting them is undone on the next build.
_GENERATED_SUFFIXES = (
    ".g.dart",
    ".freezed.dart",
    ".gr.dart",
    ".config.dart",
    ".mocks.dart",
)


@dataclass(frozen=True)
class PathRule:
    """One gitignore-style pattern matched against root-relative POSIX paths.

    Supports ``!`` negation, a trailing ``/`` for directories, a leading ``/``
    or an inner slash for anchoring, and ``**/`` / ``/**`` wildcards.
    """

    pattern: str
    directory_only: bool = False
    anchored: bool = False
    negate: bool = False

    @classmethod
    def parse(cls, line: str) -> PathRule | None:
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negate = text.startswith("!")
        if negate:
            text = text[1:]
        directory_only = text.endswith("/")
        text = text.rstrip("/")
        if text.startswith("**/"):
            text = text[3:]
            anchored = False
        else:
            anchored = "/" in text
            text = text.lstrip("/")
        if not text:
            return None
        return cls(text, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if not self.anchored:
            return fnmatchcase(rel_path.rpartition("/")[2], self.pattern)
        if self.pattern.endswith("/**"):
            base = self.pattern[:-3]
            return rel_path.startswith(f"{base}/")
        return fnmatchcase(rel_path, self.pattern)


def load_ignore_file(path: Path) -> List[PathRule]:
    """Parse a ``.gitignore`` file; a missing file yields no rules."""
    if not path.is_file():
        return []
    rules: List[PathRule] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        rule = PathRule.parse(line)
        if rule is not None:
            rules.append(rule)
    return rules


def is_ignored(rel_path: str, is_dir: bool, rules: Sequence[PathRule]) -> bool:
    """Apply ``rules`` in order; the last matching rule decides."""
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _is_generated(filename: str) -> bool:
    return filename.endswith(_GENERATED_SUFFIXES)


class SourceScanner:
    """Walks the project to list Dart files eligible for extraction.

    Paths in ``exclude`` and in ``.gitignore`` are matched relative to the
    project root, so the localization output directory can be excluded with
    the same string used in the configuration.
    """

    def scan(
        self,
        root: Path,
        input_dir: Path | None = None,
        *,
        exclude: Sequence[str] = (),
    ) -> List[SourceFile]:
        """Return Dart files under ``input_dir`` (default ``root``) in sorted order."""
        root_path = Path(root).expanduser().resolve()
        scan_path = Path(input_dir).expanduser().resolve() if input_dir else root_path
        if not scan_path.exists():
            raise InputNotFoundError(str(input_dir or root))
        if not scan_path.is_dir():
            raise NotADirectoryError(f"Input path is not a directory: {scan_path}")

        rules = load_ignore_file(root_path / ".gitignore")
        for pattern in exclude:
            rule = PathRule.parse(pattern)
            if rule is not None:
                rules.append(rule)

        files: List[SourceFile] = []
        for path in self._iter_files(root_path, scan_path, rules):
            files.append(
                SourceFile(
                    path=_relative(path, root_path),
                    size=path.stat().st_size,
                )
            )
        files.sort(key=lambda item: item.path)
        return files

    @staticmethod
    def _iter_files(root: Path, scan_path: Path, rules: Sequence[PathRule]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(scan_path):
            current_dir = Path(dirpath)
            rel_dir = _relative(current_dir, root)

            kept_dirs = []
            for name in dirnames:
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if is_ignored(rel_path, True, rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in filenames:
                if not filename.endswith(SOURCE_SUFFIX) or _is_generated(filename):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if is_ignored(rel_path, False, rules):
                    continue
                yield current_dir / filename


def _relative(path: Path, root: Path) -> str:
    try:
        relative = path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
    return "" if relative == "." else relative


__all__ = ["SOURCE_SUFFIX", "PathRule", "SourceScanner", "is_ignored", "load_ignore_file"]
