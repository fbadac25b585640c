"""Tests for l10n_extract.source_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from l10n_extract.errors import InputNotFoundError
from l10n_extract.source_scanner import PathRule, SourceScanner, is_ignored


def _write(path: Path, content: str = "void main() {}\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_scan_lists_dart_files_relative_to_root(tmp_path: Path) -> None:
    _write(tmp_path / "lib" / "main.dart")
    _write(tmp_path / "lib" / "src" / "home.dart")
    _write(tmp_path / "lib" / "README.md", "# notes\n")
    _write(tmp_path / "test" / "widget_test.dart")

    files = SourceScanner().scan(tmp_path, tmp_path / "lib")

    assert [item.path for item in files] == ["lib/main.dart", "lib/src/home.dart"]
    assert files[0].size == len("void main() {}\n")


def test_scan_skips_generated_and_tooling_files(tmp_path: Path) -> None:
    _write(tmp_path / "lib" / "main.dart")
    _write(tmp_path / "lib" / "model.g.dart")
    _write(tmp_path / "lib" / "model.freezed.dart")
    _write(tmp_path / ".dart_tool" / "cache.dart")
    _write(tmp_path / "build" / "out.dart")

    files = SourceScanner().scan(tmp_path)

    assert [item.path for item in files] == ["lib/main.dart"]


def test_scan_honours_gitignore_and_exclusions(tmp_path: Path) -> None:
    _write(tmp_path / ".gitignore", "# local\nlib/legacy/\n*.tmp.dart\n!keep.tmp.dart\n")
    _write(tmp_path / "lib" / "main.dart")
    _write(tmp_path / "lib" / "legacy" / "old.dart")
    _write(tmp_path / "lib" / "scratch.tmp.dart")
    _write(tmp_path / "lib" / "keep.tmp.dart")
    _write(tmp_path / "lib" / "l10n" / "generated" / "app_localizations.dart")

    files = SourceScanner().scan(tmp_path, tmp_path / "lib", exclude=["lib/l10n/generated/"])

    assert [item.path for item in files] == ["lib/keep.tmp.dart", "lib/main.dart"]


def test_scan_rejects_missing_or_non_directory_input(tmp_path: Path) -> None:
    with pytest.raises(InputNotFoundError):
        SourceScanner().scan(tmp_path, tmp_path / "missing")

    _write(tmp_path / "lib")
    with pytest.raises(NotADirectoryError):
        SourceScanner().scan(tmp_path, tmp_path / "lib")


def test_path_rule_parses_flags() -> None:
    rule = PathRule.parse("/lib/generated/")

    assert rule == PathRule("lib/generated", directory_only=True, anchored=True)
    assert rule.matches("lib/generated", is_dir=True)
    assert not rule.matches("lib/generated", is_dir=False)
    assert PathRule.parse("   ") is None
    assert PathRule.parse("# comment") is None
    assert PathRule.parse("!keep.dart") == PathRule("keep.dart", negate=True)


def test_path_rule_double_star_patterns() -> None:
    anywhere = PathRule.parse("**/generated/")
    below = PathRule.parse("lib/legacy/**")

    assert anywhere is not None and below is not None
    assert anywhere.anchored is False
    assert anywhere.matches("lib/src/generated", is_dir=True)
    assert below.matches("lib/legacy/old/screen.dart", is_dir=False)
    assert not below.matches("lib/legacy", is_dir=True)


def test_is_ignored_lets_the_last_rule_win() -> None:
    rules = [PathRule.parse("*.tmp.dart"), PathRule.parse("!keep.tmp.dart")]

    assert is_ignored("lib/scratch.tmp.dart", False, rules)
    assert not is_ignored("lib/keep.tmp.dart", False, rules)
    assert not is_ignored("lib/main.dart", False, rules)
