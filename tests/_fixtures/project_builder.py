"""Helper utilities for constructing temporary Flutter projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Mapping, Sequence

from l10n_extract.config import ExtractorConfig


class ProjectBuilder:
    """Utility for writing files into a throwaway Flutter project."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "app"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_pubspec(
        self,
        name: str = "demo_app",
        dependencies: Sequence[str] = ("intl", "flutter_localizations"),
    ) -> None:
        lines = [f"name: {name}", "dependencies:", "  flutter:", "    sdk: flutter"]
        for dependency in dependencies:
            if dependency == "flutter_localizations":
                lines.extend(["  flutter_localizations:", "    sdk: flutter"])
            else:
                lines.append(f"  {dependency}: any")
        (self.root / "pubspec.yaml").write_text("\n".join(lines) + "\n", encoding="utf-8")

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def config(self, **overrides: Any) -> ExtractorConfig:
        """Return an extractor configuration rooted at the project."""
        return ExtractorConfig(root=self.root).with_overrides(**overrides)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
