"""pubspec.yaml inspection for dependency checks and package imports."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ManifestNotFoundError, ManifestParseError
from ..stores.generator_config import DEFAULT_OUTPUT_FILE

PUBSPEC_FILENAME = "pubspec.yaml"

# Dependency name -> snippet to add under `dependencies:`.
REQUIRED_DEPENDENCIES: Dict[str, str] = {
    "intl": "intl: ^0.19.0",
    "flutter_localizations": "flutter_localizations:\n    sdk: flutter",
}


@dataclass
class Pubspec:
    """The parts of pubspec.yaml the extractor relies on."""

    name: Optional[str]
    dependencies: Dict[str, Any] = field(default_factory=dict)


def load_pubspec(root: Path) -> Pubspec:
    """Parse ``root/pubspec.yaml``; a missing or malformed manifest is fatal."""
    path = root / PUBSPEC_FILENAME
    if not path.exists():
        raise ManifestNotFoundError(str(path))

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ManifestParseError(str(path), str(exc)) from exc
    if data is None:
        return Pubspec(name=None)
    if not isinstance(data, dict):
        raise ManifestParseError(str(path), "expected a mapping at the root")

    name = data.get("name")
    dependencies = data.get("dependencies")
    return Pubspec(
        name=str(name) if isinstance(name, str) and name else None,
        dependencies=dependencies if isinstance(dependencies, dict) else {},
    )


def missing_dependencies(pubspec: Pubspec) -> List[str]:
    """Return pubspec snippets for required localization dependencies not declared."""
    return [
        snippet
        for name, snippet in REQUIRED_DEPENDENCIES.items()
        if name not in pubspec.dependencies
    ]


def resolve_import_uri(
    package_name: Optional[str],
    output_dir: str,
    *,
    output_file: str = DEFAULT_OUTPUT_FILE,
) -> Optional[str]:
    """Return the ``package:`` URI of the generated localizations module.

    Only modules under ``lib/`` are importable through ``package:`` URIs.
    """
    if not package_name:
        return None
    module = PurePosixPath(output_dir.replace("\\", "/")) / "generated" / output_file
    parts = module.parts
    if not parts or parts[0] != "lib":
        return None
    return f"package:{package_name}/{PurePosixPath(*parts[1:]).as_posix()}"


def import_statement(uri: str) -> str:
    return f"import '{uri}';"


__all__ = [
    "PUBSPEC_FILENAME",
    "REQUIRED_DEPENDENCIES",
    "Pubspec",
    "import_statement",
    "load_pubspec",
    "missing_dependencies",
    "resolve_import_uri",
]
