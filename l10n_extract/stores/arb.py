"""ARB resource file serialisation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .resource_table import ResourceTable

DEFAULT_LOCALE = "en"


def build_arb_document(table: ResourceTable, *, locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
    """Return the ARB mapping with each key followed by its ``@key`` metadata."""
    document: Dict[str, Any] = {"@@locale": locale}
    for entry in table.entries():
        document[entry.key] = entry.value
        metadata: Dict[str, Any] = {"description": entry.description}
        if entry.placeholders:
            metadata["placeholders"] = {
                name: dict(meta) for name, meta in entry.placeholders.items()
            }
        document[f"@{entry.key}"] = metadata
    return document


def write_arb(table: ResourceTable, path: Path, *, locale: str = DEFAULT_LOCALE) -> Path:
    """Serialise ``table`` to ``path`` with stable two-space indentation."""
    document = build_arb_document(table, locale=locale)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


__all__ = ["DEFAULT_LOCALE", "build_arb_document", "write_arb"]
