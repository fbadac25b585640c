"""Stable camelCase key derivation for extracted strings."""

from __future__ import annotations

import re
from typing import Dict, Set

from ..stores.resource_table import ResourceTable
from .variables import strip_interpolations

_NON_WORD_RE = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")

FALLBACK_PREFIX = "stringKey"
RESERVED_SUFFIX = "Label"

# Dart reserved words cannot be used as generated getter names.
_DART_RESERVED = frozenset(
    {
        "assert",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "default",
        "do",
        "else",
        "enum",
        "extends",
        "false",
        "final",
        "finally",
        "for",
        "if",
        "in",
        "is",
        "new",
        "null",
        "rethrow",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "var",
        "void",
        "while",
        "with",
    }
)


def normalize_key(text: str) -> str:
    """Return the camelCase base name for ``text`` (possibly empty)."""
    cleaned = _NON_WORD_RE.sub(" ", text).strip()
    cleaned = _WHITESPACE_RE.sub("_", cleaned)
    parts = cleaned.split("_")
    key = parts[0].lower()
    for part in parts[1:]:
        if part:
            key += part[0].upper() + part[1:].lower()
    return key


class KeyGenerator:
    """Assigns one key per distinct literal content.

    Identical content always maps to the same key. Distinct content that
    normalizes to the same base gets ``_1``, ``_2``... suffixes so keys never
    collide with the table or with keys handed out earlier.
    """

    def __init__(self, table: ResourceTable) -> None:
        self._table = table
        self._by_content: Dict[str, str] = {}
        self._issued: Set[str] = set()
        self._fallback_counter = 0

    def generate(self, content: str) -> str:
        cached = self._by_content.get(content)
        if cached is not None:
            return cached

        base = normalize_key(strip_interpolations(content))
        if not base or base[0].isdigit():
            base = f"{FALLBACK_PREFIX}{self._fallback_counter}"
            self._fallback_counter += 1
        elif base in _DART_RESERVED:
            base = f"{base}{RESERVED_SUFFIX}"

        key = base
        counter = 1
        while key in self._table or key in self._issued:
            key = f"{base}_{counter}"
            counter += 1

        self._by_content[content] = key
        self._issued.add(key)
        return key

    def lookup(self, content: str) -> str | None:
        return self._by_content.get(content)

    def __len__(self) -> int:
        return len(self._by_content)


__all__ = ["FALLBACK_PREFIX", "KeyGenerator", "normalize_key"]
