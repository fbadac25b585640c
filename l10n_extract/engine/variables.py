"""Interpolation detection and placeholder templating."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Sequence

from ..models import VariableTemplate

_BRACE_RE = re.compile(r"(?<!\\)\$\{([^}]+)\}")
_SIGIL_RE = re.compile(r"(?<![\w\\])\$(\w+)")
_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL
)
_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

PLACEHOLDER_TYPE = "String"
_EXAMPLE_OVERRIDES = {"username": "John"}


def detect_variables(content: str) -> VariableTemplate:
    """Convert ``${expr}`` and ``$name`` markers into ``{name}`` placeholders.

    Substitution happens per match, so ``$name`` never rewrites part of
    ``$names``. A sigil followed by a digit (``$100``) is a currency amount,
    not a variable.
    """
    seen: Dict[str, None] = {}

    def _brace(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        seen.setdefault(name, None)
        return "{" + name + "}"

    def _sigil(match: re.Match[str]) -> str:
        name = match.group(1)
        if name[0].isdigit():
            return match.group(0)
        seen.setdefault(name, None)
        return "{" + name + "}"

    template = _BRACE_RE.sub(_brace, content)
    template = _SIGIL_RE.sub(_sigil, template)

    if not seen:
        return VariableTemplate(has_variables=False, variables=(), template=content)
    return VariableTemplate(has_variables=True, variables=tuple(seen), template=template)


def strip_interpolations(content: str) -> str:
    """Return ``content`` with every interpolation marker removed."""

    def _drop(match: re.Match[str]) -> str:
        return match.group(0) if match.group(1)[0].isdigit() else " "

    return _SIGIL_RE.sub(_drop, _BRACE_RE.sub(" ", content))


def build_placeholders(variables: Iterable[str]) -> Dict[str, Dict[str, str]]:
    """Return ARB placeholder metadata for ``variables``."""
    placeholders: Dict[str, Dict[str, str]] = {}
    for name in variables:
        placeholders[name] = {
            "type": PLACEHOLDER_TYPE,
            "example": _EXAMPLE_OVERRIDES.get(name, name),
        }
    return placeholders


def describe(variables: Sequence[str]) -> str:
    if variables:
        return f"Localized string with parameters: {', '.join(variables)}"
    return "Localized string"


def unescape_literal(text: str) -> str:
    """Resolve Dart escape sequences so the resource holds the displayed text."""
    return _ESCAPE_RE.sub(_resolve_escape, text)


def _resolve_escape(match: re.Match[str]) -> str:
    sequence = match.group(1)
    if len(sequence) > 1:
        digits = sequence[1:].strip("{}")
        return chr(int(digits, 16))
    return _ESCAPES.get(sequence, sequence)


__all__ = [
    "PLACEHOLDER_TYPE",
    "build_placeholders",
    "describe",
    "detect_variables",
    "strip_interpolations",
    "unescape_literal",
]
