"""Pattern-based detection of string literals in Dart source."""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from ..models import ContextTag, RawLiteral

CONTEXT_WINDOW = 100
TITLE_WINDOW = 200

# One left-to-right tokenizer: comments and triple-quoted strings are consumed
# whole so quotes inside them never open a literal. Single-line literals treat
# ``${...}`` as one unit, which lets interpolations contain quotes.
_TOKEN_RE = re.compile(
    r"(?P<comment>//[^\n]*|/\*[\s\S]*?\*/)"
    r"|(?P<multiline>'''(?:\\[\s\S]|[\s\S])*?'''|\"\"\"(?:\\[\s\S]|[\s\S])*?\"\"\")"
    r'|"(?P<double>(?:\\.|\$\{[^}\n]*\}|\$(?!\{)|[^"\\\n$])*?)"'
    r"|'(?P<single>(?:\\.|\$\{[^}\n]*\}|\$(?!\{)|[^'\\\n$])*?)'"
)
_NON_NEWLINE_RE = re.compile(r"[^\n]")

_DIRECTIVE_RE = re.compile(r"^\s*(?:import|export|part|library)\b")
_APP_ROOT_RE = re.compile(r"\b(?:MaterialApp|CupertinoApp)(?:\.router)?\s*\(")
_TITLE_TAIL_RE = re.compile(r"title\s*:\s*$")
_SUBSCRIPT_RE = re.compile(r"[\w)\]]\??\s*\[\s*$")
_COMPARISON_PREFIX_RE = re.compile(r"(?:\bcase|==|!=)\s*$")
_COMPARISON_SUFFIX_RE = re.compile(r"^\s*(?:==|!=)")
_NON_UI_CALL_RE = re.compile(
    r"(?:\b(?:Key|ValueKey|ObjectKey|GlobalObjectKey|RegExp|DateFormat|NumberFormat"
    r"|Locale|AssetImage|NetworkImage|print|debugPrint|log)"
    r"|\bUri\.parse|\bImage\.(?:asset|network)|\bSvgPicture\.(?:asset|network))\(\s*$"
)
_NON_UI_PROPERTY_RE = re.compile(
    r"\b(?:fontFamily|package|restorationId|heroTag|routeName|initialRoute"
    r"|path|name|id|tag)\s*:\s*$"
)

# Ordered by priority: display-text constructor, property names, containers.
_CONTEXT_TOKENS: Sequence[Tuple[str, ContextTag]] = (
    ("Text(", ContextTag.TEXT),
    ("title:", ContextTag.TITLE),
    ("hintText:", ContextTag.HINT_TEXT),
    ("labelText:", ContextTag.LABEL_TEXT),
    ("buttonText:", ContextTag.BUTTON_TEXT),
    ("AppBar(", ContextTag.APP_BAR),
    ("SnackBar(", ContextTag.SNACK_BAR),
    ("AlertDialog(", ContextTag.DIALOG),
)


class LiteralScanner:
    """Finds candidate UI string literals in a Dart source buffer.

    Detection is heuristic. Literals in directives, comments, raw or
    triple-quoted strings, subscripts, comparisons and known non-UI calls are
    never reported, and the app root's ``title:`` is left to ``onGenerateTitle``.
    A literal cut short inside a ``${...}`` expression discards the rest of its
    line rather than guessing where the string ends.
    """

    def __init__(
        self,
        *,
        context_window: int = CONTEXT_WINDOW,
        title_window: int = TITLE_WINDOW,
    ) -> None:
        self.context_window = context_window
        self.title_window = title_window

    def scan(self, content: str) -> List[RawLiteral]:
        """Return candidate literals in source order."""
        literals: List[RawLiteral] = []
        skip_until = -1
        for match in _TOKEN_RE.finditer(content):
            kind = match.lastgroup
            if kind not in ("single", "double"):
                continue
            start, end = match.span()
            if start < skip_until:
                continue
            inner = match.group(kind)
            if _has_open_interpolation(inner):
                line_end = content.find("\n", end)
                skip_until = len(content) if line_end == -1 else line_end
                continue
            if self._is_excluded(content, start, end):
                continue
            literals.append(
                RawLiteral(
                    original_text=match.group(0),
                    inner_text=inner,
                    source_offset=start,
                    context=classify_context(content, start, window=self.context_window),
                )
            )
        return literals

    def _is_excluded(self, content: str, start: int, end: int) -> bool:
        prefix = _line_prefix(content, start)
        if _DIRECTIVE_RE.match(prefix):
            return True
        if _is_raw_or_adjacent(content, start, end):
            return True
        if is_app_title(content, start, window=self.title_window):
            return True
        if _SUBSCRIPT_RE.search(prefix) or _COMPARISON_PREFIX_RE.search(prefix):
            return True
        if _COMPARISON_SUFFIX_RE.match(content[end : end + 8]):
            return True
        if _NON_UI_CALL_RE.search(prefix) or _NON_UI_PROPERTY_RE.search(prefix):
            return True
        return False


def is_directive_line(content: str, position: int) -> bool:
    """Return True when the literal at ``position`` sits on an import/export/part line."""
    return bool(_DIRECTIVE_RE.match(_line_prefix(content, position)))


def is_app_title(content: str, position: int, *, window: int = TITLE_WINDOW) -> bool:
    """Return True for the ``title:`` argument of a MaterialApp/CupertinoApp."""
    preceding = content[max(0, position - window) : position]
    if not _APP_ROOT_RE.search(preceding):
        return False
    last_line = preceding.split("\n")[-1]
    return bool(_TITLE_TAIL_RE.search(last_line.strip()))


def classify_context(content: str, position: int, *, window: int = CONTEXT_WINDOW) -> ContextTag:
    """Classify the widget context by scanning backwards from ``position``."""
    preceding = content[max(0, position - window) : position]
    for token, tag in _CONTEXT_TOKENS:
        if token in preceding:
            return tag
    return ContextTag.GENERAL


def mask_non_code(content: str) -> str:
    """Blank out comments and string literals, keeping offsets and line breaks."""

    def _blank(match: re.Match[str]) -> str:
        return _NON_NEWLINE_RE.sub(" ", match.group(0))

    return _TOKEN_RE.sub(_blank, content)


def _line_prefix(content: str, position: int) -> str:
    line_start = content.rfind("\n", 0, position) + 1
    return content[line_start:position]


def _has_open_interpolation(inner: str) -> bool:
    """Return True when a ``${`` in ``inner`` is never closed."""
    start = inner.find("${")
    while start != -1:
        depth = 0
        index = start + 1
        while index < len(inner):
            if inner[index] == "{":
                depth += 1
            elif inner[index] == "}":
                depth -= 1
                if depth == 0:
                    break
            index += 1
        if depth:
            return True
        start = inner.find("${", index)
    return False


def _is_raw_or_adjacent(content: str, start: int, end: int) -> bool:
    quote = content[start]
    if start > 0 and content[start - 1] == quote:
        return True
    if end < len(content) and content[end] == quote:
        return True
    if start > 0 and content[start - 1] == "r":
        return start < 2 or not (content[start - 2].isalnum() or content[start - 2] == "_")
    return False


__all__ = [
    "CONTEXT_WINDOW",
    "TITLE_WINDOW",
    "LiteralScanner",
    "classify_context",
    "is_app_title",
    "is_directive_line",
    "mask_non_code",
]
