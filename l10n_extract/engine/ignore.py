"""Eligibility rules deciding which literals are externalized."""

from __future__ import annotations

import re
from typing import Iterable, Tuple

_NUMERIC_RE = re.compile(r"^\d+\.?\d*$")
_SINGLE_LETTER_RE = re.compile(r"^[a-zA-Z]$")
_ROUTE_RE = re.compile(r"^/\S*$")

DEFAULT_IGNORED_SUBSTRINGS: Tuple[str, ...] = (
    # asset locations and file extensions
    "assets/",
    "fonts/",
    "images/",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".svg",
    ".json",
    ".dart",
    "package:",
    "dart:",
    # framework symbols and property tokens
    "MaterialApp",
    "StatelessWidget",
    "StatefulWidget",
    "key:",
    "const ",
    "super.key",
    "DateTime.now()",
    "Colors.",
    "EdgeInsets.",
    "BorderRadius.",
    "BoxShadow(",
    "FontWeight.",
    "TextStyle(",
    "IconData(",
    "Alignment.",
    "MainAxisAlignment.",
    "CrossAxisAlignment.",
    "TextDirection.",
    "FlexFit.",
    "Clip.",
    "BlendMode.",
    "BoxFit.",
    "FilterQuality.",
    "ImageRepeat.",
    "Locale(",
    "TargetPlatform.",
    "Brightness.",
    "ThemeMode.",
    "FloatingActionButtonLocation.",
    "TextCapitalization.",
    "TextInputAction.",
    "TextInputType.",
    "Overflow.",
    "StackFit.",
    "WrapAlignment.",
    "WrapCrossAlignment.",
    "VerticalDirection.",
    "Axis.",
    "BoxShape.",
    "BoxBorder.",
    "BorderStyle.",
    "TableBorder.",
    "TableCellVerticalAlignment.",
    "TableRowInkDecoration.",
    "HitTestBehavior.",
    "MaterialType.",
    "MaterialTapTargetSize.",
    "SnackBarBehavior.",
    "SnackBarClosedReason.",
    "TooltipTriggerMode.",
    "AdaptiveTextSelectionToolbar.buttonItems",
)


class IgnoreFilter:
    """Conservative filter: skipping a translatable string beats corrupting code."""

    def __init__(self, extra_patterns: Iterable[str] = ()) -> None:
        self.patterns: Tuple[str, ...] = DEFAULT_IGNORED_SUBSTRINGS + tuple(
            pattern for pattern in extra_patterns if pattern
        )

    def should_ignore(self, content: str) -> bool:
        """Return True when ``content`` must not be externalized."""
        if len(content) <= 1 or not content.strip():
            return True
        if _NUMERIC_RE.match(content):
            return True
        if _SINGLE_LETTER_RE.match(content):
            return True
        if content.startswith(("http://", "https://")):
            return True
        if "/" in content and " " not in content:
            if len(content.split("/")) > 2 or _ROUTE_RE.match(content):
                return True
        return any(pattern in content for pattern in self.patterns)


_DEFAULT_FILTER = IgnoreFilter()


def should_ignore(content: str) -> bool:
    """Apply the default ignore rules."""
    return _DEFAULT_FILTER.should_ignore(content)


__all__ = ["DEFAULT_IGNORED_SUBSTRINGS", "IgnoreFilter", "should_ignore"]
