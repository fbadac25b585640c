"""Core data models shared across l10n-extract components."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_]\w*$")


class ContextTag(str, Enum):
    """Syntactic role of a literal, used to shape the generated accessor."""

    TEXT = "text"
    TITLE = "title"
    APP_BAR = "appbar"
    SNACK_BAR = "snackbar"
    DIALOG = "dialog"
    HINT_TEXT = "hintText"
    LABEL_TEXT = "labelText"
    BUTTON_TEXT = "buttonText"
    GENERAL = "general"


@dataclass(frozen=True)
class RawLiteral:
    """A quoted literal found in a source buffer."""

    original_text: str
    inner_text: str
    source_offset: int
    context: ContextTag

    @property
    def end_offset(self) -> int:
        return self.source_offset + len(self.original_text)


@dataclass(frozen=True)
class VariableTemplate:
    """Placeholder template derived from a literal's interpolation markers."""

    has_variables: bool
    variables: Tuple[str, ...]
    template: str

    @property
    def is_simple(self) -> bool:
        """True when every variable is a bare identifier usable as a placeholder."""
        return all(_IDENTIFIER_RE.match(name) for name in self.variables)


@dataclass
class ResourceEntry:
    """A single externalized string as it will appear in the ARB file."""

    key: str
    value: str
    description: str
    placeholders: Optional[Dict[str, Dict[str, str]]] = None


@dataclass
class SourceFile:
    """A Dart source file discovered under the input directory."""

    path: str
    size: int
