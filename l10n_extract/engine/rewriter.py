"""Source rewriting: swap literals for generated localization accessors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..models import ContextTag, RawLiteral
from .scanner import mask_non_code

_CONST_TEXT_RE = re.compile(r"\bconst\s+Text\(\s*$")
_CONST_HEAD_RE = re.compile(
    r"\bconst\s+(?:[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*\s*)?(?:<[^;{}()]*>\s*)?$"
)
_CONST_DECLARATION_RE = re.compile(r"\s*(?:static\s+)?const\b")
_CONST_LOOKBACK = 160
_APP_ROOT_RE = re.compile(r"\b(?:MaterialApp|CupertinoApp)(?:\.router)?\s*\(")
_IMPORT_LINE_RE = re.compile(r"^\s*import\s")
_PART_OF_RE = re.compile(r"^\s*part\s+of\b", re.MULTILINE)
_LOCALIZATION_MARKERS = ("localizationsDelegates:", "supportedLocales:")


@dataclass(frozen=True)
class Replacement:
    """A literal resolved to its resource key."""

    literal: RawLiteral
    key: str
    variables: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RewriteOutcome:
    """Result of rewriting one buffer."""

    content: str
    replaced: int
    import_added: bool = False
    localization_added: bool = False
    import_skipped_part: bool = False
    skipped_const: int = 0

    @property
    def changed(self) -> bool:
        return self.replaced > 0


class Rewriter:
    """Rewrites a Dart buffer to use ``<Class>.of(context).<key>`` accessors."""

    def __init__(self, class_name: str, import_statement: Optional[str] = None) -> None:
        self.class_name = class_name
        self.import_statement = import_statement

    def accessor(self, key: str, variables: Sequence[str] = ()) -> str:
        call = f"{self.class_name}.of(context).{key}"
        if variables:
            return f"{call}({', '.join(variables)})"
        return call

    def rewrite(self, content: str, replacements: Sequence[Replacement]) -> RewriteOutcome:
        """Apply ``replacements`` by recorded offset, last first.

        A buffer without replacements comes back untouched; the import and app
        root wiring are only added once at least one literal was replaced.
        """
        edits, skipped_const = self._plan_edits(content, replacements)
        if not edits:
            return RewriteOutcome(content=content, replaced=0, skipped_const=skipped_const)

        updated = content
        for start, end, text in sorted(edits, key=lambda edit: edit[0], reverse=True):
            updated = updated[:start] + text + updated[end:]

        import_added = False
        part_file = is_part_file(updated)
        if self.import_statement and not part_file:
            with_import = self.ensure_import(updated)
            import_added = with_import != updated
            updated = with_import

        with_config = self.ensure_localization_config(updated)
        localization_added = with_config != updated

        return RewriteOutcome(
            content=with_config,
            replaced=len(edits),
            import_added=import_added,
            localization_added=localization_added,
            import_skipped_part=part_file and bool(self.import_statement),
            skipped_const=skipped_const,
        )

    def ensure_import(self, content: str) -> str:
        """Insert the accessor import after the last import directive."""
        statement = self.import_statement
        if not statement or statement in content:
            return content

        lines = content.split("\n")
        last_import = -1
        index = 0
        while index < len(lines):
            if _IMPORT_LINE_RE.match(lines[index]):
                # Multi-line directives (show/hide lists) end at the semicolon.
                while ";" not in lines[index] and index + 1 < len(lines):
                    index += 1
                last_import = index
            index += 1

        if last_import != -1:
            lines.insert(last_import + 1, statement)
        else:
            lines[0:0] = [statement, ""]
        return "\n".join(lines)

    def ensure_localization_config(self, content: str) -> str:
        """Wire localization delegates into the first app root constructor."""
        if any(marker in content for marker in _LOCALIZATION_MARKERS):
            return content
        match = _APP_ROOT_RE.search(content)
        if match is None:
            return content

        line_start = content.rfind("\n", 0, match.start()) + 1
        line = content[line_start : match.start()]
        indent = line[: len(line) - len(line.lstrip())] + "  "
        snippet = (
            f"\n{indent}localizationsDelegates: {self.class_name}.localizationsDelegates,"
            f"\n{indent}supportedLocales: {self.class_name}.supportedLocales,"
        )
        return content[: match.end()] + snippet + content[match.end() :]

    def _plan_edits(
        self, content: str, replacements: Sequence[Replacement]
    ) -> Tuple[List[Tuple[int, int, str]], int]:
        edits: List[Tuple[int, int, str]] = []
        masked = mask_non_code(content)
        skipped_const = 0
        claimed_until = -1
        for item in sorted(replacements, key=lambda rep: rep.literal.source_offset):
            literal = item.literal
            start, end = literal.source_offset, literal.end_offset
            if content[start:end] != literal.original_text:
                continue
            if start < claimed_until:
                continue
            accessor = self.accessor(item.key, item.variables)
            const_at = enclosing_const(masked, start)
            if const_at is None:
                edits.append((start, end, accessor))
                claimed_until = end
                continue
            head = _const_text_head(content, start) if literal.context is ContextTag.TEXT else None
            if (
                head is None
                or head != const_at
                or head < claimed_until
                or enclosing_const(masked, head) is not None
            ):
                skipped_const += 1
                continue
            # A const Text cannot hold a runtime lookup; re-emit it non-const.
            edits.append((head, end, f"Text({accessor}"))
            claimed_until = end
        return edits, skipped_const


def is_part_file(content: str) -> bool:
    """Return True for ``part of`` files, which cannot declare imports."""
    return bool(_PART_OF_RE.search(content))


def enclosing_const(masked: str, position: int) -> Optional[int]:
    """Return the offset of the ``const`` governing ``position``, if any.

    ``masked`` is the buffer with comments and strings blanked out (see
    ``mask_non_code``). The scan walks outwards through unclosed brackets
    until a statement or block boundary. Constant constructor calls and
    collection literals count, and so do ``const`` declarations and
    optional parameter defaults.
    """
    depth = 0
    innermost = True
    index = position - 1
    while index >= 0:
        char = masked[index]
        if char in ")]}":
            depth += 1
        elif char in "([{":
            if depth:
                depth -= 1
            else:
                head = _CONST_HEAD_RE.search(masked, max(0, index - _CONST_LOOKBACK), index)
                if head is not None:
                    return head.start()
                if innermost and char in "[{" and _is_parameter_default(masked, index, position):
                    return index
                innermost = False
                if char == "{" and _opens_block(masked, index):
                    break
        elif char == ";" and not depth:
            break
        index -= 1

    declaration = _CONST_DECLARATION_RE.match(masked, index + 1, position)
    if declaration is not None:
        return declaration.end() - len("const")
    return None


def _opens_block(masked: str, opener: int) -> bool:
    before = masked[max(0, opener - _CONST_LOOKBACK) : opener].rstrip()
    if not before:
        return True
    # Bodies follow a parameter list or a keyword; map and set literals do not.
    return before[-1] == ")" or before[-1].isalnum() or before[-1] == "_"


def _is_parameter_default(masked: str, opener: int, position: int) -> bool:
    before = masked[max(0, opener - _CONST_LOOKBACK) : opener].rstrip()
    if not before.endswith(("(", ",")):
        return False
    return masked[opener + 1 : position].rstrip().endswith("=")


def _const_text_head(content: str, position: int) -> Optional[int]:
    line_start = content.rfind("\n", 0, position) + 1
    match = _CONST_TEXT_RE.search(content, line_start, position)
    if match is None:
        return None
    return match.start()


__all__ = ["Replacement", "RewriteOutcome", "Rewriter", "enclosing_const", "is_part_file"]
