"""Tests for source rewriting."""

from __future__ import annotations

from typing import Sequence

import pytest

from l10n_extract.engine.rewriter import Replacement, Rewriter, enclosing_const, is_part_file
from l10n_extract.engine.scanner import LiteralScanner, mask_non_code
from l10n_extract.models import ContextTag, RawLiteral

IMPORT = "import 'package:demo_app/l10n/generated/app_localizations.dart';"


def _replacements(content: str, keys: Sequence[str]) -> list[Replacement]:
    literals = LiteralScanner().scan(content)
    assert len(literals) == len(keys)
    return [Replacement(literal, key) for literal, key in zip(literals, keys)]


def test_rewrite_replaces_literal_and_adds_import() -> None:
    content = (
        "import 'package:flutter/material.dart';\n"
        "\n"
        "Widget build(BuildContext context) {\n"
        "  return Text('Welcome');\n"
        "}\n"
    )
    rewriter = Rewriter("AppLocalizations", IMPORT)

    outcome = rewriter.rewrite(content, _replacements(content, ["welcome"]))

    assert outcome.replaced == 1
    assert outcome.import_added is True
    assert outcome.content == (
        "import 'package:flutter/material.dart';\n"
        f"{IMPORT}\n"
        "\n"
        "Widget build(BuildContext context) {\n"
        "  return Text(AppLocalizations.of(context).welcome);\n"
        "}\n"
    )


def test_rewrite_passes_variables_as_arguments() -> None:
    content = "Text('Hello $name and ${count}')\n"
    literal = LiteralScanner().scan(content)[0]
    rewriter = Rewriter("S")

    outcome = rewriter.rewrite(content, [Replacement(literal, "helloAnd", ("name", "count"))])

    assert outcome.content == "Text(S.of(context).helloAnd(name, count))\n"


def test_rewrite_drops_const_from_wrapping_text() -> None:
    content = "  child: const Text('Save'),\n"
    outcome = Rewriter("AppLocalizations").rewrite(content, _replacements(content, ["save"]))

    assert outcome.content == "  child: Text(AppLocalizations.of(context).save),\n"


def test_rewrite_leaves_other_contexts_bare() -> None:
    content = "InputDecoration(hintText: 'Email')\n"
    outcome = Rewriter("L").rewrite(content, _replacements(content, ["email"]))

    assert outcome.content == "InputDecoration(hintText: L.of(context).email)\n"


def test_rewrite_keeps_later_offsets_valid() -> None:
    content = "Column(children: [Text('First'), Text('Second')])\n"
    outcome = Rewriter("L").rewrite(content, _replacements(content, ["first", "second"]))

    assert outcome.replaced == 2
    assert outcome.content == (
        "Column(children: [Text(L.of(context).first), Text(L.of(context).second)])\n"
    )


def test_rewrite_skips_stale_and_overlapping_spans() -> None:
    content = "Text('Welcome')\n"
    literal = LiteralScanner().scan(content)[0]
    stale = RawLiteral("'Goodbye'", "Goodbye", literal.source_offset, ContextTag.TEXT)
    rewriter = Rewriter("L", IMPORT)

    unchanged = rewriter.rewrite(content, [Replacement(stale, "goodbye")])
    assert unchanged.replaced == 0
    assert unchanged.content == content

    once = rewriter.rewrite(
        content, [Replacement(literal, "welcome"), Replacement(literal, "welcome")]
    )
    assert once.replaced == 1
    assert once.content.count("L.of(context).welcome") == 1


def test_rewrite_without_replacements_is_identity() -> None:
    content = "MaterialApp(home: Home())\n"
    outcome = Rewriter("L", IMPORT).rewrite(content, [])

    assert outcome.changed is False
    assert outcome.content == content


def test_ensure_import_handles_missing_and_multiline_imports() -> None:
    rewriter = Rewriter("L", IMPORT)

    assert rewriter.ensure_import("void main() {}\n") == f"{IMPORT}\n\nvoid main() {{}}\n"

    multiline = "import 'a.dart'\n    show A, B;\n\nvoid f() {}\n"
    assert rewriter.ensure_import(multiline) == (
        f"import 'a.dart'\n    show A, B;\n{IMPORT}\n\nvoid f() {{}}\n"
    )

    with_import = rewriter.ensure_import(multiline)
    assert rewriter.ensure_import(with_import) == with_import


def test_ensure_localization_config_is_inserted_once() -> None:
    content = "  return MaterialApp(\n    home: Home(),\n  );\n"
    rewriter = Rewriter("AppLocalizations")

    updated = rewriter.ensure_localization_config(content)

    assert updated == (
        "  return MaterialApp(\n"
        "    localizationsDelegates: AppLocalizations.localizationsDelegates,\n"
        "    supportedLocales: AppLocalizations.supportedLocales,\n"
        "    home: Home(),\n"
        "  );\n"
    )
    assert rewriter.ensure_localization_config(updated) == updated


def test_ensure_localization_config_supports_router_constructor() -> None:
    content = "CupertinoApp.router(routerConfig: router)\n"
    updated = Rewriter("S").ensure_localization_config(content)

    assert "CupertinoApp.router(\n  localizationsDelegates: S.localizationsDelegates," in updated


def test_part_files_do_not_receive_imports() -> None:
    content = "part of 'main.dart';\n\nWidget title() => Text('Welcome');\n"
    assert is_part_file(content)

    outcome = Rewriter("L", IMPORT).rewrite(content, _replacements(content, ["welcome"]))

    assert outcome.import_skipped_part is True
    assert IMPORT not in outcome.content
    assert "Text(L.of(context).welcome)" in outcome.content


@pytest.mark.parametrize(
    "content",
    [
        "const Center(child: Text('Hi there'))\n",
        "children: const [Text('Apple pie')],\n",
        "const Padding(\n  padding: EdgeInsets.all(8),\n  child: Text('Hello'),\n)\n",
        "const Center(child: const Text('Hi there'))\n",
        "const Holder(items: {1: Text('Inside map')})\n",
        "class Strings {\n  static const greeting = 'Good morning';\n}\n",
        "const Greeting({super.key, this.title = 'Hello there'});\n",
    ],
)
def test_rewrite_leaves_literals_in_constant_expressions(content: str) -> None:
    literals = LiteralScanner().scan(content)
    replacements = [Replacement(literal, f"key{index}") for index, literal in enumerate(literals)]

    outcome = Rewriter("L", IMPORT).rewrite(content, replacements)

    assert outcome.replaced == 0
    assert outcome.skipped_const == len(literals) == 1
    assert outcome.content == content


def test_rewrite_only_skips_the_constant_subtree() -> None:
    content = "Column(children: [const Center(child: Text('Skip me')), Text('Keep me')])\n"
    outcome = Rewriter("L").rewrite(content, _replacements(content, ["skipMe", "keepMe"]))

    assert outcome.replaced == 1
    assert outcome.skipped_const == 1
    assert outcome.content == (
        "Column(children: [const Center(child: Text('Skip me')), Text(L.of(context).keepMe)])\n"
    )


def test_enclosing_const_ignores_brackets_in_strings_and_comments() -> None:
    content = "Row(children: [\n  // const (\n  Text(')'),\n  Text('Label'),\n])\n"
    masked = mask_non_code(content)

    assert enclosing_const(masked, content.index("'Label'")) is None
    assert enclosing_const(mask_non_code("const A(b: 'c')"), 11) == 0
