"""String detection, templating, key derivation and rewrite engine."""

from .ignore import IgnoreFilter, should_ignore
from .keys import KeyGenerator, normalize_key
from .rewriter import Replacement, RewriteOutcome, Rewriter
from .scanner import LiteralScanner, classify_context
from .variables import build_placeholders, detect_variables, unescape_literal

__all__ = [
    "IgnoreFilter",
    "KeyGenerator",
    "LiteralScanner",
    "Replacement",
    "RewriteOutcome",
    "Rewriter",
    "build_placeholders",
    "classify_context",
    "detect_variables",
    "normalize_key",
    "should_ignore",
    "unescape_literal",
]
