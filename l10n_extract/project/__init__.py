"""Flutter project collaborators: pubspec inspection and code generation."""

from .gen_l10n import GeneratorOutcome, GeneratorRunner
from .pubspec import Pubspec, import_statement, load_pubspec, missing_dependencies, resolve_import_uri

__all__ = [
    "GeneratorOutcome",
    "GeneratorRunner",
    "Pubspec",
    "import_statement",
    "load_pubspec",
    "missing_dependencies",
    "resolve_import_uri",
]
