"""Exceptions raised by the extraction pipeline."""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Base exception for l10n-extract failures."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FatalInputError(ExtractionError):
    """Raised when the run cannot start because required input is missing."""


class InputNotFoundError(FatalInputError):
    """Raised when the directory to scan does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Input directory does not exist: {path}",
            details={"path": path},
        )


class ManifestNotFoundError(FatalInputError):
    """Raised when pubspec.yaml is required but missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"pubspec.yaml not found at {path}. Make sure you're in a Flutter project root.",
            details={"path": path},
        )


class ManifestParseError(FatalInputError):
    """Raised when pubspec.yaml exists but is not valid YAML."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to parse {path}: {reason}",
            details={"path": path, "reason": reason},
        )


__all__ = [
    "ExtractionError",
    "FatalInputError",
    "InputNotFoundError",
    "ManifestNotFoundError",
    "ManifestParseError",
]
