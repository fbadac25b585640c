"""Extract hardcoded Flutter UI strings into ARB resources."""

__version__ = "0.1.0"
