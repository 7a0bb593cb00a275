"""Index and search AI coding assistant rule files."""

__version__ = "0.1.0"
