"""Commit message parsing, linting and repair."""

__version__ = "0.1.0"
