"""Shared error types for the search engine and its hosts."""

from __future__ import annotations


class LexiconConfigError(Exception):
    """Raised when a lexicon extension file is invalid or missing."""


class DirectoryConfigError(Exception):
    """Raised when the directory data file is invalid or a record is unknown."""
