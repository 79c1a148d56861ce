"""Bilingual (Arabic/English) query understanding and ranking for directory search."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("smart-directory-search")
except PackageNotFoundError:
    __version__ = "0.0.0"
