"""YAML-backed business directory that feeds the search hosts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from smartsearch.config import settings
from smartsearch.errors import DirectoryConfigError
from smartsearch.models import CandidateRecord, CategoryRecord


class DirectoryStore:
    def __init__(self, directory_path: Path) -> None:
        self.directory_path = directory_path
        self._categories: List[CategoryRecord] = []
        self._businesses: Dict[str, CandidateRecord] = {}

    def load(self) -> None:
        if not self.directory_path.exists():
            raise DirectoryConfigError(f"Directory file not found: {self.directory_path}")

        try:
            raw = yaml.safe_load(self.directory_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise DirectoryConfigError(f"Invalid directory YAML: {exc}") from exc
        if not isinstance(raw, dict):
            raise DirectoryConfigError(f"Directory file must contain a mapping: {self.directory_path}")

        categories: List[CategoryRecord] = []
        for entry in _entries(raw, "categories"):
            if not entry.get("id"):
                raise DirectoryConfigError(f"Invalid category definition: {entry}")
            categories.append(CategoryRecord.from_mapping(entry))

        businesses: Dict[str, CandidateRecord] = {}
        for entry in _entries(raw, "businesses"):
            if not entry.get("id") or not isinstance(entry.get("name"), dict):
                raise DirectoryConfigError(f"Invalid business definition: {entry}")
            record = CandidateRecord.from_mapping(entry)
            businesses.setdefault(record.id, record)

        self._categories = categories
        self._businesses = businesses

    def categories(self) -> List[CategoryRecord]:
        return list(self._categories)

    def approved_businesses(self) -> List[CandidateRecord]:
        return [record for record in self._businesses.values() if record.is_approved]

    def get(self, business_id: str) -> CandidateRecord:
        if business_id not in self._businesses:
            raise DirectoryConfigError(f"Unknown business_id={business_id}")
        return self._businesses[business_id]


def _entries(raw: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    entries = raw.get(key) or []
    if not isinstance(entries, list):
        raise DirectoryConfigError(f"Directory '{key}' must be a list")
    return [entry for entry in entries if isinstance(entry, dict)]


def load_directory() -> DirectoryStore:
    store = DirectoryStore(settings.directory_path)
    store.load()
    return store
