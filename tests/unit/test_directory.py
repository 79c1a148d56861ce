from pathlib import Path

import pytest

from smartsearch.errors import DirectoryConfigError
from smartsearch.directory import DirectoryStore


def test_directory_store_loads(tmp_path: Path):
    cfg = tmp_path / "directory.yaml"
    cfg.write_text(
        """
        categories:
          - id: cat-cafes
            slug: cafes
            name: {en: Cafes, ar: مقاهي}
        businesses:
          - id: biz-blue-cafe
            name: {en: Blue Café, ar: مقهى الأزرق}
            categoryId: cat-cafes
            city: Muscat
            tags: [coffee]
            isApproved: true
            isVerified: true
          - id: biz-draft
            name: {en: Draft Listing}
            isApproved: false
          - id: biz-blue-cafe
            name: {en: Duplicate}
            isApproved: true
        """,
        encoding="utf-8",
    )

    store = DirectoryStore(cfg)
    store.load()

    assert [category.name.ar for category in store.categories()] == ["مقاهي"]
    approved = store.approved_businesses()
    assert [record.id for record in approved] == ["biz-blue-cafe"]
    assert approved[0].name.en == "Blue Café"
    assert approved[0].is_verified
    assert store.get("biz-draft").is_approved is False


def test_unknown_business_raises(tmp_path: Path):
    cfg = tmp_path / "directory.yaml"
    cfg.write_text("businesses: []")

    store = DirectoryStore(cfg)
    store.load()

    with pytest.raises(DirectoryConfigError):
        store.get("missing")


def test_missing_or_invalid_directory_raises(tmp_path: Path):
    with pytest.raises(DirectoryConfigError):
        DirectoryStore(tmp_path / "missing.yaml").load()

    cfg = tmp_path / "directory.yaml"
    cfg.write_text("businesses:\n  - id: biz-no-name\n")
    with pytest.raises(DirectoryConfigError):
        DirectoryStore(cfg).load()

    cfg.write_text("categories: cafes\n")
    with pytest.raises(DirectoryConfigError):
        DirectoryStore(cfg).load()


def test_sample_directory_is_valid():
    store = DirectoryStore(Path(__file__).resolve().parents[2] / "directory.yaml")
    store.load()

    assert len(store.categories()) == 4
    assert "biz-pending-hotel" not in {record.id for record in store.approved_businesses()}
    assert len(store.approved_businesses()) == 5
