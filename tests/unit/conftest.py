"""
Pytest configuration for unit tests.

Isolates every test from the user's ~/.reindex and REINDEX_* settings.
"""
import pytest

from reindex.catalog import CatalogRecord, ObjectCatalog


REINDEX_ENV_VARS = [
    "REINDEX_HOME",
    "REINDEX_CATALOG_PATH",
    "REINDEX_SPOOL_PATH",
    "REINDEX_DOCUMENTS_PATH",
    "REINDEX_FAIL_FAST",
    "REINDEX_LOG_LEVEL",
    "REINDEX_CONFIG_PATH",
]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point REINDEX_HOME at a temporary directory."""
    for name in REINDEX_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "reindex-home"
    monkeypatch.setenv("REINDEX_HOME", str(home))
    return home


@pytest.fixture
def catalog(tmp_path):
    """Catalog with two revisions, two tasks and one excluded task."""
    catalog = ObjectCatalog(tmp_path / "catalog.ndjson")
    catalog.add(CatalogRecord(phid="PHID-DREV-1", name="D1", title="Fix parser", body="Handles empty input"))
    catalog.add(CatalogRecord(phid="PHID-DREV-2", name="D2", title="Add cache"))
    catalog.add(CatalogRecord(phid="PHID-TASK-1", name="T1", title="Parser crashes", fields={'status': 'open'}))
    catalog.add(CatalogRecord(phid="PHID-TASK-2", name="T2", title="Slow queries"))
    catalog.add(CatalogRecord(phid="PHID-TASK-3", name="T3", title="Spam", indexable=False))
    return catalog
