import os
import uuid
from collections.abc import Generator

import pytest

from docanalytics.config.settings import Settings
from docanalytics.store.connection import close_pool, init_pool
from docanalytics.store.postgres_store import PostgresDocumentStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docanalytics_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def postgres_store(integration_pool: None) -> PostgresDocumentStore:
    store = PostgresDocumentStore()
    store.ensure_schema()
    return store


@pytest.fixture
def owner(postgres_store: PostgresDocumentStore) -> Generator[str, None, None]:
    """Unique owner per test; its documents are deleted afterwards."""
    name = f"it-{uuid.uuid4().hex}"
    yield name
    for document in postgres_store.list_by_owner(name):
        postgres_store.delete(document.id)
