import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from document_analyzer.config.settings import Settings
from document_analyzer.database.connection import close_pool, get_connection, init_pool
from document_analyzer.database.repositories.attachment_repository import AttachmentRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "document_analyzer_test")
    return Settings(attachment_backend="postgres")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        AttachmentRepository().ensure_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    attachment_ids: list[int] = []
    yield attachment_ids
    if not attachment_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for attachment_id in attachment_ids:
                cur.execute("DELETE FROM attachments WHERE id = %s", (attachment_id,))
        conn.commit()
