import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import Database
from app.database.repositories.document_status_repository import status_composite

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "app" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "statements_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_db(test_settings: Settings) -> Generator[Database, None, None]:
    try:
        with psycopg.connect(test_settings.db_conninfo(), connect_timeout=3) as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except psycopg.OperationalError as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    db = Database.from_settings(test_settings)
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_conn(integration_db: Database) -> Generator[psycopg.Connection[Any], None, None]:
    with integration_db.connection() as conn:
        yield conn


@pytest.fixture
def owner_id(integration_db: Database) -> Generator[str, None, None]:
    """A fresh owner whose rows are removed after the test."""
    owner = f"it-{uuid.uuid4()}"
    yield owner
    with integration_db.connection() as conn:
        for table in ("transactions", "document_uploads", "document_credentials"):
            conn.execute(f"DELETE FROM {table} WHERE owner_id = %s", (owner,))
        conn.commit()


@pytest.fixture
def seed_document(db_conn: psycopg.Connection[Any], owner_id: str) -> str:
    document_id = str(uuid.uuid4())
    db_conn.execute(
        """
        INSERT INTO document_uploads
        (owner_id, document_id, filename, document_type, status, status_composite)
        VALUES (%s, %s, %s, %s, 'UPLOADED', %s)
        """,
        (owner_id, document_id, "statement.pdf", "visa", status_composite(owner_id, "UPLOADED")),
    )
    db_conn.commit()
    return document_id
