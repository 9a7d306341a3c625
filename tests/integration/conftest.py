import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import build_conninfo, close_pool, get_connection, init_pool

_SCHEMA = Path(__file__).resolve().parents[2] / "app" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "compliance_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3) as conn:
            conn.execute(_SCHEMA.read_text(encoding="utf-8"))
            conn.commit()
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one.")
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def test_user_id(integration_pool: None) -> Generator[str, None, None]:
    user_id = f"it-{uuid.uuid4()}"
    yield user_id
    with get_connection() as conn:
        conn.execute("DELETE FROM auditor_reports WHERE user_id = %s", (user_id,))
        conn.commit()


@pytest.fixture
def seed_law_modules(db_conn: psycopg.Connection[Any]) -> Generator[list[str], None, None]:
    contents = [
        f"BCEA Section 20 annual leave {uuid.uuid4()}",
        f"BCEA Section 9 ordinary hours {uuid.uuid4()}",
    ]
    ids: list[int] = []
    with db_conn.cursor() as cur:
        for content in contents:
            cur.execute(
                "INSERT INTO law_modules (title, content) VALUES (%s, %s) RETURNING id",
                ("integration", content),
            )
            row = cur.fetchone()
            assert row is not None
            ids.append(row[0])
    db_conn.commit()
    try:
        yield contents
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM law_modules WHERE id = ANY(%s)", (ids,))
        db_conn.commit()
