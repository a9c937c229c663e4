import os
import sqlite3
from pathlib import Path

import pytest

from namedsql.compiler.statement_compiler import ParamStyle
from namedsql.loading.loader import load_queries
from namedsql.loading.settings import LoaderSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# In-memory by default; point at a file to inspect the database after a run.
SQLITE_DB_PATH = os.getenv("SQLITE_DB_PATH", ":memory:")

USERS = [
    (1, "carol", "carol@example.com", "2024-01-03"),
    (2, "alice", "alice@example.com", "2024-01-01"),
    (3, "bob", None, "2024-01-02"),
]

@pytest.fixture
def users_sql_path():
    return FIXTURES_DIR / "users.sql"

@pytest.fixture
def sqlite_connection():
    """
    Yields a sqlite3 connection to an empty test database.
    A file database is removed first so every test starts from scratch.
    """
    if SQLITE_DB_PATH != ":memory:":
        db_dir = os.path.dirname(SQLITE_DB_PATH)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        if os.path.exists(SQLITE_DB_PATH):
            os.remove(SQLITE_DB_PATH)

    conn = sqlite3.connect(SQLITE_DB_PATH)
    try:
        yield conn
    finally:
        conn.close()

@pytest.fixture
def queries(users_sql_path):
    """
    The fixture queries rendered in sqlite3's native qmark paramstyle.
    """
    return load_queries(users_sql_path, settings=LoaderSettings(param_style=ParamStyle.QMARK))

@pytest.fixture
def run(sqlite_connection):
    """
    Executes a CompiledQuery and returns all fetched rows.
    """
    def _run(compiled):
        cursor = sqlite_connection.execute(compiled.sql, compiled.params)
        return cursor.fetchall()
    return _run

@pytest.fixture
def seeded(queries, run):
    run(queries.create_users_table())
    for row in USERS:
        run(queries.insert_user(*row))
    return run
