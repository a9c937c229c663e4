import pytest

from namedsql.compiler.statement_compiler import ParamStyle
from namedsql.errors import InvalidWhitelistValue, MissingRequiredArgument
from namedsql.loading.loader import load_queries
from namedsql.loading.settings import LoaderSettings

# ==============================================================================
# 1. Loading the fixture file
# ==============================================================================

def test_fixture_file_exports(queries):
    assert list(queries) == [
        "create_users_table",
        "insert_user",
        "get_user_by_id",
        "list_users",
        "user_email",
        "count_rows",
        "users_created_after",
    ]
    assert queries.get_user_by_id.__doc__ == "Fetch one user by primary key."

# ==============================================================================
# 2. Plain parameters
# ==============================================================================

def test_insert_and_fetch(queries, seeded):
    assert seeded(queries.get_user_by_id(2)) == [(2, "alice", "alice@example.com")]
    assert seeded(queries.get_user_by_id(99)) == []

def test_literal_text_survives_rendering(queries, seeded):
    assert seeded(queries.users_created_after("2024-01-01")) == [("bob",), ("carol",)]

# ==============================================================================
# 3. Whitelisted parameters
# ==============================================================================

@pytest.mark.parametrize(
    ("sort", "direction", "expected"),
    [
        ("name", "ASC", ["alice", "bob", "carol"]),
        ("name", "DESC", ["carol", "bob", "alice"]),
        ("created_at", "ASC", ["alice", "bob", "carol"]),
        ("created_at", "DESC", ["carol", "bob", "alice"]),
    ],
)
def test_every_expansion_runs(queries, seeded, sort, direction, expected):
    rows = seeded(queries.list_users(sort=sort, direction=direction, limit=10))
    assert [name for _, name in rows] == expected

def test_limit_is_bound_not_spliced(queries, seeded):
    compiled = queries.list_users(sort="created_at", direction="DESC", limit=2)
    assert compiled.sql.endswith("LIMIT ?")
    assert [name for _, name in seeded(compiled)] == ["carol", "bob"]

def test_injection_attempt_is_rejected_before_reaching_the_database(queries, seeded):
    with pytest.raises(InvalidWhitelistValue):
        queries.list_users(sort="name; DROP TABLE users", direction="ASC", limit=10)
    assert seeded(queries.count_rows("users")) == [(3,)]

def test_required_keyword_argument(queries):
    with pytest.raises(MissingRequiredArgument):
        queries.list_users(sort="name", limit=10)

def test_positional_whitelist_with_single_entry(queries, seeded):
    assert seeded(queries.count_rows("users")) == [(3,)]
    with pytest.raises(InvalidWhitelistValue):
        queries.count_rows("sqlite_master")

# ==============================================================================
# 4. Setters
# ==============================================================================

def test_setter_updates_the_row(queries, seeded):
    seeded(queries.user_email("bob@example.com", 3))
    assert seeded(queries.get_user_by_id(3)) == [(3, "bob", "bob@example.com")]

# ==============================================================================
# 5. Named paramstyle
# ==============================================================================

def test_named_paramstyle_runs_on_sqlite(users_sql_path, sqlite_connection):
    named = load_queries(users_sql_path, settings=LoaderSettings(param_style=ParamStyle.NAMED))
    sqlite_connection.execute(named.create_users_table().sql)
    compiled = named.insert_user(7, "dave", None, "2024-02-01")
    assert compiled.params == {"id": 7, "name": "dave", "email": None, "created_at": "2024-02-01"}
    sqlite_connection.execute(compiled.sql, compiled.params)
    fetched = named.get_user_by_id(7)
    assert sqlite_connection.execute(fetched.sql, fetched.params).fetchall() == [(7, "dave", None)]
