import pytest

from namedsql import cli

SOURCE = """\
-- name: get-user
-- Fetch a user.
SELECT * FROM users WHERE id = :id

-- name: user-email @setter
UPDATE users SET email = :email WHERE id = :id

-- name: list-users
SELECT * FROM users ORDER BY :&sort{name,id} :&direction{ASC} LIMIT :&limit
"""


@pytest.fixture
def sql_file(tmp_path, monkeypatch):
    for name in ("NAMEDSQL_PARAM_STYLE", "NAMEDSQL_ON_ERROR", "NAMEDSQL_ENCODING", "NAMEDSQL_MAX_EXPANSIONS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    path = tmp_path / "users.sql"
    path.write_text(SOURCE, encoding="utf-8")
    return str(path)


def test_names(sql_file, capsys):
    assert cli.main(["names", sql_file]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "get_user",
        "user_email (@setter)",
        "list_users",
    ]


def test_show(sql_file, capsys):
    assert cli.main(["show", "-v", sql_file]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "get_user(id)  [1 statement(s)]"
    assert out[1] == "    Fetch a user."
    assert out[2] == "user_email (@setter)(email, id)  [1 statement(s)]"
    assert out[4] == "list_users(*, sort, direction='ASC', limit)  [2 statement(s)]"


def test_render(sql_file, capsys):
    code = cli.main(["render", sql_file, "list_users", "--style", "qmark", "--arg", "sort=name", "--arg", "limit=5"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "SELECT * FROM users ORDER BY name ASC LIMIT ?",
        "['5']",
    ]


def test_render_positional_arguments(sql_file, capsys):
    assert cli.main(["render", sql_file, "user_email", "--arg", "id=7", "--arg", "email=a@b.c"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "UPDATE users SET email = %s WHERE id = %s",
        "['a@b.c', '7']",
    ]


def test_render_invalid_whitelist_value(sql_file, capsys):
    code = cli.main(["render", sql_file, "list_users", "--arg", "sort=password", "--arg", "limit=5"])
    assert code == 1
    assert "Invalid value 'password' for 'sort'" in capsys.readouterr().err


def test_render_unknown_query(sql_file, capsys):
    assert cli.main(["render", sql_file, "nope"]) == 1
    assert "no query named 'nope'" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    assert cli.main(["names", str(tmp_path / "missing.sql")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_render_missing_positional_names_the_missing_argument(sql_file, capsys):
    assert cli.main(["render", sql_file, "user_email", "--arg", "id=7"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error:")
    assert "'email'" in err
