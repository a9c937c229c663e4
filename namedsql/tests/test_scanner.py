import pytest

from namedsql.abstract_syntax_tree.models import Annotation
from namedsql.errors import ParseError
from namedsql.grammar.parser import parse_all
from namedsql.grammar.scanner import scan_query_names

SOURCE = """\
-- Queries for the users table.

-- name: get-user
-- Fetch a user.
SELECT * FROM users WHERE id = :id

-- name: user-email @setter
UPDATE users SET email = :email WHERE id = :id

-- name: @setter
-- name: odd-one @unknown
-- name: broken-body
SELECT 'never closed
"""


def test_scan_query_names_lists_headers_in_order() -> None:
    assert scan_query_names(SOURCE) == [
        "get_user",
        (Annotation.SETTER, "user_email"),
        "broken_body",
    ]


def test_scan_is_more_lenient_than_parse() -> None:
    # The full parse rejects what the scanner silently skips.
    with pytest.raises(ParseError):
        parse_all(SOURCE)


def test_scan_ignores_body_lines() -> None:
    text = "SELECT 1;\n-- name is a column\n-- name: real\nSELECT name FROM t\n"
    assert scan_query_names(text) == ["real"]


def test_scan_empty_text() -> None:
    assert scan_query_names("") == []
