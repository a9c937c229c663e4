import pytest

from namedsql.errors import DefinitionError
from namedsql.grammar.identifiers import to_identifier


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("get-user!", "get_user"),
        ("get-user-by-id", "get_user_by_id"),
        ("userId", "user_id"),
        ("list users", "list_users"),
        ("already_snake", "already_snake"),
        ("2fa-codes", "_2fa_codes"),
        ("class", "class_"),
        ("*count*", "count"),
    ],
)
def test_to_identifier(name: str, expected: str) -> None:
    assert to_identifier(name) == expected


def test_to_identifier_results_are_identifiers() -> None:
    assert to_identifier("set-user-email<->now!").isidentifier()


def test_to_identifier_rejects_names_without_identifier_characters() -> None:
    with pytest.raises(DefinitionError):
        to_identifier("!?!")
