import pytest

from namedsql.abstract_syntax_tree.models import (
    Fragment,
    Parameter,
    ParameterKind,
    Statement,
)
from namedsql.errors import DefinitionError

def test_fragment_node_init():
    node = Fragment(text="SELECT 1")
    assert node.text == "SELECT 1"

def test_parameter_node_defaults():
    node = Parameter(variable="id")
    assert node.variable == "id"
    assert node.kind is ParameterKind.POSITIONAL
    assert node.whitelist is None
    assert not node.is_whitelisted

def test_parameter_kind_is_coerced_from_string():
    node = Parameter(variable="limit", kind="keyword")
    assert node.kind is ParameterKind.KEYWORD

def test_parameter_whitelist_is_stored_as_tuple():
    node = Parameter(variable="sort", whitelist=["name", "created_at"])
    assert node.whitelist == ("name", "created_at")
    assert node.is_whitelisted

def test_parameter_rejects_empty_whitelist():
    with pytest.raises(DefinitionError) as excinfo:
        Parameter(variable="sort", whitelist=())
    assert "must not be empty" in str(excinfo.value)

def test_parameter_rejects_duplicate_whitelist_entries():
    with pytest.raises(DefinitionError) as excinfo:
        Parameter(variable="direction", whitelist=("ASC", "DESC", "ASC"))
    assert "duplicate entries: ASC" in str(excinfo.value)

def test_parameter_rejects_empty_whitelist_entry():
    with pytest.raises(DefinitionError):
        Parameter(variable="direction", whitelist=("ASC", ""))

def test_parameter_rejects_bare_string_whitelist():
    with pytest.raises(DefinitionError):
        Parameter(variable="direction", whitelist="ASC")

def test_parameter_rejects_invalid_variable():
    with pytest.raises(DefinitionError):
        Parameter(variable="user-id")

def test_statement_merges_adjacent_fragments():
    param = Parameter(variable="id")
    statement = Statement((Fragment("SELECT * "), Fragment("FROM users WHERE id = "), param, Fragment("")))
    assert statement.elements == (Fragment("SELECT * FROM users WHERE id = "), param)

def test_statement_keeps_parameter_objects():
    first = Parameter(variable="dir", whitelist=("asc", "desc"))
    second = Parameter(variable="dir", whitelist=("asc", "desc"))
    statement = Statement([first, Fragment(", "), second])
    assert statement.parameters[0] is first
    assert statement.parameters[1] is second
    assert statement.whitelisted_parameters == (first, second)

def test_statement_rejects_unknown_elements():
    with pytest.raises(TypeError):
        Statement(("SELECT 1",))

def test_statements_are_immutable():
    statement = Statement((Fragment("SELECT 1"),))
    with pytest.raises(AttributeError):
        statement.elements = ()
