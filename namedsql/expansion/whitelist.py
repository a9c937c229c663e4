from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from namedsql.abstract_syntax_tree.models import ASTNode, Fragment, Parameter, Statement
from namedsql.errors import InvalidWhitelistValue
from namedsql.query import Query
from namedsql.traversal.visitor_pattern import Transformer, Visitor

QueryVisitor = Callable[[Query], Any]


# ==================================================
# Dispatch Tree
# ==================================================


@dataclass(frozen=True)
class DispatchNode(ASTNode):
    """
    Base class for the nodes of a whitelist dispatch tree.
    """


@dataclass(frozen=True)
class ExpansionLeaf(DispatchNode):
    """
    A fully expanded query: no whitelisted parameter remains in its statement.
    """

    query: Query


@dataclass(frozen=True)
class WhitelistBranch(DispatchNode):
    """
    A choice on the runtime value of one whitelisted variable.

    ``choices`` pairs each whitelist entry, in declaration order, with the subtree
    built after substituting that entry.
    """

    variable: str
    whitelist: tuple[str, ...]
    choices: tuple[tuple[str, DispatchNode], ...]


# ==================================================
# Substitution
# ==================================================


class _SubstituteFirst(Transformer):
    """
    Replaces the first occurrence of one parameter object with literal text.
    """

    def __init__(self, parameter: Parameter, text: str) -> None:
        self._parameter = parameter
        self._text = text
        self._done = False

    def visit_Statement(self, node: Statement) -> Statement:
        return Statement(tuple(self.visit(element) for element in node.elements))

    def visit_Parameter(self, node: Parameter) -> ASTNode:
        if self._done or node is not self._parameter:
            return node
        self._done = True
        return Fragment(self._text)


def substitute_first(statement: Statement, parameter: Parameter, text: str) -> Statement:
    """
    Returns a new statement with the first occurrence of ``parameter`` replaced by ``text``.
    """
    return _SubstituteFirst(parameter, text).visit(statement)


def check_fully_expanded(query: Query) -> bool:
    return not query.statement.whitelisted_parameters


def count_expansions(query: Query) -> int:
    count = 1
    for parameter in query.statement.whitelisted_parameters:
        count *= len(parameter.whitelist)
    return count


# ==================================================
# Expansion
# ==================================================


def build_query_tree(query: Query, visit: QueryVisitor) -> None:
    """
    Calls ``visit`` once for every concrete expansion of ``query``.

    Whitelisted parameters are expanded in statement order and their entries in
    declaration order, so the sequence of visited queries is deterministic.
    """
    pending = query.statement.whitelisted_parameters
    if not pending:
        visit(query)
        return
    parameter = pending[0]
    for entry in parameter.whitelist:
        build_query_tree(query.with_statement(substitute_first(query.statement, parameter, entry)), visit)


def expand_query(query: Query) -> list[Query]:
    expansions: list[Query] = []
    build_query_tree(query, expansions.append)
    return expansions


def build_dispatch_tree(query: Query) -> DispatchNode:
    """
    Builds the decision tree selecting an expansion from runtime argument values.
    """
    pending = query.statement.whitelisted_parameters
    if not pending:
        return ExpansionLeaf(query)
    parameter = pending[0]
    choices = tuple(
        (entry, build_dispatch_tree(query.with_statement(substitute_first(query.statement, parameter, entry))))
        for entry in parameter.whitelist
    )
    return WhitelistBranch(variable=parameter.variable, whitelist=parameter.whitelist, choices=choices)


# ==================================================
# Runtime Dispatch
# ==================================================


class Dispatcher(Visitor):
    """
    Walks a dispatch tree against the values supplied for a call.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = values

    def visit_ExpansionLeaf(self, node: ExpansionLeaf) -> Query:
        return node.query

    def visit_WhitelistBranch(self, node: WhitelistBranch) -> Query:
        value = self._values.get(node.variable)
        for entry, subtree in node.choices:
            if value == entry:
                return self.visit(subtree)
        raise InvalidWhitelistValue(node.variable, value, node.whitelist)


def dispatch(tree: DispatchNode, values: Mapping[str, Any]) -> Query:
    """
    Selects the expansion matching ``values``; values outside a whitelist are rejected.
    """
    return Dispatcher(values).visit(tree)
