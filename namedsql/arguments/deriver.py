from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from namedsql.abstract_syntax_tree.models import Annotation, Parameter, ParameterKind, Statement
from namedsql.errors import DefinitionError


# ==================================================
# Argument Defaults
# ==================================================


class Required:
    """
    Default marker for a keyword argument the caller must always supply.
    """

    _instance: Required | None = None

    def __new__(cls) -> Required:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REQUIRED"

    def __reduce__(self) -> str:
        return "REQUIRED"


REQUIRED = Required()


@dataclass(frozen=True)
class KeywordArgument:
    """
    A keyword argument of a query and the value it takes when omitted.
    """

    variable: str
    default: str | Required = REQUIRED

    @property
    def is_required(self) -> bool:
        return self.default is REQUIRED


@dataclass(frozen=True)
class ArgumentSpec:
    """
    The calling convention of a query: positional variables, then the keyword group.
    """

    positional: tuple[str, ...] = ()
    keyword: tuple[KeywordArgument, ...] = ()

    @property
    def variables(self) -> tuple[str, ...]:
        return self.positional + tuple(arg.variable for arg in self.keyword)

    def __iter__(self) -> Iterator[str | KeywordArgument]:
        yield from self.positional
        yield from self.keyword

    def __len__(self) -> int:
        return len(self.positional) + len(self.keyword)


# ==================================================
# Derivation
# ==================================================


def _unique_variables(statement: Statement, kind: ParameterKind) -> list[str]:
    seen: dict[str, None] = {}
    for parameter in statement.parameters:
        if parameter.kind is kind:
            seen.setdefault(parameter.variable, None)
    return list(seen)


def positional_vars(statement: Statement) -> list[str]:
    """
    Variables of the positional parameters, in first-occurrence order.
    """
    return _unique_variables(statement, ParameterKind.POSITIONAL)


def keyword_vars(statement: Statement) -> list[str]:
    """
    Variables of the keyword parameters, in first-occurrence order.

    A variable that also occurs as a positional parameter is positional only.
    """
    positional = set(positional_vars(statement))
    return [var for var in _unique_variables(statement, ParameterKind.KEYWORD) if var not in positional]


def _first_keyword_occurrence(statement: Statement, var: str) -> Parameter | None:
    for parameter in statement.parameters:
        if parameter.kind is ParameterKind.KEYWORD and parameter.variable == var:
            return parameter
    return None


def default_for(statement: Statement, var: str) -> str | Required:
    """
    Computes the default of a keyword variable.

    Only a whitelist with a single entry can stand in for an omitted argument;
    everything else is REQUIRED, never None.
    """
    parameter = _first_keyword_occurrence(statement, var)
    if parameter is None:
        raise KeyError(var)
    if parameter.whitelist is not None and len(parameter.whitelist) == 1:
        return parameter.whitelist[0]
    return REQUIRED


def check_unique_args(spec: ArgumentSpec, name: str | None = None) -> None:
    """
    Fails when a variable appears more than once across the positional and keyword groups.
    """
    seen: set[str] = set()
    for var in spec.variables:
        if var in seen:
            raise DefinitionError(f"Variable '{var}' appears more than once in the argument list", name)
        seen.add(var)


def derive_args(
    statement: Statement,
    annotation: Annotation | None = None,
    name: str | None = None,
) -> ArgumentSpec:
    """
    Builds the calling convention of a statement and validates it.
    """
    positional = tuple(positional_vars(statement))
    keyword = tuple(
        KeywordArgument(variable=var, default=default_for(statement, var))
        for var in keyword_vars(statement)
    )
    spec = ArgumentSpec(positional=positional, keyword=keyword)
    check_unique_args(spec, name)

    if annotation is Annotation.SETTER and len(positional) < 2:
        raise DefinitionError(
            "Setter queries need at least two positional parameters "
            f"(the new value and at least one key), found {len(positional)}",
            name,
        )
    return spec
