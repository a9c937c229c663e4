from __future__ import annotations

from dataclasses import dataclass
import inspect
from typing import Any, Callable, Union

from namedsql.arguments.deriver import REQUIRED, Required
from namedsql.compiler.compiled_query import CompiledQuery
from namedsql.compiler.statement_compiler import ParamStyle, StatementCompiler
from namedsql.errors import MissingRequiredArgument
from namedsql.expansion.whitelist import DispatchNode, WhitelistBranch, build_dispatch_tree, dispatch
from namedsql.query import CallSpec, Query

QueryCallable = Callable[..., CompiledQuery]


# ==================================================
# Callable Description
# ==================================================


@dataclass(frozen=True)
class CallableParameter:
    """
    One parameter of a generated callable.
    """

    name: str
    keyword_only: bool = False
    default: str | Required = REQUIRED

    def to_inspect(self) -> inspect.Parameter:
        if not self.keyword_only:
            return inspect.Parameter(self.name, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        return inspect.Parameter(self.name, inspect.Parameter.KEYWORD_ONLY, default=self.default)


@dataclass(frozen=True)
class CallableDescription:
    """
    Everything needed to build the callable for a query: its name, its parameter list
    and the dispatch tree selecting a statement for each call.
    """

    query: Query
    name: str
    call_spec: CallSpec
    docstring: str
    parameters: tuple[CallableParameter, ...]
    tree: DispatchNode

    @property
    def signature(self) -> inspect.Signature:
        return inspect.Signature([parameter.to_inspect() for parameter in self.parameters])

    @property
    def is_dispatching(self) -> bool:
        return isinstance(self.tree, WhitelistBranch)


def describe_query(query: Query) -> CallableDescription:
    """
    Maps a query onto the description of the callable that renders it.
    """
    parameters = [CallableParameter(name=var) for var in query.args.positional]
    parameters.extend(
        CallableParameter(name=arg.variable, keyword_only=True, default=arg.default)
        for arg in query.args.keyword
    )
    return CallableDescription(
        query=query,
        name=query.id,
        call_spec=query.call_spec,
        docstring=query.docstring,
        parameters=tuple(parameters),
        tree=build_dispatch_tree(query),
    )


# ==================================================
# Callable Builder
# ==================================================


def build_callable(
    source: Union[Query, CallableDescription],
    param_style: ParamStyle = ParamStyle.FORMAT,
) -> QueryCallable:
    """
    Builds a function that binds its arguments, picks the matching expansion and
    returns the compiled statement. Nothing is executed.
    """
    description = source if isinstance(source, CallableDescription) else describe_query(source)
    signature = description.signature
    style = ParamStyle(param_style)

    def query_callable(*args: Any, **kwargs: Any) -> CompiledQuery:
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()
        values = dict(bound.arguments)
        for variable, value in values.items():
            if value is REQUIRED:
                raise MissingRequiredArgument(description.name, variable)
        expansion = dispatch(description.tree, values)
        return StatementCompiler(style).compile(expansion.statement, values)

    query_callable.__name__ = description.name
    query_callable.__qualname__ = description.name
    query_callable.__doc__ = description.docstring
    query_callable.__signature__ = signature  # type: ignore[attr-defined]
    query_callable.call_spec = description.call_spec  # type: ignore[attr-defined]
    query_callable.query = description.query  # type: ignore[attr-defined]
    return query_callable
