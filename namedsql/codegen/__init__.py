from namedsql.codegen.callables import (
    CallableDescription,
    CallableParameter,
    QueryCallable,
    build_callable,
    describe_query,
)

__all__ = [
    "CallableDescription",
    "CallableParameter",
    "QueryCallable",
    "build_callable",
    "describe_query",
]
