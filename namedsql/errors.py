from __future__ import annotations

from typing import Sequence


# ==================================================
# Error Taxonomy
# ==================================================


class NamedSqlError(Exception):
    """
    Base type for every error raised by namedsql.
    """


class ParseError(NamedSqlError):
    """
    Raised when definition text does not follow the query file grammar.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class DefinitionError(NamedSqlError):
    """
    Raised when a query definition is well formed but cannot be used as written.
    """

    def __init__(self, message: str, query_name: str | None = None) -> None:
        self.message = message
        self.query_name = query_name
        if query_name is not None:
            message = f"[{query_name}] {message}"
        super().__init__(message)


class MissingRequiredArgument(NamedSqlError, TypeError):
    """
    Raised at call time when a required keyword argument was not supplied.
    """

    def __init__(self, query_name: str, variable: str) -> None:
        self.query_name = query_name
        self.variable = variable
        super().__init__(f"{query_name}() missing required keyword argument: '{variable}'")


class InvalidWhitelistValue(NamedSqlError, ValueError):
    """
    Raised at dispatch time when a whitelisted variable is bound to a value outside its whitelist.
    """

    def __init__(self, variable: str, value: object, whitelist: Sequence[str]) -> None:
        self.variable = variable
        self.value = value
        self.whitelist = tuple(whitelist)
        allowed = ", ".join(repr(entry) for entry in self.whitelist)
        super().__init__(f"Invalid value {value!r} for '{variable}': expected one of {allowed}")
