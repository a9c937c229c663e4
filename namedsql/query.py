from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Optional, Union

from namedsql.abstract_syntax_tree.models import Annotation, Statement
from namedsql.arguments.deriver import ArgumentSpec, derive_args
from namedsql.grammar.identifiers import to_identifier

DEFAULT_DOCSTRING = "No docstring provided."

CallSpec = Union[str, tuple[Annotation, str]]

# ==================================================
# Query
# ==================================================

@dataclass(frozen=True)
class Query:
    """
    A named, documented statement together with its calling convention.

    The argument list is derived on construction, so a definition that can never be
    called (for example a setter without a key) fails here rather than at call time.
    Copies made by ``with_statement`` remember the parsed query they came from in
    ``origin``.
    """
    name: str
    statement: Statement
    annotation: Annotation | None = None
    docstring: str = DEFAULT_DOCSTRING
    line: int | None = field(default=None, compare=False)
    origin: Optional["Query"] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.docstring or not self.docstring.strip():
            object.__setattr__(self, "docstring", DEFAULT_DOCSTRING)
        # Both raise DefinitionError for unusable definitions.
        self.id
        self.args

    @cached_property
    def id(self) -> str:
        return to_identifier(self.name)

    @cached_property
    def args(self) -> ArgumentSpec:
        # The setter arity rule applies to the definition, not to its expansions,
        # which may have lost positional variables to whitelist substitution.
        annotation = self.annotation if self.origin is None else None
        return derive_args(self.statement, annotation, self.name)

    @property
    def vars(self) -> tuple[str, ...]:
        """Every variable the statement references, positional first then keyword."""
        return self.args.variables

    @property
    def call_spec(self) -> CallSpec:
        if self.annotation is Annotation.SETTER:
            return (Annotation.SETTER, self.id)
        return self.id

    @property
    def is_setter(self) -> bool:
        return self.annotation is Annotation.SETTER

    def with_statement(self, statement: Statement) -> "Query":
        """
        Returns a copy of this query with a different statement.
        """
        return replace(self, statement=statement, origin=self.origin or self)
