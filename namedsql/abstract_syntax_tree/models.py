from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from namedsql.errors import DefinitionError

# ==================================================
# Base classes
# ==================================================
@dataclass(frozen=True)
class ASTNode(ABC):
    """
    A generic AST node. All specific AST node types will inherit from this base class.
    """
    pass

@dataclass(frozen=True)
class StatementElement(ASTNode):
    """
    A base class for the elements a statement body is made of.
    """
    pass

# ==================================================
# Enumerations
# ==================================================

class ParameterKind(str, Enum):
    """How a parameter is supplied by a caller."""
    POSITIONAL = "positional"
    KEYWORD = "keyword"

class Annotation(str, Enum):
    """Optional tag on a query header that changes its calling convention."""
    SETTER = "setter"

# ==================================================
# Statement elements
# ==================================================

@dataclass(frozen=True)
class Fragment(StatementElement):
    """
    Represents a run of literal statement text, copied verbatim into the output.
    """
    text: str

@dataclass(frozen=True)
class Parameter(StatementElement):
    """
    Represents a single placeholder occurrence inside a statement.

    A parameter carrying a whitelist is never bound through a driver placeholder:
    the statement text is specialized once per whitelist entry instead.
    """
    variable: str
    kind: ParameterKind = ParameterKind.POSITIONAL
    whitelist: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if not self.variable.isidentifier():
            raise DefinitionError(f"Parameter variable {self.variable!r} is not a valid identifier")
        object.__setattr__(self, "kind", ParameterKind(self.kind))
        if self.whitelist is None:
            return
        if isinstance(self.whitelist, str):
            raise DefinitionError(f"Whitelist for '{self.variable}' must be a sequence of strings")
        whitelist = tuple(self.whitelist)
        object.__setattr__(self, "whitelist", whitelist)
        if not whitelist:
            raise DefinitionError(f"Whitelist for '{self.variable}' must not be empty")
        for entry in whitelist:
            if not isinstance(entry, str) or not entry:
                raise DefinitionError(f"Whitelist for '{self.variable}' contains an empty entry")
        if len(set(whitelist)) != len(whitelist):
            duplicates = sorted({entry for entry in whitelist if whitelist.count(entry) > 1})
            raise DefinitionError(
                f"Whitelist for '{self.variable}' contains duplicate entries: {', '.join(duplicates)}"
            )

    @property
    def is_whitelisted(self) -> bool:
        return self.whitelist is not None

# ==================================================
# Statement
# ==================================================

@dataclass(frozen=True)
class Statement(ASTNode):
    """
    Represents a parsed statement body: an ordered sequence of fragments and parameters.

    Adjacent fragments are merged and empty fragments dropped, so two statements with
    the same text and parameters always compare equal.
    """
    elements: tuple[StatementElement, ...] = ()

    def __post_init__(self) -> None:
        merged: list[StatementElement] = []
        for element in self.elements:
            if isinstance(element, Fragment):
                if not element.text:
                    continue
                if merged and isinstance(merged[-1], Fragment):
                    merged[-1] = Fragment(merged[-1].text + element.text)
                    continue
            elif not isinstance(element, Parameter):
                raise TypeError(f"Unsupported statement element: {element!r}")
            merged.append(element)
        object.__setattr__(self, "elements", tuple(merged))

    def __iter__(self) -> Iterator[StatementElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        return tuple(e for e in self.elements if isinstance(e, Parameter))

    @property
    def whitelisted_parameters(self) -> tuple[Parameter, ...]:
        return tuple(p for p in self.parameters if p.is_whitelisted)
