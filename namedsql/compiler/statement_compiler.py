from enum import Enum
from typing import Any, Mapping

from namedsql.abstract_syntax_tree.models import (
    Fragment,
    Parameter,
    ParameterKind,
    Statement,
)
from namedsql.compiler.compiled_query import CompiledQuery
from namedsql.traversal.visitor_pattern import Visitor

# ==================================================
# Parameter Styles
# ==================================================

class ParamStyle(str, Enum):
    """
    The DB-API paramstyles a statement can be rendered in.
    """
    QMARK = "qmark"        # WHERE id = ?
    FORMAT = "format"      # WHERE id = %s
    NUMERIC = "numeric"    # WHERE id = :1
    NAMED = "named"        # WHERE id = :id
    PYFORMAT = "pyformat"  # WHERE id = %(id)s

    @property
    def is_named(self) -> bool:
        return self in (ParamStyle.NAMED, ParamStyle.PYFORMAT)

# ==================================================
# Statement Compiler
# ==================================================

class StatementCompiler(Visitor):
    """
    A visitor that compiles a fully expanded statement into SQL text and bound parameters.
    """

    def __init__(self, param_style: ParamStyle = ParamStyle.FORMAT) -> None:
        self.param_style = ParamStyle(param_style)
        self._values: Mapping[str, Any] = {}
        self._positional: list[Any] = []
        self._named: dict[str, Any] = {}
        self._numbers: dict[str, int] = {}

    def compile(self, statement: Statement, values: Mapping[str, Any]) -> CompiledQuery:
        """
        The main entry point for compiling a statement with the values of its variables.
        """
        # Reset state for each compilation
        self._values = values
        self._positional = []
        self._named = {}
        self._numbers = {}
        sql = self.visit(statement)
        params = self._named if self.param_style.is_named else self._positional
        return CompiledQuery(sql=sql, params=params)

    def visit_Statement(self, node: Statement) -> str:
        return "".join(self.visit(element) for element in node.elements)

    def visit_Fragment(self, node: Fragment) -> str:
        # Format-style drivers read every % in the text as a conversion.
        if self.param_style in (ParamStyle.FORMAT, ParamStyle.PYFORMAT):
            return node.text.replace("%", "%%")
        return node.text

    def visit_Parameter(self, node: Parameter) -> str:
        """
        Binds the parameter through a placeholder so its value never reaches the SQL text.
        """
        if node.is_whitelisted:
            raise ValueError(
                f"Whitelisted parameter '{node.variable}' must be expanded before compilation."
            )
        if node.variable not in self._values:
            raise KeyError(node.variable)
        value = self._values[node.variable]

        if self.param_style is ParamStyle.QMARK:
            self._positional.append(value)
            return "?"
        if self.param_style is ParamStyle.FORMAT:
            self._positional.append(value)
            return "%s"
        if self.param_style is ParamStyle.NUMERIC:
            if node.variable not in self._numbers:
                self._positional.append(value)
                self._numbers[node.variable] = len(self._positional)
            return f":{self._numbers[node.variable]}"

        self._named[node.variable] = value
        if self.param_style is ParamStyle.NAMED:
            return f":{node.variable}"
        return f"%({node.variable})s"

# ==================================================
# Source Renderer
# ==================================================

class SourceRenderer(Visitor):
    """
    Renders a statement back into query file syntax.
    """

    def visit_Statement(self, node: Statement) -> str:
        return "".join(self.visit(element) for element in node.elements)

    def visit_Fragment(self, node: Fragment) -> str:
        return node.text

    def visit_Parameter(self, node: Parameter) -> str:
        marker = ":&" if node.kind is ParameterKind.KEYWORD else ":"
        text = f"{marker}{node.variable}"
        if node.whitelist is not None:
            text += "{" + ",".join(node.whitelist) + "}"
        return text


def render_source(statement: Statement) -> str:
    return SourceRenderer().visit(statement)
