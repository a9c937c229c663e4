from namedsql.errors import (
    NamedSqlError,
    ParseError,
    DefinitionError,
    MissingRequiredArgument,
    InvalidWhitelistValue,
)
from namedsql.abstract_syntax_tree.models import (
    Annotation,
    Fragment,
    Parameter,
    ParameterKind,
    Statement,
)
from namedsql.arguments.deriver import (
    REQUIRED,
    ArgumentSpec,
    KeywordArgument,
    Required,
    default_for,
    derive_args,
    keyword_vars,
    positional_vars,
)
from namedsql.query import DEFAULT_DOCSTRING, Query
from namedsql.grammar.identifiers import to_identifier
from namedsql.grammar.parser import parse_all, parse_name_line, parse_one, parse_statement
from namedsql.grammar.scanner import scan_query_names
from namedsql.expansion import (
    build_dispatch_tree,
    build_query_tree,
    check_fully_expanded,
    dispatch,
    expand_query,
)
from namedsql.compiler import CompiledQuery, ParamStyle, StatementCompiler, render_source
from namedsql.codegen import CallableDescription, build_callable, describe_query
from namedsql.loading import LoaderSettings, QueryModule, load_queries

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "NamedSqlError",
    "ParseError",
    "DefinitionError",
    "MissingRequiredArgument",
    "InvalidWhitelistValue",
    "Annotation",
    "Fragment",
    "Parameter",
    "ParameterKind",
    "Statement",
    "REQUIRED",
    "ArgumentSpec",
    "KeywordArgument",
    "Required",
    "default_for",
    "derive_args",
    "keyword_vars",
    "positional_vars",
    "DEFAULT_DOCSTRING",
    "Query",
    "to_identifier",
    "parse_all",
    "parse_name_line",
    "parse_one",
    "parse_statement",
    "scan_query_names",
    "build_dispatch_tree",
    "build_query_tree",
    "check_fully_expanded",
    "dispatch",
    "expand_query",
    "CompiledQuery",
    "ParamStyle",
    "StatementCompiler",
    "render_source",
    "CallableDescription",
    "build_callable",
    "describe_query",
    "LoaderSettings",
    "QueryModule",
    "load_queries",
]
