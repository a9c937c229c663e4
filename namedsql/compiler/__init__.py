from namedsql.compiler.compiled_query import CompiledQuery
from namedsql.compiler.statement_compiler import ParamStyle, SourceRenderer, StatementCompiler, render_source

__all__ = [
    "CompiledQuery",
    "ParamStyle",
    "SourceRenderer",
    "StatementCompiler",
    "render_source",
]
