"""Command line interface for inspecting named query files."""

import argparse
from pathlib import Path
import sys

from dotenv import load_dotenv

from namedsql.codegen.callables import build_callable
from namedsql.compiler.statement_compiler import ParamStyle
from namedsql.errors import NamedSqlError
from namedsql.expansion.whitelist import count_expansions
from namedsql.grammar.parser import parse_all
from namedsql.grammar.scanner import scan_query_names
from namedsql.loading.settings import LoaderSettings


def _format_spec(spec) -> str:
    if isinstance(spec, tuple):
        annotation, identifier = spec
        return f"{identifier} (@{annotation.value})"
    return spec


def _format_args(query) -> str:
    parts = list(query.args.positional)
    if query.args.keyword:
        parts.append("*")
        for arg in query.args.keyword:
            parts.append(arg.variable if arg.is_required else f"{arg.variable}={arg.default!r}")
    return ", ".join(parts)


def _parse_assignments(pairs: list[str]) -> dict[str, str]:
    values = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"expected name=value, got {pair!r}")
        values[name] = value
    return values


def cmd_names(args, settings: LoaderSettings) -> int:
    text = Path(args.file).read_text(encoding=settings.encoding)
    for spec in scan_query_names(text):
        print(_format_spec(spec))
    return 0


def cmd_show(args, settings: LoaderSettings) -> int:
    text = Path(args.file).read_text(encoding=settings.encoding)
    for query in parse_all(text):
        print(f"{_format_spec(query.call_spec)}({_format_args(query)})  [{count_expansions(query)} statement(s)]")
        if args.verbose:
            print(f"    {query.docstring}")
    return 0


def cmd_render(args, settings: LoaderSettings) -> int:
    text = Path(args.file).read_text(encoding=settings.encoding)
    queries = {query.id: query for query in parse_all(text)}
    if args.query not in queries:
        print(f"error: no query named {args.query!r} in {args.file}", file=sys.stderr)
        return 1
    values = _parse_assignments(args.arg or [])
    query = queries[args.query]
    compiled = build_callable(query, args.style or settings.param_style)(**values)
    print(compiled.sql)
    print(compiled.params)
    return 0


def main(argv=None):
    """Main CLI entry point."""
    load_dotenv()
    parser = argparse.ArgumentParser(
        prog="namedsql",
        description="Inspect files of named SQL queries",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    names = subparsers.add_parser("names", help="List query names (fast, best-effort scan)")
    names.add_argument("file", help="Path to a .sql file")
    names.set_defaults(handler=cmd_names)

    show = subparsers.add_parser("show", help="Parse every query and show its calling convention")
    show.add_argument("file", help="Path to a .sql file")
    show.add_argument("--verbose", "-v", action="store_true", help="Also print docstrings")
    show.set_defaults(handler=cmd_show)

    render = subparsers.add_parser("render", help="Render one query with the given argument values")
    render.add_argument("file", help="Path to a .sql file")
    render.add_argument("query", help="Query id, e.g. get_user_by_id")
    render.add_argument(
        "--style",
        choices=[style.value for style in ParamStyle],
        help="DB-API paramstyle (default: NAMEDSQL_PARAM_STYLE or format)",
    )
    render.add_argument("--arg", action="append", metavar="NAME=VALUE", help="Argument value, repeatable")
    render.set_defaults(handler=cmd_render)

    args = parser.parse_args(argv)

    try:
        settings = LoaderSettings.from_env()
        return args.handler(args, settings)
    except (NamedSqlError, OSError, TypeError, ValueError, argparse.ArgumentTypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
