"""
Grammar for named query files.

A file is a sequence of definitions, each introduced by a header line::

    -- name: get-user-by-id
    -- Fetch a single user.
    SELECT * FROM users WHERE id = :id

    -- name: set-user-email @setter
    UPDATE users SET email = :email WHERE id = :id

Inside a statement body ``:name`` is a positional parameter and ``:&name`` a keyword
parameter. A whitelist follows the name directly, ``:sort{name, created_at}``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import re

from namedsql.abstract_syntax_tree.models import (
    Annotation,
    Fragment,
    Parameter,
    ParameterKind,
    Statement,
    StatementElement,
)
from namedsql.errors import DefinitionError, ParseError
from namedsql.grammar.identifiers import to_identifier
from namedsql.query import DEFAULT_DOCSTRING, Query

# ==================================================
# Patterns
# ==================================================

_HEADER_PREFIX = re.compile(r"^\s*--\s*name\s*:", re.IGNORECASE)
_HEADER = re.compile(
    r"^\s*--\s*name\s*:\s*(?P<name>[^\s@]+)(?:\s+@(?P<annotation>\S+))?\s*$",
    re.IGNORECASE,
)
_COMMENT_LINE = re.compile(r"^\s*--")
_COMMENT_MARKER = re.compile(r"^\s*--\s?")

_TOKEN = re.compile(
    r"""
      (?P<string>'(?:[^']|'')*')
    | (?P<quoted>"(?:[^"]|"")*")
    | (?P<line_comment>--[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<cast>::)
    | (?P<parameter>:(?P<keyword>&)?(?P<name>[A-Za-z_][A-Za-z0-9_]*))
    | (?P<unterminated>['"]|/\*)
    """,
    re.VERBOSE | re.DOTALL,
)

_ANNOTATIONS = {annotation.value: annotation for annotation in Annotation}


# ==================================================
# Header Lines
# ==================================================


def is_header_line(line: str) -> bool:
    return _HEADER_PREFIX.match(line) is not None


def parse_name_line(line: str, line_number: int | None = None) -> tuple[str, Annotation | None]:
    """
    Parses a ``-- name:`` header into the query name and its optional annotation.
    """
    line = line.rstrip("\r\n")
    if not is_header_line(line):
        raise ParseError(f"Not a query header: {line.strip()!r}", line_number)
    match = _HEADER.match(line)
    if match is None:
        raise ParseError(f"Malformed query header: {line.strip()!r}", line_number)

    annotation: Annotation | None = None
    raw_annotation = match.group("annotation")
    if raw_annotation is not None:
        annotation = _ANNOTATIONS.get(raw_annotation.lower())
        if annotation is None:
            known = ", ".join(f"@{value}" for value in _ANNOTATIONS)
            raise ParseError(f"Unknown annotation '@{raw_annotation}' (expected one of {known})", line_number)
    return match.group("name"), annotation


# ==================================================
# Statement Bodies
# ==================================================


def _parse_whitelist(text: str, start: int, line: int) -> tuple[tuple[str, ...], int]:
    close = text.find("}", start)
    if close == -1:
        raise ParseError("Unterminated whitelist, expected '}'", line)
    raw = text[start + 1:close]
    if "{" in raw:
        raise ParseError("Whitelists cannot be nested", line)
    entries = tuple(entry.strip() for entry in raw.split(","))
    if any(not entry for entry in entries):
        raise ParseError(f"Empty entry in whitelist {{{raw}}}", line)
    return entries, close + 1


def parse_statement(text: str, line: int = 1) -> Statement:
    """
    Splits a statement body into literal fragments and parameters.

    Quoted strings, quoted identifiers, comments and ``::`` casts are copied verbatim.
    ``line`` is the source line of the first character, used in error messages.
    """
    elements: list[StatementElement] = []
    pos = 0
    while True:
        match = _TOKEN.search(text, pos)
        if match is None:
            elements.append(Fragment(text[pos:]))
            break

        token_line = line + text.count("\n", 0, match.start())
        if match.group("unterminated") is not None:
            raise ParseError(f"Unterminated {match.group('unterminated')!r} in statement", token_line)

        if match.group("parameter") is None:
            elements.append(Fragment(text[pos:match.end()]))
            pos = match.end()
            continue

        elements.append(Fragment(text[pos:match.start()]))
        end = match.end()
        whitelist: tuple[str, ...] | None = None
        if text.startswith("{", end):
            whitelist, end = _parse_whitelist(text, end, token_line)

        kind = ParameterKind.KEYWORD if match.group("keyword") else ParameterKind.POSITIONAL
        elements.append(Parameter(variable=to_identifier(match.group("name")), kind=kind, whitelist=whitelist))
        pos = end

    return Statement(tuple(elements))


# ==================================================
# Definitions
# ==================================================


@dataclass
class Definition:
    """
    The raw lines of one definition, keyed by their line number in the source.
    """
    header: str
    line: int
    lines: list[tuple[int, str]] = field(default_factory=list)


def _normalize(text: str) -> str:
    if not text.endswith("\n"):
        text += "\n"
    return text


def split_definitions(text: str) -> list[Definition]:
    """
    Splits a file into definitions without parsing their bodies.
    """
    definitions: list[Definition] = []
    current: Definition | None = None
    for number, line in enumerate(_normalize(text).splitlines(), start=1):
        if is_header_line(line):
            current = Definition(header=line, line=number)
            definitions.append(current)
        elif current is not None:
            current.lines.append((number, line))
        elif line.strip() and not _COMMENT_LINE.match(line):
            raise ParseError("Statement text found before the first '-- name:' header", number)
    return definitions


def _is_filler(line: str) -> bool:
    return not line.strip() or _COMMENT_LINE.match(line) is not None


def parse_definition(definition: Definition) -> Query:
    """
    Builds the Query for one definition: header, docstring comments, then the body.
    """
    name, annotation = parse_name_line(definition.header, definition.line)

    lines = definition.lines
    index = 0
    doc_lines: list[str] = []
    while index < len(lines) and _COMMENT_LINE.match(lines[index][1]):
        doc_lines.append(_COMMENT_MARKER.sub("", lines[index][1]).rstrip())
        index += 1

    body = lines[index:]
    while body and not body[0][1].strip():
        body = body[1:]
    # Trailing blank and comment lines belong to the gap before the next header.
    while body and _is_filler(body[-1][1]):
        body = body[:-1]
    if not body:
        raise ParseError(f"Query '{name}' has no statement body", definition.line)

    text = "\n".join(line for _, line in body).rstrip()
    try:
        statement = parse_statement(text, line=body[0][0])
        return Query(
            name=name,
            statement=statement,
            annotation=annotation,
            docstring="\n".join(doc_lines).strip() or DEFAULT_DOCSTRING,
            line=definition.line,
        )
    except DefinitionError as exc:
        if exc.query_name is None:
            raise DefinitionError(exc.message, name) from exc
        raise


def parse_one(text: str) -> Query:
    """
    Parses text holding exactly one query definition.
    """
    definitions = split_definitions(text)
    if not definitions:
        raise ParseError("No '-- name:' header found")
    if len(definitions) > 1:
        raise ParseError(
            f"Expected a single query definition, found {len(definitions)}",
            definitions[1].line,
        )
    return parse_definition(definitions[0])


def parse_all(text: str) -> list[Query]:
    """
    Parses every query definition in a file, in order.
    """
    return [parse_definition(definition) for definition in split_definitions(text)]
