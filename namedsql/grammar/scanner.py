"""
Best-effort listing of the queries a file exports.

The scanner only looks at header lines and never parses statement bodies, so it is
cheap and tolerates any SQL in between. It is a heuristic: a line that fails to parse
as a header is skipped rather than reported, and a body that would fail the full
parse is still listed. Use ``parse_all`` when correctness matters.
"""
from namedsql.errors import DefinitionError, ParseError
from namedsql.grammar.identifiers import to_identifier
from namedsql.grammar.parser import parse_name_line
from namedsql.query import CallSpec
from namedsql.abstract_syntax_tree.models import Annotation


def scan_query_names(text: str) -> list[CallSpec]:
    """
    Returns the call spec of every header line found in ``text``, in file order.
    """
    specs: list[CallSpec] = []
    for line in text.splitlines():
        try:
            name, annotation = parse_name_line(line)
            identifier = to_identifier(name)
        except (ParseError, DefinitionError):
            continue
        if annotation is Annotation.SETTER:
            specs.append((Annotation.SETTER, identifier))
        else:
            specs.append(identifier)
    return specs
