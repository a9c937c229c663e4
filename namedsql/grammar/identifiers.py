import keyword
import re

from namedsql.errors import DefinitionError

# ==================================================
# Identifier Normalization
# ==================================================

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_IDENTIFIER = re.compile(r"[^0-9a-z_]+")


def to_identifier(name: str) -> str:
    """
    Maps a source-level name onto a Python identifier.

    ``get-user!`` becomes ``get_user`` and ``userId`` becomes ``user_id``.
    """
    text = _CAMEL_BOUNDARY.sub("_", name.strip()).lower()
    text = _NON_IDENTIFIER.sub("_", text).strip("_")
    if not text:
        raise DefinitionError(f"Name {name!r} does not contain any identifier characters")
    if text[0].isdigit():
        text = f"_{text}"
    if keyword.iskeyword(text):
        text = f"{text}_"
    return text
