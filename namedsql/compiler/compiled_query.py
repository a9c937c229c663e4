from dataclasses import dataclass, field
from typing import Any

# ==================================================
# Compiled Output
# ==================================================

@dataclass
class CompiledQuery:
    """
    Represents the result of the compilation process.

    ``params`` is a list for positional paramstyles and a dict for named ones, ready
    to be passed to a DB-API ``cursor.execute``.
    """
    sql: str
    params: list[Any] | dict[str, Any] = field(default_factory=list)
