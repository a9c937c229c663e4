from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from namedsql.compiler.statement_compiler import ParamStyle


# ==================================================
# Loader Settings
# ==================================================

ON_ERROR_CHOICES = ("raise", "skip")
ENV_PREFIX = "NAMEDSQL_"


@dataclass(frozen=True)
class LoaderSettings:
    """
    Settings applied when a query source is loaded into callables.
    """

    param_style: ParamStyle = ParamStyle.FORMAT
    on_error: str = "raise"
    encoding: str = "utf-8"
    max_expansions: int = 1024

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "param_style", ParamStyle(self.param_style))
        except ValueError:
            choices = ", ".join(style.value for style in ParamStyle)
            raise ValueError(f"param_style must be one of {choices}") from None
        if self.on_error not in ON_ERROR_CHOICES:
            raise ValueError(f"on_error must be one of {', '.join(ON_ERROR_CHOICES)}")
        if not self.encoding:
            raise ValueError("encoding must not be empty")
        if self.max_expansions < 1:
            raise ValueError("max_expansions must be >= 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LoaderSettings:
        """
        Reads NAMEDSQL_PARAM_STYLE, NAMEDSQL_ON_ERROR, NAMEDSQL_ENCODING and
        NAMEDSQL_MAX_EXPANSIONS, falling back to the defaults for unset variables.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        max_expansions = env.get(f"{ENV_PREFIX}MAX_EXPANSIONS")
        try:
            limit = int(max_expansions) if max_expansions else defaults.max_expansions
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}MAX_EXPANSIONS must be an integer, got {max_expansions!r}") from None
        return cls(
            param_style=env.get(f"{ENV_PREFIX}PARAM_STYLE", defaults.param_style.value),
            on_error=env.get(f"{ENV_PREFIX}ON_ERROR", defaults.on_error),
            encoding=env.get(f"{ENV_PREFIX}ENCODING", defaults.encoding),
            max_expansions=limit,
        )
