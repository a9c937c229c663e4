from __future__ import annotations

import logging
import os
from pathlib import Path
import time
from typing import Iterator, TextIO, Union

from namedsql.codegen.callables import QueryCallable, build_callable
from namedsql.errors import DefinitionError, ParseError
from namedsql.expansion.whitelist import count_expansions
from namedsql.grammar.parser import parse_definition, split_definitions
from namedsql.loading.observability import LoadEvent, LoadObserveHook, utc_timestamp
from namedsql.loading.settings import LoaderSettings
from namedsql.query import CallSpec, Query

logger = logging.getLogger(__name__)

QuerySource = Union[str, "os.PathLike[str]", TextIO]


# ==================================================
# Query Module
# ==================================================


class QueryModule:
    """
    The callables generated for one query source, exposed as attributes by query id.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.queries: dict[str, Query] = {}
        self.callables: dict[str, QueryCallable] = {}

    def _add(self, query: Query, function: QueryCallable) -> None:
        self.queries[query.id] = query
        self.callables[query.id] = function

    def __getattr__(self, name: str) -> QueryCallable:
        callables = self.__dict__.get("callables", {})
        if name in callables:
            return callables[name]
        raise AttributeError(f"{self.source!r} defines no query named {name!r}")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.callables))

    def __contains__(self, name: object) -> bool:
        return name in self.callables

    def __iter__(self) -> Iterator[str]:
        return iter(self.callables)

    def __len__(self) -> int:
        return len(self.callables)

    def __repr__(self) -> str:
        return f"<QueryModule {self.source!r} ({len(self)} queries)>"

    def exports(self) -> list[CallSpec]:
        """
        Call specs of every loaded query, in source order.
        """
        return [query.call_spec for query in self.queries.values()]


# ==================================================
# Loading
# ==================================================


def _read_source(source: QuerySource, encoding: str) -> tuple[str, str]:
    if isinstance(source, str):
        return "<string>", source
    if isinstance(source, os.PathLike):
        path = Path(source)
        return str(path), path.read_text(encoding=encoding)
    return getattr(source, "name", "<stream>"), source.read()


def _emit(observer: LoadObserveHook | None, event: LoadEvent) -> None:
    if observer is not None:
        observer(event)


def load_queries(
    source: QuerySource,
    *,
    settings: LoaderSettings | None = None,
    observer: LoadObserveHook | None = None,
) -> QueryModule:
    """
    Parses a query source and builds one callable per definition.

    ``source`` is SQL text, a path, or an open text stream. A definition that fails
    to parse or validate aborts the load, unless ``settings.on_error`` is ``"skip"``
    in which case it is logged and left out of the module. Statement text before the
    first header is a source-level error: it always raises, whatever ``on_error`` says,
    after a failed ``source_loaded`` event has been emitted.
    """
    settings = settings or LoaderSettings()
    source_name, text = _read_source(source, settings.encoding)
    started = time.perf_counter()

    module = QueryModule(source_name)
    try:
        definitions = split_definitions(text)
    except ParseError as exc:
        _emit(
            observer,
            LoadEvent(
                timestamp=utc_timestamp(),
                event="source_loaded",
                source=source_name,
                success=False,
                line=exc.line,
                duration_ms=(time.perf_counter() - started) * 1000,
                error_type=type(exc).__name__,
                error_message=str(exc),
                metadata={"query_count": 0, "rejected_count": 0},
            ),
        )
        raise

    rejected = 0
    for definition in definitions:
        try:
            query = parse_definition(definition)
            expansions = count_expansions(query)
            if expansions > settings.max_expansions:
                raise DefinitionError(
                    f"Whitelists expand to {expansions} statements, more than the limit of {settings.max_expansions}",
                    query.name,
                )
            if query.id in module:
                raise DefinitionError(f"Duplicate query id '{query.id}'", query.name)
            function = build_callable(query, settings.param_style)
        except (ParseError, DefinitionError) as exc:
            rejected += 1
            _emit(
                observer,
                LoadEvent(
                    timestamp=utc_timestamp(),
                    event="query_rejected",
                    source=source_name,
                    success=False,
                    line=definition.line,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                ),
            )
            if settings.on_error == "raise":
                raise
            logger.warning("Skipping query defined at %s:%d: %s", source_name, definition.line, exc)
            continue

        module._add(query, function)
        _emit(
            observer,
            LoadEvent(
                timestamp=utc_timestamp(),
                event="query_loaded",
                source=source_name,
                success=True,
                query_id=query.id,
                line=query.line,
                expansion_count=expansions,
            ),
        )

    _emit(
        observer,
        LoadEvent(
            timestamp=utc_timestamp(),
            event="source_loaded",
            source=source_name,
            success=rejected == 0,
            duration_ms=(time.perf_counter() - started) * 1000,
            metadata={"query_count": len(module), "rejected_count": rejected},
        ),
    )
    return module


def load_queries_from_path(path: Union[str, "os.PathLike[str]"], **kwargs) -> QueryModule:
    """
    Like ``load_queries`` but treats a plain string as a file path.
    """
    return load_queries(Path(path), **kwargs)

