from namedsql.loading.loader import QueryModule, load_queries, load_queries_from_path
from namedsql.loading.settings import LoaderSettings
from namedsql.loading.observability import (
    LoadEvent,
    compose_event_observers,
    load_event_to_dict,
    make_json_event_logger,
)

__all__ = [
    "QueryModule",
    "load_queries",
    "load_queries_from_path",
    "LoaderSettings",
    "LoadEvent",
    "compose_event_observers",
    "load_event_to_dict",
    "make_json_event_logger",
]
