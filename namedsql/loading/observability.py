from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import logging
from typing import Any, Callable, Mapping

# ==================================================
# Observability Types
# ==================================================

LoadObserveHook = Callable[["LoadEvent"], None]


@dataclass(frozen=True)
class LoadEvent:
    """
    Structured loader lifecycle event payload.
    """

    timestamp: str
    event: str
    source: str
    success: bool
    metadata: Mapping[str, Any] = field(default_factory=dict)
    query_id: str | None = None
    line: int | None = None
    expansion_count: int | None = None
    duration_ms: float | None = None
    error_type: str | None = None
    error_message: str | None = None


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def load_event_to_dict(event: LoadEvent) -> dict[str, Any]:
    """
    Converts a LoadEvent dataclass into a JSON-safe dictionary.
    """

    return {
        "timestamp": event.timestamp,
        "event": event.event,
        "source": event.source,
        "success": event.success,
        "metadata": dict(event.metadata),
        "query_id": event.query_id,
        "line": event.line,
        "expansion_count": event.expansion_count,
        "duration_ms": event.duration_ms,
        "error_type": event.error_type,
        "error_message": event.error_message,
    }


def make_json_event_logger(
    *,
    logger: logging.Logger,
    level: int = logging.INFO,
) -> LoadObserveHook:
    """
    Builds a LoadObserveHook that emits one JSON log line per LoadEvent.
    """

    def _log_event(event: LoadEvent) -> None:
        payload = load_event_to_dict(event)
        logger.log(level, json.dumps(payload, separators=(",", ":"), sort_keys=True))

    return _log_event


def compose_event_observers(*observers: LoadObserveHook) -> LoadObserveHook:
    """
    Composes multiple event observers into a single observer.
    """

    def _composed(event: LoadEvent) -> None:
        for observer in observers:
            observer(event)

    return _composed
