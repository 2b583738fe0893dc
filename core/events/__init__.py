"""Catalog run events + any-subscriber bridge.

Handlers registered with `on(handler)` receive every event as
handler(name, payload). A built-in collector maps events onto metrics
counters; handler exceptions are counted, never propagated.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from time import time
from typing import Any, Callable, Dict, List, Protocol

from core import metrics as _metrics

EventHandler = Callable[[str, Dict[str, Any]], None]


class SupportsEvent(Protocol):  # pragma: no cover
    def to_event(self) -> Dict[str, Any]:  # noqa: D401
        ...


@dataclass(slots=True)
class BaseEvent:
    def to_event(self) -> Dict[str, Any]:  # noqa: D401
        data = asdict(self)
        data["ts"] = data.get("ts") or time()
        return data


@dataclass(slots=True)
class LibraryFetched(BaseEvent):
    url: str
    models_found: int
    latency_ms: int


@dataclass(slots=True)
class DetailFetchFailed(BaseEvent):
    model_id: str
    url: str
    error_type: str
    message: str | None = None


@dataclass(slots=True)
class CatalogWritten(BaseEvent):
    path: str
    model_count: int
    failed_count: int
    filter_text: str = ""


_ANY_SUBS: List[EventHandler] = []


def _metrics_collector(name: str, payload: Dict[str, Any]) -> None:
    if name == "LibraryFetched":
        _metrics.inc(
            "models_extracted_total", value=payload.get("models_found", 0)
        )
    elif name == "DetailFetchFailed":
        _metrics.inc(
            "detail_fetch_failed_total",
            {"error_type": payload.get("error_type", "unknown")},
        )
    elif name == "CatalogWritten":
        _metrics.inc("catalog_written_total")


_ANY_SUBS.append(_metrics_collector)


def emit(ev: BaseEvent | SupportsEvent) -> None:
    name = ev.__class__.__name__
    payload = ev.to_event()
    for h in list(_ANY_SUBS):  # copy for isolation
        try:
            h(name, dict(payload))
        except Exception:  # noqa: BLE001
            _metrics.inc("handler_exceptions_total", {"event": name})


def on(handler: EventHandler) -> None:
    _ANY_SUBS.append(handler)


def subscribe(handler: EventHandler):
    on(handler)

    def _unsub() -> None:  # noqa: D401
        try:
            _ANY_SUBS.remove(handler)
        except ValueError:
            pass
    return _unsub


def reset_listeners_for_tests() -> None:  # pragma: no cover
    _ANY_SUBS.clear()
    _ANY_SUBS.append(_metrics_collector)


__all__ = [
    "emit",
    "on",
    "subscribe",
    "LibraryFetched",
    "DetailFetchFailed",
    "CatalogWritten",
    "reset_listeners_for_tests",
]
