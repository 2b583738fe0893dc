"""Minimal in-memory metrics collector.

Purpose:
    - Counters and simple latency samples for a catalog run.
    - Zero external deps; printed at the end of a run on request.

Core API (intentionally tiny):
    inc(name, labels=None, value=1)
    observe(name, value, labels=None)
    snapshot() -> dict (copy for safe reading)

Thread-safety: coarse RLock; detail fetches may run on a small pool.

Catalog metric names (documented for discoverability):
    - fetch_total{kind,status}            kind=library|detail
    - fetch_latency_ms{kind}
    - detail_fetch_failed_total{error_type}
    - models_extracted_total
    - models_filtered_out_total
    - catalog_written_total
    - env_override_total{path}
    - config_validation_errors_total{path,code}
    - handler_exceptions_total{event}
"""
from __future__ import annotations

from threading import RLock
from time import time
from typing import Dict, Tuple, Any

_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = {}
_HIST: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], list] = {}
_LOCK = RLock()


def _norm_labels(labels: dict[str, Any] | None) -> Tuple[Tuple[str, str], ...]:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


def _key_str(name: str, labels: Tuple[Tuple[str, str], ...]) -> str:
    if not labels:
        return name
    return name + "{" + ",".join(f"{k}={v}" for k, v in labels) + "}"


def inc(
    name: str,
    labels: dict[str, Any] | None = None,
    value: float = 1.0,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _COUNTERS[key] = _COUNTERS.get(key, 0.0) + value


def observe(
    name: str,
    value: float,
    labels: dict[str, Any] | None = None,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _HIST.setdefault(key, []).append(value)


def snapshot() -> dict[str, Any]:
    with _LOCK:
        counters = {
            _key_str(name, labels): v
            for (name, labels), v in _COUNTERS.items()
        }
        hist = {}
        for (name, labels), vals in _HIST.items():
            if not vals:
                continue
            ordered = sorted(vals)
            hist[_key_str(name, labels)] = {
                "count": len(vals),
                "min": ordered[0],
                "max": ordered[-1],
                "p50": ordered[len(ordered) // 2],
                "last": vals[-1],
            }
        return {
            "ts": time(),
            "counters": counters,
            "histograms": hist,
        }


def reset_for_tests() -> None:  # pragma: no cover
    with _LOCK:
        _COUNTERS.clear()
        _HIST.clear()


__all__ = [
    "inc",
    "observe",
    "snapshot",
    "reset_for_tests",
]


# ------------------- Helper wrappers (fetch stage) -------------------

def inc_fetch(kind: str, status: str) -> None:
    """Count one page fetch.

    kind: ``library`` or ``detail``; status: ``ok`` or a taxonomy code.
    """
    inc("fetch_total", {"kind": kind, "status": status})


def observe_fetch_latency(kind: str, latency_ms: float) -> None:
    observe("fetch_latency_ms", latency_ms, {"kind": kind})


__all__ += ["inc_fetch", "observe_fetch_latency"]
