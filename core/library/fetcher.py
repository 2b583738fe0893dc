"""Page fetcher: single GET with a bounded timeout, no retries.

Every transport / timeout / HTTP-status failure leaves this module as a
`FetchError`; callers decide whether it is fatal (library page) or degrades
one section (detail page).
"""
from __future__ import annotations

import threading
from time import perf_counter

import requests

from core import metrics
from core.errors import map_exception
from core.logging_setup import get_logger

from .exceptions import FetchError

DEFAULT_USER_AGENT = "odash-catalog/0.1"

log = get_logger("fetch")


class PageFetcher:
    """GETs pages for the catalog pipeline.

    Without an injected session each thread lazily gets its own
    `requests.Session`, so one fetcher can serve a detail worker pool. An
    injected session is shared as-is.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._shared_session = session
        self._local = threading.local()
        self._headers = {"User-Agent": user_agent}

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def fetch(self, url: str, timeout_s: float, kind: str = "detail") -> str:
        t0 = perf_counter()
        try:
            resp = self.session.get(
                url, headers=self._headers, timeout=timeout_s
            )
            resp.raise_for_status()
            text = resp.text
        except requests.RequestException as e:
            error_type = map_exception(e, "fetch")
            metrics.inc_fetch(kind, error_type)
            log.warning(
                "fetch failed url=%s error_type=%s cause=%s",
                url,
                error_type,
                e,
            )
            raise FetchError(url, e, error_type) from e
        latency_ms = (perf_counter() - t0) * 1000
        metrics.inc_fetch(kind, "ok")
        metrics.observe_fetch_latency(kind, latency_ms)
        log.debug("fetched url=%s bytes=%d ms=%.0f", url, len(text), latency_ms)
        return text


def fetch(
    url: str,
    timeout_s: float,
    session: requests.Session | None = None,
) -> str:
    """One-shot convenience wrapper around `PageFetcher.fetch`."""
    return PageFetcher(session).fetch(url, timeout_s)


def detail_url(base_url: str, model_id: str) -> str:
    return f"{base_url.rstrip('/')}/{model_id}"


__all__ = ["PageFetcher", "fetch", "detail_url", "DEFAULT_USER_AGENT"]
