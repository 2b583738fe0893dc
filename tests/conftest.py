"""Pytest configuration ensuring project root is importable.

Adds repository root and src/ to sys.path, isolates config/env/metrics
between tests and provides a stub HTTP session (no network in tests).
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
import os
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import requests  # noqa: E402

BASE_URL = "https://ollama.com/library"


def _drop_odash_handlers() -> None:
    logger = logging.getLogger("odash")
    for h in list(logger.handlers):
        if getattr(h, "_odash_handler", False):
            logger.removeHandler(h)


@pytest.fixture(autouse=True)
def _isolate_config_env(tmp_path_factory, monkeypatch):  # noqa: D401
    """Ensure global config/env side effects do not leak between tests.

    - Point ODASH_CONFIG_DIR at an empty dir (schema defaults)
    - Drop ODASH__* overrides inherited from the shell
    - Clear config cache, metrics and event listeners
    """
    from core import events, metrics
    from core.config import clear_config_cache  # local import

    cfg_dir = tmp_path_factory.mktemp("configs")
    monkeypatch.setenv("ODASH_CONFIG_DIR", str(cfg_dir))
    for key in list(os.environ):
        if key.startswith("ODASH__"):
            monkeypatch.delenv(key)
    clear_config_cache()
    metrics.reset_for_tests()
    events.reset_listeners_for_tests()
    try:
        yield cfg_dir
    finally:
        clear_config_cache()
        events.reset_listeners_for_tests()
        _drop_odash_handlers()


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(
                f"{self.status_code} Error", response=self
            )


class FakeSession:
    """Maps url → text | status int | exception instance."""

    def __init__(self, routes: dict | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, float]] = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, timeout))
        target = self.routes.get(url)
        if target is None:
            return FakeResponse("", 404)
        if isinstance(target, BaseException):
            raise target
        if isinstance(target, int):
            return FakeResponse("", target)
        return FakeResponse(target)


def library_item(slug: str, title: str | None = None, desc: str = "") -> str:
    title_attr = f' title="{title}"' if title is not None else ""
    return (
        f'<li x-test-model class="flex">'
        f'<a href="/library/{slug}" class="group">'
        f'<div x-test-model-title{title_attr}><h2>{slug}</h2></div>'
        f'<p class="max-w-lg">{desc}</p>'
        f"</a></li>"
    )


def library_page(*items: str) -> str:
    return (
        "<html><body><ul role=\"list\">"
        + "".join(items)
        + "</ul></body></html>"
    )


def detail_page(command: str | None = None, variants: list[str] | None = None) -> str:
    parts = ["<html><body>"]
    if command is not None:
        parts.append(
            f'<input class="command" name="command" value="{command}" readonly>'
        )
    if variants is not None:
        parts.append('<ul role="list" class="tags">')
        for v in variants:
            parts.append(f"<li>{v}</li>")
        parts.append("</ul>")
    parts.append("</body></html>")
    return "".join(parts)
