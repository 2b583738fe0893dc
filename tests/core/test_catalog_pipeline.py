import threading
from datetime import datetime

import pytest
import requests

from core import events, metrics
from core.catalog import build_sections, generate_catalog
from core.config import get_config
from core.library import (
    FetchError,
    ModelSummary,
    NoMatchError,
    NoModelsFoundError,
    PageFetcher,
)

from conftest import BASE_URL, FakeSession, detail_page, library_item, library_page

TS = datetime(2024, 1, 2, 3, 4, 5)


def _routes():
    return {
        BASE_URL: library_page(
            library_item("mistral", "Mistral", "A fast model."),
            library_item("foo", "Foo", "Times out."),
            library_item("bar", "Bar", "Plain."),
        ),
        f"{BASE_URL}/mistral": detail_page(
            command="ollama run mistral",
            variants=["mistral:7b 4.1GB 32K Text"],
        ),
        f"{BASE_URL}/foo": requests.ReadTimeout("Read timed out."),
        f"{BASE_URL}/bar": detail_page(),
    }


def test_scenario_single_model_no_filter(tmp_path):
    session = FakeSession({
        BASE_URL: library_page(
            '<li x-test-model><a href="/library/mistral">'
            '<div title="Mistral">Mistral</div>'
            "<p>A fast model.</p></a></li>"
        ),
        f"{BASE_URL}/mistral": detail_page(),
    })
    out = tmp_path / "catalog.html"
    result = generate_catalog(
        get_config(), "", session=session, now=TS, output_path=out
    )
    html = out.read_text(encoding="utf-8")
    assert result.model_count == 1 and result.failed_ids == []
    assert '<h2 id="mistral">Mistral</h2>' in html
    assert "A fast model." in html
    assert "<code>run mistral</code>" in html
    assert "no filter applied" in html


def test_detail_timeout_degrades_only_that_section(tmp_path):
    seen = []
    events.on(lambda name, payload: seen.append((name, payload)))
    out = tmp_path / "catalog.html"
    result = generate_catalog(
        get_config(), "", session=FakeSession(_routes()), now=TS,
        output_path=out,
    )
    html = out.read_text(encoding="utf-8")
    assert result.model_count == 3
    assert result.failed_ids == ["foo"]
    assert html.count('<div class="model">') == 3
    assert "Could not retrieve details for foo." in html
    assert 'href="ollama://run%20mistral%3A7b"' in html
    assert "<code>run bar</code>" in html
    # sorted by title
    assert html.index('id="bar"') < html.index('id="foo"') < html.index(
        'id="mistral"'
    )
    failed = [p for n, p in seen if n == "DetailFetchFailed"]
    assert failed and failed[0]["model_id"] == "foo"
    assert failed[0]["error_type"] == "timeout"
    counters = metrics.snapshot()["counters"]
    assert counters["detail_fetch_failed_total{error_type=timeout}"] == 1
    assert counters["catalog_written_total"] == 1


def test_detail_fetch_uses_shorter_timeout(tmp_path):
    session = FakeSession(_routes())
    generate_catalog(
        get_config(), "", session=session, now=TS,
        output_path=tmp_path / "c.html",
    )
    cfg = get_config()
    timeouts = dict(session.calls)
    assert timeouts[BASE_URL] == cfg.library.timeout_s
    assert timeouts[f"{BASE_URL}/mistral"] == cfg.library.detail_timeout_s


def test_no_match_fails_and_writes_nothing(tmp_path):
    out = tmp_path / "catalog.html"
    with pytest.raises(NoMatchError):
        generate_catalog(
            get_config(), "zzz-no-match", session=FakeSession(_routes()),
            now=TS, output_path=out,
        )
    assert not out.exists()


def test_filter_applied_and_noted(tmp_path):
    out = tmp_path / "catalog.html"
    result = generate_catalog(
        get_config(), "fast", session=FakeSession(_routes()), now=TS,
        output_path=out,
    )
    html = out.read_text(encoding="utf-8")
    assert result.model_count == 1
    assert "filtered by: &#x27;fast&#x27;" in html
    assert 'id="bar"' not in html


def test_library_fetch_failure_is_fatal(tmp_path):
    out = tmp_path / "catalog.html"
    session = FakeSession({BASE_URL: 500})
    with pytest.raises(FetchError) as ei:
        generate_catalog(get_config(), "", session=session, output_path=out)
    assert ei.value.error_type == "http-status"
    assert not out.exists()


def test_no_models_found_is_fatal(tmp_path):
    session = FakeSession({BASE_URL: "<html><ul></ul></html>"})
    with pytest.raises(NoModelsFoundError):
        generate_catalog(
            get_config(), "", session=session,
            output_path=tmp_path / "c.html",
        )


def test_pooled_detail_fetch_keeps_input_order():
    cfg = get_config()
    cfg = cfg.model_copy(
        update={
            "library": cfg.library.model_copy(update={"detail_workers": 4})
        }
    )
    summaries = [
        ModelSummary("mistral", "Mistral"),
        ModelSummary("foo", "Foo"),
        ModelSummary("bar", "Bar"),
    ]
    sections = build_sections(PageFetcher(FakeSession(_routes())), summaries, cfg)
    assert [s.summary.id for s in sections] == ["mistral", "foo", "bar"]
    assert [s.failed for s in sections] == [False, True, False]


def test_pooled_detail_fetch_uses_one_session_per_thread(monkeypatch):
    routes = _routes()
    created = []

    class ThreadBoundSession(FakeSession):
        def __init__(self):
            super().__init__(routes)
            self.threads = set()
            created.append(self)

        def get(self, url, headers=None, timeout=None):
            self.threads.add(threading.get_ident())
            return super().get(url, headers=headers, timeout=timeout)

    monkeypatch.setattr(requests, "Session", ThreadBoundSession)
    cfg = get_config()
    cfg = cfg.model_copy(
        update={
            "library": cfg.library.model_copy(update={"detail_workers": 3})
        }
    )
    summaries = [
        ModelSummary("mistral", "Mistral"),
        ModelSummary("foo", "Foo"),
        ModelSummary("bar", "Bar"),
    ]
    sections = build_sections(PageFetcher(), summaries, cfg)
    assert [s.summary.id for s in sections] == ["mistral", "foo", "bar"]
    assert created
    assert all(len(s.threads) == 1 for s in created)
    threads = {t for s in created for t in s.threads}
    assert len(threads) == len(created)


def test_builtin_tiers_classify_without_config_files(tmp_path):
    out = tmp_path / "catalog.html"
    generate_catalog(
        get_config(), "", session=FakeSession(_routes()), now=TS,
        output_path=out,
    )
    html = out.read_text(encoding="utf-8")
    assert html.count("Classification: Medium LLMs") == 1
    assert html.index("Classification: Medium LLMs") > html.index('id="mistral"')
