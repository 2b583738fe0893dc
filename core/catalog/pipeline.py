"""Catalog generation pipeline.

library fetch → extract → filter/sort → per-model detail fetch → render →
write. Fatal: library fetch failure, no models, no match, invalid filter.
A failed detail fetch only degrades that model's section.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from time import perf_counter
from typing import List, Sequence

import requests

from core import events, metrics
from core.config import AggregatedConfig
from core.library.exceptions import FetchError, NoModelsFoundError
from core.library.extract import extract_summaries
from core.library.fetcher import PageFetcher, detail_url
from core.library.filtering import filter_models, sort_models
from core.library.types import ModelSection, ModelSummary
from core.library.variants import parse_detail_page
from core.logging_setup import get_logger

from .classification import build_classification
from .renderer import render_catalog
from .writer import resolve_output_path, write_catalog

log = get_logger("catalog")


@dataclass(slots=True)
class CatalogResult:
    path: Path
    model_count: int
    failed_ids: List[str] = field(default_factory=list)


def load_summaries(
    fetcher: PageFetcher, base_url: str, timeout_s: float
) -> List[ModelSummary]:
    t0 = perf_counter()
    text = fetcher.fetch(base_url, timeout_s, kind="library")
    summaries = extract_summaries(text)
    events.emit(
        events.LibraryFetched(
            url=base_url,
            models_found=len(summaries),
            latency_ms=int((perf_counter() - t0) * 1000),
        )
    )
    if not summaries:
        raise NoModelsFoundError(f"no model entries found at {base_url}")
    return summaries


def _build_section(
    fetcher: PageFetcher, summary: ModelSummary, cfg: AggregatedConfig
) -> ModelSection:
    url = detail_url(cfg.library.base_url, summary.id)
    try:
        text = fetcher.fetch(url, cfg.library.detail_timeout_s, kind="detail")
    except FetchError as e:
        events.emit(
            events.DetailFetchFailed(
                model_id=summary.id,
                url=url,
                error_type=e.error_type,
                message=str(e.cause),
            )
        )
        return ModelSection(summary=summary, error=e)
    detail = parse_detail_page(
        summary.id,
        text,
        link_prefix=cfg.runner.link_prefix,
        runner=cfg.runner.executable,
    )
    return ModelSection(summary=summary, detail=detail)


def build_sections(
    fetcher: PageFetcher,
    summaries: Sequence[ModelSummary],
    cfg: AggregatedConfig,
) -> List[ModelSection]:
    """One section per summary, in input order, whatever the fetch outcome."""
    workers = cfg.library.detail_workers
    if workers <= 1 or len(summaries) <= 1:
        return [_build_section(fetcher, s, cfg) for s in summaries]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order, not completion order
        return list(
            pool.map(lambda s: _build_section(fetcher, s, cfg), summaries)
        )


def generate_catalog(
    cfg: AggregatedConfig,
    filter_text: str = "",
    *,
    session: requests.Session | None = None,
    now: datetime | None = None,
    output_path: str | Path | None = None,
) -> CatalogResult:
    fetcher = PageFetcher(session, user_agent=cfg.library.user_agent)
    summaries = load_summaries(
        fetcher, cfg.library.base_url, cfg.library.timeout_s
    )
    kept = filter_models(
        summaries, filter_text, case_sensitive=cfg.filter.case_sensitive
    )
    if len(kept) < len(summaries):
        metrics.inc("models_filtered_out_total", value=len(summaries) - len(kept))
    ordered = sort_models(kept)
    log.info(
        "models found=%d kept=%d filter=%r",
        len(summaries),
        len(ordered),
        filter_text,
    )

    sections = build_sections(fetcher, ordered, cfg)
    failed = [s.summary.id for s in sections if s.failed]
    if failed:
        log.warning("detail fetch failed for %s", ", ".join(failed))

    text = render_catalog(
        sections,
        generated_at=now or datetime.now(),
        filter_text=filter_text,
        classification=build_classification(cfg.classification.tiers),
        source_base_url=cfg.library.base_url,
        link_prefix=cfg.runner.link_prefix,
    )
    path = Path(output_path) if output_path else resolve_output_path(
        cfg.output.directory, cfg.output.filename
    )
    write_catalog(text, path)
    events.emit(
        events.CatalogWritten(
            path=str(path),
            model_count=len(sections),
            failed_count=len(failed),
            filter_text=filter_text,
        )
    )
    log.info("catalog written path=%s sections=%d", path, len(sections))
    return CatalogResult(path=path, model_count=len(sections), failed_ids=failed)


__all__ = [
    "CatalogResult",
    "load_summaries",
    "build_sections",
    "generate_catalog",
]
