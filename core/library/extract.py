"""Library page extraction.

Narrow interface: `extract_summaries(text) -> list[ModelSummary]`. The
rendering side only sees ModelSummary, so the parsing strategy can change
without touching it.

Entry shape expected on the library page::

    <li x-test-model ...>
      <a href="/library/<slug>" ...>
        <div ... title="<Title>"> ... </div>
        <p ...>Description</p>
      </a>
    </li>

Known limitation: duplicate slugs are kept as-is (both entries appear).
"""
from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from .types import ModelSummary

# whole href must match: /library/llama3.1 is not a valid slug
_SLUG_RE = re.compile(r"/library/([a-z0-9-]+)")


def parse_html(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "html.parser")


def element_text(el: Tag) -> str:
    """Visible text of ``el``: child boundaries become spaces, whitespace runs collapse."""
    return " ".join(el.get_text(" ").split())


def _extract_entry(entry: Tag) -> ModelSummary | None:
    link = entry.select_one('a[href^="/library/"]')
    if link is None:
        return None
    slug = _SLUG_RE.fullmatch(link.get("href", ""))
    if not slug:
        return None
    model_id = slug.group(1)
    titled = entry.find(attrs={"title": True})
    title = " ".join(titled["title"].split()) if titled is not None else ""
    para = entry.find("p")
    description = element_text(para) if para is not None else ""
    return ModelSummary(
        id=model_id, title=title or model_id, description=description
    )


def extract_summaries(text: str) -> List[ModelSummary]:
    out: List[ModelSummary] = []
    for entry in parse_html(text).select("li[x-test-model]"):
        summary = _extract_entry(entry)
        if summary is not None:
            out.append(summary)
    return out


__all__ = ["extract_summaries", "element_text", "parse_html"]
