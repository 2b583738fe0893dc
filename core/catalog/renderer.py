"""Static HTML catalog rendering.

Document order:
    header (title, timestamp, filter notice)
    system requirements table (static)
    navigation index
    one section per model (success or error branch)
    footer

Output depends only on the arguments: same sections + same timestamp give
byte-identical text.
"""
from __future__ import annotations

import html
from datetime import datetime
from typing import Iterable, List, Sequence

from core.library.types import DetailPage, ModelSection, VariantRecord
from core.library.variants import (
    DEFAULT_LINK_PREFIX,
    launch_link,
    run_command,
)

from .classification import EMPTY, ClassificationMap, classify

DOCUMENT_TITLE = "Ollama Model Catalog"
DEFAULT_SOURCE_BASE = "https://ollama.com/library"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# (model size, min RAM, recommended GPU VRAM, typical use)
SYSTEM_REQUIREMENTS = [
    ("1B - 4B", "8 GB", "4 GB", "Small LLMs: quick chat, edge devices"),
    ("7B - 9B", "16 GB", "8 GB", "Medium LLMs: general assistants"),
    ("13B - 14B", "16 GB", "12 GB", "Medium LLMs: stronger reasoning"),
    ("30B - 34B", "32 GB", "24 GB", "Large LLMs: coding, long documents"),
    ("70B+", "64 GB", "48 GB", "Very large LLMs: workstation / multi-GPU"),
]

_STYLE = """\
body { font-family: Segoe UI, Arial, sans-serif; margin: 2em; color: #222; }
table { border-collapse: collapse; margin: 1em 0; }
th, td { border: 1px solid #ccc; padding: 4px 10px; text-align: left; }
th { background: #f0f0f0; }
.model { border-top: 1px solid #ddd; padding-top: 0.5em; }
.error { color: #b00020; font-weight: bold; }
.tier { color: #555; font-style: italic; }
code { background: #f6f6f6; padding: 1px 4px; }"""


def esc(s) -> str:
    return html.escape(str(s)) if s else ""


def filter_notice(filter_text: str) -> str:
    if filter_text:
        return f"filtered by: '{filter_text}'"
    return "no filter applied"


def _header(generated_at: datetime, filter_text: str) -> List[str]:
    return [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{esc(DOCUMENT_TITLE)}</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        f'<h1 id="top">{esc(DOCUMENT_TITLE)}</h1>',
        f'<p class="generated">Generated: '
        f"{esc(generated_at.strftime(TIMESTAMP_FORMAT))}</p>",
        f'<p class="filter">{esc(filter_notice(filter_text))}</p>',
    ]


def _requirements_table() -> List[str]:
    lines = [
        "<h2>System requirements</h2>",
        "<table>",
        "<tr><th>Model size</th><th>RAM</th><th>GPU VRAM</th>"
        "<th>Typical use</th></tr>",
    ]
    for size, ram, vram, use in SYSTEM_REQUIREMENTS:
        lines.append(
            f"<tr><td>{esc(size)}</td><td>{esc(ram)}</td>"
            f"<td>{esc(vram)}</td><td>{esc(use)}</td></tr>"
        )
    lines.append("</table>")
    return lines


def _nav(sections: Sequence[ModelSection]) -> List[str]:
    lines = ["<h2>Models</h2>", '<ul class="index">']
    for s in sections:
        lines.append(
            f'<li><a href="#{esc(s.summary.id)}">{esc(s.summary.title)}</a></li>'
        )
    lines.append("</ul>")
    return lines


def _variant_table(variants: Iterable[VariantRecord], link_prefix: str) -> List[str]:
    lines = [
        "<table>",
        "<tr><th>Variant</th><th>Size</th><th>Context</th><th>Input</th>"
        "<th>Launch</th></tr>",
    ]
    for v in variants:
        link = launch_link(run_command(v.variant_name), link_prefix)
        lines.append(
            f"<tr><td>{esc(v.variant_name)}</td><td>{esc(v.size)}</td>"
            f"<td>{esc(v.context)}</td><td>{esc(v.input)}</td>"
            f'<td><a href="{esc(link)}">run</a></td></tr>'
        )
    lines.append("</table>")
    return lines


def _detail_lines(
    section: ModelSection,
    detail: DetailPage,
    classification: ClassificationMap,
    link_prefix: str,
) -> List[str]:
    summary = section.summary
    lines = [f'<p class="description">{esc(summary.description)}</p>']
    tier = classify(classification, summary.id)
    if tier is not None:
        lines.append(f'<p class="tier">Classification: {esc(tier)}</p>')
    lines.append(
        f"<p>Default command: <code>{esc(detail.default_command)}</code> "
        f'<a href="{esc(detail.launch_link)}">launch</a></p>'
    )
    if detail.variants:
        lines.extend(_variant_table(detail.variants, link_prefix))
    return lines


def _section(
    section: ModelSection,
    classification: ClassificationMap,
    source_base_url: str,
    link_prefix: str,
) -> List[str]:
    summary = section.summary
    lines = [
        '<div class="model">',
        f'<h2 id="{esc(summary.id)}">{esc(summary.title)}</h2>',
    ]
    if section.detail is None:
        lines.append(
            f'<p class="error">Could not retrieve details for '
            f"{esc(summary.id)}.</p>"
        )
    else:
        lines.extend(
            _detail_lines(section, section.detail, classification, link_prefix)
        )
        source = f"{source_base_url.rstrip('/')}/{summary.id}"
        lines.append(
            f'<p><a href="{esc(source)}" target="_blank" rel="noopener">'
            f"view source</a></p>"
        )
    lines.append('<p><a href="#top">back to top</a></p>')
    lines.append("</div>")
    return lines


def _footer(count: int) -> List[str]:
    return [
        f'<p class="footer">{count} model(s) listed.</p>',
        "</body>",
        "</html>",
    ]


def render_catalog(
    sections: Sequence[ModelSection],
    *,
    generated_at: datetime,
    filter_text: str = "",
    classification: ClassificationMap = EMPTY,
    source_base_url: str = DEFAULT_SOURCE_BASE,
    link_prefix: str = DEFAULT_LINK_PREFIX,
) -> str:
    lines: List[str] = []
    lines.extend(_header(generated_at, filter_text))
    lines.extend(_requirements_table())
    lines.extend(_nav(sections))
    for section in sections:
        lines.extend(
            _section(section, classification, source_base_url, link_prefix)
        )
    lines.extend(_footer(len(sections)))
    return "\n".join(lines) + "\n"


__all__ = [
    "DOCUMENT_TITLE",
    "SYSTEM_REQUIREMENTS",
    "filter_notice",
    "render_catalog",
]
