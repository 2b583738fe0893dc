"""Detail page parsing: default run command, launch link, variant list.

Never raises on malformed content: a missing command is synthesized, a
missing list yields no variants, an unrecognised line becomes a name-only
record.
"""
from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from .extract import element_text, parse_html
from .types import DetailPage, VariantRecord

DEFAULT_LINK_PREFIX = "ollama://"
DEFAULT_RUNNER = "ollama"

# name size context input... (input keeps the rest of the line)
_VARIANT_LINE_RE = re.compile(r"^(\S+)\s+(\S+)\s+(\S+)\s+(.+)$")


def run_command(identifier: str) -> str:
    return f"run {identifier}"


def launch_link(command: str, prefix: str = DEFAULT_LINK_PREFIX) -> str:
    encoded = command.replace(" ", "%20").replace(":", "%3A")
    return f"{prefix}{encoded}"


def _soup(text: str | BeautifulSoup) -> BeautifulSoup:
    return text if isinstance(text, BeautifulSoup) else parse_html(text)


def extract_default_command(
    text: str | BeautifulSoup, model_id: str, runner: str = DEFAULT_RUNNER
) -> str:
    field = _soup(text).select_one('input[name="command"]')
    value = field.get("value") if field is not None else None
    command = " ".join((value or "").split())
    if runner and command.startswith(runner + " "):
        command = command[len(runner) + 1:]
    return command or run_command(model_id)


def parse_variant_line(line: str) -> VariantRecord:
    m = _VARIANT_LINE_RE.match(line)
    if not m:
        return VariantRecord(variant_name=line)
    name, size, context, modality = m.groups()
    return VariantRecord(
        variant_name=name, size=size, context=context, input=modality.strip()
    )


def _row_text(item: Tag) -> str:
    # nested lists inside a row are badges, not row fields
    for nested in item.find_all(["ul", "ol"]):
        nested.extract()
    return element_text(item)


def extract_variant_lines(text: str | BeautifulSoup) -> List[str]:
    container = _soup(text).select_one('ul[role="list"]')
    if container is None:
        return []
    lines = (_row_text(item) for item in container.find_all("li", recursive=False))
    return [line for line in lines if line]


def extract_variants(text: str | BeautifulSoup) -> List[VariantRecord]:
    return [parse_variant_line(line) for line in extract_variant_lines(text)]


def parse_detail_page(
    model_id: str,
    text: str,
    link_prefix: str = DEFAULT_LINK_PREFIX,
    runner: str = DEFAULT_RUNNER,
) -> DetailPage:
    soup = parse_html(text)
    command = extract_default_command(soup, model_id, runner)
    return DetailPage(
        model_id=model_id,
        default_command=command,
        launch_link=launch_link(command, link_prefix),
        variants=extract_variants(soup),
    )


__all__ = [
    "run_command",
    "launch_link",
    "extract_default_command",
    "parse_variant_line",
    "extract_variant_lines",
    "extract_variants",
    "parse_detail_page",
]
