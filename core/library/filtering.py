"""Model filtering (regex semantics) and title sort."""
from __future__ import annotations

import re
from typing import Iterable, List

from .exceptions import InvalidFilterError, NoMatchError
from .types import ModelSummary


def compile_filter(pattern: str, case_sensitive: bool = False) -> re.Pattern:
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidFilterError(pattern, str(e)) from e


def matches(rx: re.Pattern, model: ModelSummary) -> bool:
    return any(
        rx.search(field) for field in (model.id, model.title, model.description)
    )


def filter_models(
    models: Iterable[ModelSummary],
    pattern: str,
    case_sensitive: bool = False,
) -> List[ModelSummary]:
    """Keep models whose id, title or description matches ``pattern``.

    ``pattern`` is a regular expression, not a literal substring. An empty
    pattern keeps everything. Raises NoMatchError when a non-empty pattern
    keeps nothing, InvalidFilterError when the pattern does not compile.
    """
    models = list(models)
    if not pattern:
        return models
    rx = compile_filter(pattern, case_sensitive)
    kept = [m for m in models if matches(rx, m)]
    if not kept:
        raise NoMatchError(pattern)
    return kept


def sort_models(models: Iterable[ModelSummary]) -> List[ModelSummary]:
    # ordinal code-point ordering; sorted() is stable
    return sorted(models, key=lambda m: m.title)


__all__ = ["compile_filter", "matches", "filter_models", "sort_models"]
