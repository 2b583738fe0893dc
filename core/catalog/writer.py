"""Catalog file output."""
from __future__ import annotations

import tempfile
from pathlib import Path

from core.library.exceptions import CatalogError

DEFAULT_FILENAME = "ollama_models.html"


class CatalogWriteError(CatalogError):
    """The catalog file could not be written."""

    error_type = "write-failed"


def resolve_output_path(directory: str = "", filename: str = DEFAULT_FILENAME) -> Path:
    """``directory`` empty → system temp dir."""
    base = Path(directory) if directory else Path(tempfile.gettempdir())
    return base / (filename or DEFAULT_FILENAME)


def write_catalog(text: str, path: str | Path) -> Path:
    """Write the whole document as UTF-8, replacing previous contents."""
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    except OSError as e:
        raise CatalogWriteError(f"cannot write catalog {p}: {e}") from e
    return p


__all__ = [
    "CatalogWriteError",
    "DEFAULT_FILENAME",
    "resolve_output_path",
    "write_catalog",
]
