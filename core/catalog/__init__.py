"""Catalog assembly: classification lookup, HTML rendering, file output and
the end-to-end generation pipeline."""

from .classification import build_classification, classify  # noqa: F401
from .renderer import render_catalog  # noqa: F401
from .writer import CatalogWriteError, resolve_output_path, write_catalog  # noqa: F401
from .pipeline import CatalogResult, build_sections, generate_catalog  # noqa: F401

__all__ = [
    "build_classification",
    "classify",
    "render_catalog",
    "CatalogWriteError",
    "resolve_output_path",
    "write_catalog",
    "CatalogResult",
    "build_sections",
    "generate_catalog",
]
