"""Model library scraping: fetch, extract summaries, filter/sort, variants.

Responsibilities:
- Fetch the library page and per-model detail pages (bounded timeout)
- Extract ModelSummary entries in document order
- Filter by regex over id/title/description, sort by title
- Parse detail pages into a default command + VariantRecord list
"""

from .exceptions import (  # noqa: F401
    CatalogError,
    FetchError,
    InvalidFilterError,
    NoMatchError,
    NoModelsFoundError,
)
from .types import (  # noqa: F401
    DetailPage,
    ModelSection,
    ModelSummary,
    VariantRecord,
)
from .extract import extract_summaries  # noqa: F401
from .filtering import filter_models, sort_models  # noqa: F401
from .variants import extract_variants, parse_detail_page  # noqa: F401
from .fetcher import PageFetcher  # noqa: F401

__all__ = [
    "CatalogError",
    "FetchError",
    "InvalidFilterError",
    "NoMatchError",
    "NoModelsFoundError",
    "DetailPage",
    "ModelSection",
    "ModelSummary",
    "VariantRecord",
    "extract_summaries",
    "filter_models",
    "sort_models",
    "extract_variants",
    "parse_detail_page",
    "PageFetcher",
]
