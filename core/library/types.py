"""Library page data types."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import FetchError


@dataclass(frozen=True, slots=True)
class ModelSummary:
    id: str
    title: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class VariantRecord:
    variant_name: str
    size: str = ""
    context: str = ""
    input: str = ""

    @property
    def structured(self) -> bool:
        return bool(self.size or self.context or self.input)


@dataclass(frozen=True, slots=True)
class DetailPage:
    model_id: str
    default_command: str
    launch_link: str
    variants: List[VariantRecord] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ModelSection:
    """One catalog section: a summary plus its detail or the fetch failure."""

    summary: ModelSummary
    detail: Optional[DetailPage] = None
    error: Optional[FetchError] = None

    @property
    def failed(self) -> bool:
        return self.detail is None
