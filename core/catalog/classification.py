"""Capability tier lookup (lowercase model id → tier label).

Loaded once from config, read many; exposed as a read-only mapping.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

ClassificationMap = Mapping[str, str]

EMPTY: ClassificationMap = MappingProxyType({})


def build_classification(tiers: Mapping[str, str] | None) -> ClassificationMap:
    if not tiers:
        return EMPTY
    return MappingProxyType({str(k).lower(): str(v) for k, v in tiers.items()})


def classify(classification: ClassificationMap, model_id: str) -> str | None:
    return classification.get(model_id.lower())


__all__ = ["ClassificationMap", "EMPTY", "build_classification", "classify"]
