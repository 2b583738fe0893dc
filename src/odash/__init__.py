"""odash: model library catalog builder (CLI layer)."""

__version__ = "0.1.0"
