"""Catalog pipeline schemas: library source, filter, runner, output, tiers."""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class LibraryConfig(BaseModel):
    base_url: str = "https://ollama.com/library"
    timeout_s: float = 30.0
    detail_timeout_s: float = 10.0
    detail_workers: int = 1
    user_agent: str = "odash-catalog/0.1"

    model_config = ConfigDict(extra="forbid")


class FilterConfig(BaseModel):
    case_sensitive: bool = False

    model_config = ConfigDict(extra="forbid")


class RunnerConfig(BaseModel):
    executable: str = "ollama"
    link_prefix: str = Field(
        "ollama://", description="Prepended to the encoded run command"
    )

    model_config = ConfigDict(extra="forbid")


class OutputConfig(BaseModel):
    directory: str = Field("", description="Empty means system temp dir")
    filename: str = "ollama_models.html"

    model_config = ConfigDict(extra="forbid")


# Hand-maintained model id -> tier table. A `tiers` mapping in YAML replaces
# it wholesale.
DEFAULT_TIERS: Dict[str, str] = {
    "tinyllama": "Small LLMs",
    "tinydolphin": "Small LLMs",
    "phi3": "Small LLMs",
    "gemma": "Small LLMs",
    "qwen": "Small LLMs",
    "llama2": "Medium LLMs",
    "mistral": "Medium LLMs",
    "codellama": "Medium LLMs",
    "deepseek-coder": "Medium LLMs",
    "llava": "Medium LLMs",
    "llama2-uncensored": "Medium LLMs",
    "mixtral": "Large LLMs",
    "command-r": "Large LLMs",
    "dolphin-mixtral": "Large LLMs",
    "wizardlm2": "Large LLMs",
}


class ClassificationConfig(BaseModel):
    tiers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TIERS))

    model_config = ConfigDict(extra="forbid")
