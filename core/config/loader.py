"""Configuration loading & validation.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV (ODASH__*).

- Per-section schemas live in `core.config.schemas.*`.
- `schema_version` missing → assume 1, notice on stdout.
- Unknown keys are rejected (every schema is extra="forbid").
- Missing files or sections fall back to schema defaults.
"""
from __future__ import annotations

import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict, Type

import yaml
from core import metrics
from core.errors import validate_error_type
from pydantic import BaseModel, ConfigDict

from .schemas.catalog import (
    ClassificationConfig,
    FilterConfig,
    LibraryConfig,
    OutputConfig,
    RunnerConfig,
)
from .schemas.observability import LoggingConfig


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    library: LibraryConfig = LibraryConfig()
    filter: FilterConfig = FilterConfig()
    runner: RunnerConfig = RunnerConfig()
    output: OutputConfig = OutputConfig()
    classification: ClassificationConfig = ClassificationConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
ENV_PREFIX = "ODASH__"

SUB_SCHEMA_CLASSES: Dict[str, Type[BaseModel]] = {
    "library": LibraryConfig,
    "filter": FilterConfig,
    "runner": RunnerConfig,
    "output": OutputConfig,
    "classification": ClassificationConfig,
    "logging": LoggingConfig,
}


class ConfigError(Exception):
    pass


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path.name} must be a mapping")
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        target[path_parts[-1]] = _cast_env_value(value)
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        print(
            f"[config-env-override] path={dotted_path} value=*** source=env"
        )  # noqa: T201


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv("ODASH_CONFIG_DIR", DEFAULT_CONFIG_DIR))


def _migrate_legacy(data: Dict[str, Any]) -> Dict[str, Any]:
    if "schema_version" not in data:
        if data:
            print(
                "[config-migration] schema_version missing → assuming 1"
            )  # noqa: T201
        data["schema_version"] = 1
    return data


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    return value if isinstance(value, dict) else {}


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Apply cross-field normalizations and bounds validation.

    Normalizations:
      - classification.tiers keys are lowercased.
    Validations (error → raise):
      - library.timeout_s > 0, library.detail_timeout_s > 0
      - library.detail_timeout_s <= library.timeout_s
      - library.detail_workers >= 1
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)

    tiers = _section(raw, "classification").get("tiers")
    if isinstance(tiers, dict):
        raw["classification"]["tiers"] = {
            str(k).lower(): v for k, v in tiers.items()
        }

    lib = _section(raw, "library")
    defaults = LibraryConfig()
    timeout = lib.get("timeout_s", defaults.timeout_s)
    detail_timeout = lib.get("detail_timeout_s", defaults.detail_timeout_s)
    workers = lib.get("detail_workers", defaults.detail_workers)
    numeric = all(
        isinstance(v, (int, float)) and not isinstance(v, bool)
        for v in (timeout, detail_timeout, workers)
    )
    if numeric:
        if timeout <= 0:
            errors.append(
                ("library.timeout_s", "config-out-of-range", ">0 required")
            )
        if detail_timeout <= 0:
            errors.append(
                (
                    "library.detail_timeout_s",
                    "config-out-of-range",
                    ">0 required",
                )
            )
        elif detail_timeout > timeout:
            errors.append(
                (
                    "library.detail_timeout_s",
                    "config-out-of-range",
                    "must not exceed library.timeout_s",
                )
            )
        if workers < 1:
            errors.append(
                (
                    "library.detail_workers",
                    "config-out-of-range",
                    ">=1 required",
                )
            )

    if errors:
        for path, code, _ in errors:
            validate_error_type(code)
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


def _validate_sub_schemas(raw: Dict[str, Any]) -> Dict[str, Any]:
    validated: Dict[str, Any] = {}
    for name, cls in SUB_SCHEMA_CLASSES.items():
        if name in raw:
            try:
                validated[name] = cls.model_validate(raw[name] or {})
            except Exception as e:  # noqa: BLE001
                metrics.inc(
                    "config_validation_errors_total",
                    {"path": name, "code": "config-invalid"},
                )
                raise ConfigError(
                    f"Validation failed for section '{name}': {e}"
                ) from e
    return validated


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        migrated = _migrate_legacy(merged)
        _normalize_and_validate(migrated)
        validated_sub = _validate_sub_schemas(migrated)
        try:
            agg = AggregatedConfig.model_validate(
                {**migrated, **validated_sub}
            )
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e
        return agg


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()
