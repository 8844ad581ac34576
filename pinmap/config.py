"""Typed settings and loader for pinmap.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. ``PINMAP_LOG_LEVEL`` environment variable
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, confloat, conint, field_validator

from .errors import ConfigError
from .zoom_utils import CUTOFF_ZOOM, FLOOR_RADIUS_M, MAX_ZOOM, RADIUS_TIERS_M

LOG_LEVEL_ENV = "PINMAP_LOG_LEVEL"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class RadiusTier(BaseModel):
    """Zooms strictly below ``below_zoom`` (and above the previous tier) use ``radius_m``."""

    below_zoom: float
    radius_m: confloat(ge=0.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


def _default_tiers() -> list[RadiusTier]:
    return [RadiusTier(below_zoom=z, radius_m=r) for z, r in RADIUS_TIERS_M]


class ClusterSettings(BaseModel):
    """Zoom and radius policy used by :func:`pinmap.cluster_utils.cluster`."""

    max_zoom: confloat(gt=0.0) = MAX_ZOOM
    cutoff_zoom: float = CUTOFF_ZOOM
    radius_tiers: list[RadiusTier] = Field(default_factory=_default_tiers)
    floor_radius_m: confloat(ge=0.0) = FLOOR_RADIUS_M

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("radius_tiers")
    @classmethod
    def _tiers_increasing(cls, tiers: list[RadiusTier]) -> list[RadiusTier]:
        bounds = [t.below_zoom for t in tiers]
        if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
            raise ValueError("radius_tiers must be strictly increasing in below_zoom")
        return tiers

    def tier_table(self) -> tuple[tuple[float, float], ...]:
        return tuple((t.below_zoom, t.radius_m) for t in self.radius_tiers)


class MapSettings(BaseModel):
    """Map screen limits applied before clustering."""

    max_visible_pins: conint(ge=1) = 30
    max_span_deg: confloat(gt=0.0) = 10.0

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    log_level: LogLevel = "INFO"
    cluster: ClusterSettings = Field(default_factory=ClusterSettings)
    map: MapSettings = Field(default_factory=MapSettings)

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def _read_yaml(handle) -> dict[str, Any]:
    try:
        data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("configuration root must be a mapping")
    return data


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides."""

    with (
        importlib_resources.files("pinmap")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = _read_yaml(f)

    if path is not None:
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                overrides = _read_yaml(f)
        except OSError as exc:
            raise ConfigError(f"cannot read config {path}: {exc}") from exc
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    if LOG_LEVEL_ENV in environ:
        merged = deep_merge_dicts(merged, {"log_level": environ[LOG_LEVEL_ENV].upper()})

    try:
        return ConfigModel.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "ClusterSettings",
    "ConfigModel",
    "MapSettings",
    "RadiusTier",
    "deep_merge_dicts",
    "load_config",
]
