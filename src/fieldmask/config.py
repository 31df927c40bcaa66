"""YAML/dict config loader for fieldmask.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    fieldmask:
      enabled: true
      mask_char: "*"
      annotation_key: mask
      cache: true
      seed: 42
      field_defaults:
        password: filled
        email: hash
        card_number: fixed
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .masker import Masker, MaskerConfig

logger = logging.getLogger(__name__)

_KEYS = {"enabled", "mask_char", "annotation_key", "cache", "seed", "field_defaults"}


class _NoopMasker:
    """Pass-through masker when masking is disabled."""
    def mask(self, value):
        return value
    def mask_text(self, annotation, value):
        return value
    def mask_int(self, annotation, value):
        return value
    def mask_uint(self, annotation, value):
        return value
    def mask_float(self, annotation, value):
        return value
    def mask_types(self, category=None):
        return {}
    @property
    def stats(self) -> dict:
        return {"enabled": False}


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    # Support nested under "fieldmask" key or flat
    if "fieldmask" in data:
        data = data["fieldmask"] or {}
        if not isinstance(data, dict):
            raise ConfigError("'fieldmask' section must be a mapping")

    unknown = set(data) - _KEYS
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}")

    mask_char = data.get("mask_char", "*")
    if not isinstance(mask_char, str):
        raise ConfigError("mask_char must be a string")
    annotation_key = data.get("annotation_key", "mask")
    if not isinstance(annotation_key, str):
        raise ConfigError("annotation_key must be a string")
    seed = data.get("seed")
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ConfigError("seed must be an integer")
    field_defaults = data.get("field_defaults") or {}
    if not isinstance(field_defaults, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in field_defaults.items()
    ):
        raise ConfigError("field_defaults must map names to mask types")

    return {
        "enabled": bool(data.get("enabled", True)),
        "mask_char": mask_char,
        "annotation_key": annotation_key,
        "cache": bool(data.get("cache", True)),
        "seed": seed,
        "field_defaults": dict(field_defaults),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: {e}") from e
    logger.debug("Loaded config from %s", path)
    return load_config(data)


def create_masker(config: dict[str, Any] | None = None) -> Masker | _NoopMasker:
    """Create a fully configured masker from a config dict."""
    cfg = load_config(config)

    if not cfg["enabled"]:
        logger.debug("Masking disabled by config")
        return _NoopMasker()

    return Masker(MaskerConfig(
        mask_char=cfg["mask_char"],
        annotation_key=cfg["annotation_key"],
        cache=cfg["cache"],
        seed=cfg["seed"],
        field_defaults=cfg["field_defaults"],
    ))
