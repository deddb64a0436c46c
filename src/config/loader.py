"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Layers, later ones win:
#
#   1. config/config.yaml  - static defaults checked into the repo
#   2. .env file           - local developer overrides (not committed)
#   3. Environment vars    - set at deploy time
#
# load_config() reads the YAML first, then deep-merges the values coming
# from Settings on top.  Per-kind cache TTLs only exist in the YAML layer;
# the global CACHE_TTL_SECONDS env var is the fallback for any kind the
# YAML does not mention.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path
from typing import Any

import yaml

from src.config.settings import Settings
from src.models.entities import ResourceKind
from src.utils.errors import ConfigurationError


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file is fine.
        settings: Pre-built settings; a fresh ``Settings()`` is read otherwise.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "database": {
            "path": settings.database_path,
            "seed_demo_data": settings.seed_demo_data,
        },
        "cache": {
            "default_ttl_seconds": settings.cache_ttl_seconds,
            "max_entries": settings.cache_max_entries,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def resolve_cache_ttls(config: dict[str, Any]) -> dict[ResourceKind, float]:
    """Return the effective TTL in seconds for every resource kind.

    ``cache.ttl_seconds`` may name kinds by their collection name
    (``riders``, ``drivers``, ``trips``).  Unknown names and non-positive
    values are configuration errors.
    """
    cache_cfg = config.get("cache", {})
    default_ttl = float(cache_cfg.get("default_ttl_seconds", 60.0))
    overrides = cache_cfg.get("ttl_seconds") or {}

    by_name = {kind.collection_name: kind for kind in ResourceKind}
    ttls = {kind: default_ttl for kind in ResourceKind}
    for name, value in overrides.items():
        kind = by_name.get(str(name).lower())
        if kind is None:
            raise ConfigurationError(f"Unknown resource kind in cache.ttl_seconds: {name!r}")
        ttl = float(value)
        if ttl <= 0:
            raise ConfigurationError(f"cache.ttl_seconds.{name} must be positive, got {value!r}")
        ttls[kind] = ttl
    return ttls


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
