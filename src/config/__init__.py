"""Configuration module - exports Settings and the YAML config helpers."""

from src.config.loader import load_config, resolve_cache_ttls
from src.config.settings import Settings

__all__ = ["Settings", "load_config", "resolve_cache_ttls"]
