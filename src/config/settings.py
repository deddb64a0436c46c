"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from two sources, highest priority first:
#
#   1. Environment variables, e.g. CACHE_TTL_SECONDS=30
#   2. A .env file in the working directory (local development only)
#
# Field ``cache_ttl_seconds`` maps to env var ``CACHE_TTL_SECONDS``; matching
# is case-insensitive.  Defaults below apply when neither source sets a value.
#
# The .env file is git-ignored.  Never commit real API tokens.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SafeBoda API settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Persistence ===
    database_path: str = "data/safeboda.db"
    seed_demo_data: bool = True

    # === Collection cache ===
    # Per-kind overrides live in config/config.yaml (cache.ttl_seconds.<kind>).
    cache_ttl_seconds: float = Field(default=60.0, gt=0)
    cache_max_entries: int = Field(default=64, ge=3)

    # === Auth gate ===
    # Comma-separated "token:Role1|Role2" pairs.  Empty = auth disabled (dev).
    api_tokens: str = ""

    # === HTTP ===
    cors_allowed_origins: str = "*"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_token_roles(self) -> dict[str, frozenset[str]]:
        """Parse ``api_tokens`` into a token → roles mapping.

        Malformed pairs (no colon, empty token) are skipped.  A token listed
        twice keeps the roles of its last occurrence.
        """
        mapping: dict[str, frozenset[str]] = {}
        for pair in self.api_tokens.split(","):
            token, sep, roles = pair.strip().partition(":")
            if not sep or not token:
                continue
            mapping[token] = frozenset(r.strip() for r in roles.split("|") if r.strip())
        return mapping

    def get_cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
