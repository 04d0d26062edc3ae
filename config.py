# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    order_api_url: str = "http://localhost:3000/api/pos/orders"
    order_api_timeout_secs: float = 10.0
    currency_symbol: str = "$"
    log_level: str = "INFO"
    # Shape mirrors the restaurant tax settings document:
    # {"gst": {"enabled": bool, "taxRate": float}, "pst": ..., "hst": ...}
    tax_settings: dict[str, dict] = {}
    # {"enabled", "minRedeemPoints", "redeemRate", "redeemValue", "earnRate"}
    loyalty_settings: dict = {}


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` located alongside this file
    and fed into :class:`Settings`. Environment variables override any values
    from the JSON file. The result is cached to prevent repeated disk reads.
    """

    config_path = Path(__file__).with_name("config.json")
    data = json.loads(config_path.read_text()) if config_path.exists() else {}
    env_override = {
        k.lower(): v
        for k, v in os.environ.items()
        if k.lower() in Settings.model_fields
    }
    for key in ("tax_settings", "loyalty_settings"):
        if isinstance(env_override.get(key), str):
            env_override[key] = json.loads(env_override[key])
    merged = {**data, **env_override}
    # Environment variables override values from the JSON file.
    return Settings(**merged)
