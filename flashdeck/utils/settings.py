from __future__ import annotations

import os
from types import SimpleNamespace


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number of seconds, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


def default_settings(*, override: dict | None = None) -> SimpleNamespace:
    """Read configuration from the environment at call time."""
    settings = SimpleNamespace(
        api_base_url=os.getenv("FLASHDECK_API_BASE_URL", "http://localhost:8080"),
        request_timeout=_env_float("FLASHDECK_REQUEST_TIMEOUT", 10.0),
        redis_url=os.getenv("FLASHDECK_REDIS_URL", "redis://localhost:6379/0"),
        kv_prefix=os.getenv("FLASHDECK_KV_PREFIX", "flashcards"),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
    )
    if override:
        for key, val in override.items():
            setattr(settings, key, val)
    return settings


__all__ = ["default_settings"]
