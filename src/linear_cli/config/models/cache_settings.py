"""Cache configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from linear_cli.shared.constants import Cache


class CacheSettings(BaseModel):
    """In-memory API response cache configuration."""

    enabled: bool = Field(default=True, description="Enable caching")
    ttl_ms: int = Field(
        default=Cache.DEFAULT_TTL_MS,
        gt=0,
        description="Cache time-to-live in milliseconds",
    )


__all__ = ["CacheSettings"]
