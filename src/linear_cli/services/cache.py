"""Short-lived in-memory cache for Linear API reads.

Entries carry an absolute expiry in milliseconds and are evicted lazily:
nothing sweeps the map, an expired entry is removed by the next ``get`` for
its key. An entry is still valid at exactly its expiry instant and gone one
millisecond later.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable

from linear_cli.shared.constants import Cache

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current wall-clock time in milliseconds."""
    return time.time() * 1000


@dataclass
class CacheEntry:
    """A cached value and the instant (ms) after which it is stale."""

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class EphemeralCache:
    """String-keyed cache with per-entry TTL.

    Args:
        default_ttl_ms: TTL used when ``set`` gets none (default: 5 minutes)
        clock: Callable returning the current time in milliseconds. Tests
            pass a fake clock to step through expiry deterministically.
    """

    def __init__(
        self,
        default_ttl_ms: int = Cache.DEFAULT_TTL_MS,
        clock: Clock | None = None,
    ) -> None:
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock or wall_clock_ms
        self._entries: dict[str, CacheEntry] = {}
        self._mu = Lock()

    def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        """Store ``value`` under ``key``, replacing any existing entry."""
        ttl = ttl_ms or self.default_ttl_ms
        with self._mu:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or ``default`` when missing or expired.

        Expired entries are deleted as a side effect. The stored object is
        returned as-is, not copied.
        """
        with self._mu:
            entry = self._entries.get(key)
            if entry is None:
                return default

            if entry.is_expired(self._clock()):
                del self._entries[key]
                return default

            return entry.value

    def delete(self, key: str) -> None:
        with self._mu:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._mu:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        # Counts expired entries that no get() has touched yet
        with self._mu:
            return len(self._entries)


_MISSING = object()


def make_cache_key(resource: str, **options: Any) -> str:
    """Build a deterministic key from a resource name and query options.

    Example:
        >>> make_cache_key("my_issues", in_current_cycle=True, include_completed=False)
        'my_issues:in_current_cycle=True,include_completed=False'
    """
    if not options:
        return resource
    parts = ",".join(f"{name}={options[name]}" for name in sorted(options))
    return f"{resource}:{parts}"
