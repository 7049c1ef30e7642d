from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..common.datetime_utils import monotonic_seconds
from ..core.constants import DEFAULT_SETTINGS_CACHE_TTL_SECONDS
from ..network.model import NetworkAllowlist
from .model import OfficeLocation, OfficeSettings


@dataclass(frozen=True)
class _CacheEntry:
    value: OfficeSettings
    expires_at: float


class SettingsCache:
    """Single-slot, short-TTL cache of the office settings.

    Invalidated only by expiry. There is no lock: concurrent misses may both
    fetch, which is harmless because the fetch is idempotent. Fetch errors
    propagate and nothing stale is served past expiry.
    """

    def __init__(
        self,
        fetch: Callable[[], OfficeSettings],
        *,
        ttl_seconds: float = DEFAULT_SETTINGS_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = monotonic_seconds,
    ):
        self._fetch = fetch
        self._ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entry: Optional[_CacheEntry] = None

    def get(self) -> OfficeSettings:
        entry = self._entry
        if entry is not None and entry.expires_at > self._clock():
            return entry.value

        value = self._fetch()
        self._entry = _CacheEntry(value=value, expires_at=self._clock() + self._ttl_seconds)
        return value

    def get_allowlist(self) -> NetworkAllowlist:
        return self.get().allowlist

    def get_office_location(self) -> OfficeLocation:
        return self.get().office_location

    def invalidate(self) -> None:
        self._entry = None
