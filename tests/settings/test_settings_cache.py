from __future__ import annotations

import pytest

from src.office_gate.office_gate.core.exceptions import UpstreamUnavailableError
from src.office_gate.office_gate.network.allowlist import build_allowlist
from src.office_gate.office_gate.settings.cache import SettingsCache
from src.office_gate.office_gate.settings.model import OfficeSettings


class CountingFetch:
    def __init__(self):
        self.calls = 0
        self.fail = False

    def __call__(self) -> OfficeSettings:
        self.calls += 1
        if self.fail:
            raise UpstreamUnavailableError("store down")
        return OfficeSettings(allowlist=build_allowlist(allowed_cidrs=[f"10.{self.calls}.0.0/16"]))


def test_second_call_within_ttl_does_not_fetch(clock):
    fetch = CountingFetch()
    cache = SettingsCache(fetch, ttl_seconds=30, clock=clock)

    first = cache.get_allowlist()
    clock.advance(29)
    second = cache.get_allowlist()

    assert fetch.calls == 1
    assert first is second


def test_call_after_expiry_fetches_exactly_once(clock):
    fetch = CountingFetch()
    cache = SettingsCache(fetch, ttl_seconds=30, clock=clock)

    cache.get()
    clock.advance(30)
    refreshed = cache.get_allowlist()
    cache.get_allowlist()

    assert fetch.calls == 2
    assert refreshed.cidrs == ("10.2.0.0/16",)


def test_fetch_failure_propagates_and_serves_nothing_stale(clock):
    fetch = CountingFetch()
    cache = SettingsCache(fetch, ttl_seconds=30, clock=clock)
    cache.get()

    clock.advance(31)
    fetch.fail = True
    with pytest.raises(UpstreamUnavailableError):
        cache.get()

    fetch.fail = False
    assert cache.get_allowlist().cidrs == ("10.3.0.0/16",)


def test_invalidate_forces_refetch(clock):
    fetch = CountingFetch()
    cache = SettingsCache(fetch, ttl_seconds=30, clock=clock)

    cache.get()
    cache.invalidate()
    cache.get()

    assert fetch.calls == 2
