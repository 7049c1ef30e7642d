from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from ..common.datetime_utils import monotonic_seconds
from ..core.constants import (
    DEFAULT_CLIENT_PASS_TTL_SECONDS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    HEADER_GATE_KEY,
    HEADER_OFFICE_PASS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _HeldPass:
    value: str
    expires_at: float


class OfficePassClient:
    """Holds the latest office pass in memory for a check-in client.

    The held pass expires before the server-side ``exp`` so an expired pass is
    never presented. A stale pass is replaced by a freshly minted one, never
    renewed.
    """

    def __init__(
        self,
        base_url: str,
        *,
        gate_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = monotonic_seconds,
        ttl_seconds: float = DEFAULT_CLIENT_PASS_TTL_SECONDS,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ):
        self._base_url = base_url.rstrip("/")
        self._gate_key = gate_key
        self._session = session or requests.Session()
        self._clock = clock
        self._ttl_seconds = float(ttl_seconds)
        self._timeout = float(timeout)
        self._held: Optional[_HeldPass] = None

    @property
    def has_valid_pass(self) -> bool:
        return self._held is not None and self._held.expires_at > self._clock()

    def check(self) -> Optional[str]:
        """Ask the admission gate for a new pass; None when blocked or unreachable."""

        try:
            response = self._session.get(f"{self._base_url}/api/attendance/check", timeout=self._timeout)
            if not response.ok:
                raise ValueError(f"Office network required (HTTP {response.status_code})")
            data = response.json()
            office_pass = data.get("pass") if isinstance(data, dict) else None
            if not office_pass:
                raise ValueError("Office pass missing")
        except (requests.RequestException, ValueError) as e:
            logger.info("Office pass unavailable: %s", e)
            self._held = None
            return None

        self._held = _HeldPass(value=office_pass, expires_at=self._clock() + self._ttl_seconds)
        return office_pass

    def get_valid_pass(self) -> Optional[str]:
        if self.has_valid_pass:
            return self._held.value
        return self.check()

    def reset(self) -> None:
        self._held = None

    def checkin(self) -> bool:
        """Present the pass to the checkin guard. True means the caller may write the record."""

        office_pass = self.get_valid_pass()
        if not office_pass:
            return False

        headers = {HEADER_OFFICE_PASS: office_pass}
        if self._gate_key:
            headers[HEADER_GATE_KEY] = self._gate_key

        try:
            response = self._session.post(
                f"{self._base_url}/api/attendance/checkin",
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.info("Checkin guard unreachable: %s", e)
            return False

        if response.status_code == 403:
            # The pass or the network no longer qualifies; mint a new one next time.
            self.reset()
        return response.ok
