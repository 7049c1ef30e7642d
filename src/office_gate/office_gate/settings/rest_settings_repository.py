from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests

from ..common.validators import require_setting
from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from ..core.exceptions import UpstreamUnavailableError
from .model import SettingRow
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class RestSettingsRepository(SettingsRepository):
    """Reads ``office_settings`` through the hosted Postgres REST API (PostgREST)."""

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str],
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url
        self._api_key = api_key
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def fetch_rows(self) -> Sequence[SettingRow]:
        base_url = require_setting(self._base_url, "SUPABASE_URL")
        api_key = require_setting(self._api_key, "SUPABASE_ANON_KEY")

        try:
            response = self._session.get(
                f"{base_url.rstrip('/')}/rest/v1/office_settings",
                params={"select": "setting_key,setting_value"},
                headers={
                    "apikey": api_key,
                    "Authorization": f"Bearer {api_key}",
                    "Cache-Control": "no-store",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"Settings fetch failed: {e}") from e

        if not response.ok:
            raise UpstreamUnavailableError(f"Settings fetch failed with HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailableError("Settings fetch returned invalid JSON") from e

        if not isinstance(data, list):
            raise UpstreamUnavailableError("Settings fetch returned an unexpected payload")

        rows = [
            SettingRow(setting_key=str(item["setting_key"]), setting_value=item.get("setting_value"))
            for item in data
            if isinstance(item, dict) and item.get("setting_key")
        ]
        logger.debug("Fetched %d office settings rows", len(rows))
        return rows
