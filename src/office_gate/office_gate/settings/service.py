from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import (
    SETTING_ALLOWED_ASNS,
    SETTING_ALLOWED_CIDRS,
    SETTING_ALLOWED_IPS,
    SETTING_OFFICE_LOCATION,
)
from ..network.allowlist import build_allowlist
from .model import OfficeLocation, OfficeSettings, SettingRow
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def parse_office_settings(rows: Sequence[SettingRow]) -> OfficeSettings:
    by_key = {row.setting_key: row.setting_value for row in rows}

    allowlist = build_allowlist(
        allowed_ips=by_key.get(SETTING_ALLOWED_IPS),
        allowed_cidrs=by_key.get(SETTING_ALLOWED_CIDRS),
        allowed_asns=by_key.get(SETTING_ALLOWED_ASNS),
    )
    return OfficeSettings(
        allowlist=allowlist,
        office_location=OfficeLocation.from_setting(by_key.get(SETTING_OFFICE_LOCATION)),
    )


class OfficeSettingsService:
    """Use case: load a fresh office settings snapshot from the store."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def load(self) -> OfficeSettings:
        snapshot = parse_office_settings(self._settings.fetch_rows())
        allowlist = snapshot.allowlist
        logger.info(
            "Loaded office settings: mode=%s ips=%d cidrs=%d asns=%d geo_fence=%s",
            allowlist.mode.value,
            len(allowlist.exact_ips),
            len(allowlist.cidrs),
            len(allowlist.asns),
            snapshot.office_location.enabled,
        )
        return snapshot
