from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..core.constants import DEFAULT_OFFICE_RADIUS_METERS
from ..network.model import NetworkAllowlist

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingRow:
    """One ``office_settings`` row as read from the store (value not yet normalized)."""

    setting_key: str
    setting_value: Any


@dataclass(frozen=True)
class OfficeLocation:
    latitude: float = 0.0
    longitude: float = 0.0
    radius_meters: float = DEFAULT_OFFICE_RADIUS_METERS
    enabled: bool = False

    @classmethod
    def from_setting(cls, value: Any) -> "OfficeLocation":
        if value is None:
            return cls()

        if isinstance(value, (bytes, bytearray)):
            value = value.decode("utf-8")
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                logger.warning("office_location setting is not valid JSON; geo-fence disabled")
                return cls()

        if not isinstance(value, dict):
            logger.warning("office_location setting has unexpected shape; geo-fence disabled")
            return cls()

        try:
            return cls(
                latitude=float(value.get("latitude", 0.0)),
                longitude=float(value.get("longitude", 0.0)),
                radius_meters=float(value.get("radius_meters", DEFAULT_OFFICE_RADIUS_METERS)),
                enabled=bool(value.get("enabled", False)),
            )
        except (TypeError, ValueError):
            logger.warning("office_location setting has non-numeric fields; geo-fence disabled")
            return cls()

    def to_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius_meters": self.radius_meters,
            "enabled": self.enabled,
        }


@dataclass(frozen=True)
class OfficeSettings:
    """Snapshot of everything the gate reads from the settings store."""

    allowlist: NetworkAllowlist = field(default_factory=NetworkAllowlist)
    office_location: OfficeLocation = field(default_factory=OfficeLocation)
