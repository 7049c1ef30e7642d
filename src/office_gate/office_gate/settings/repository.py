from __future__ import annotations

from typing import Protocol, Sequence

from .model import SettingRow


class SettingsRepository(Protocol):
    def fetch_rows(self) -> Sequence[SettingRow]:
        """Read every office setting row.

        Raises UpstreamUnavailableError when the store cannot be read and
        ConfigurationError when its credentials are missing.
        """

        raise NotImplementedError
