from __future__ import annotations

from typing import Optional

from ..core.exceptions import ConfigurationError


def require_setting(value: Optional[str], setting_name: str) -> str:
    if not value or not str(value).strip():
        raise ConfigurationError(f"Server missing {setting_name}")
    return str(value).strip()
