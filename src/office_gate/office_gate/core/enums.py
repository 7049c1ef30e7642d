from __future__ import annotations

from enum import Enum


class AllowlistMode(str, Enum):
    """Whether the office network allowlist restricts anything at all."""

    UNRESTRICTED = "UNRESTRICTED"
    RESTRICTED = "RESTRICTED"


class SettingsBackend(str, Enum):
    """Where office settings are read from."""

    REST = "rest"
    MYSQL = "mysql"
