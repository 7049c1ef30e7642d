"""ASN lookup against the IPinfo Lite API.

Any failure (non-2xx, network error, timeout, bad JSON, missing ASN) resolves to
``None``: the ASN is unknown, not disallowed.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol
from urllib.parse import quote

import requests

from ..common.validators import require_setting
from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_IPINFO_URL
from .allowlist import normalize_asn
from .model import AsnInfo

logger = logging.getLogger(__name__)


class AsnLookup(Protocol):
    def lookup(self, ip: str) -> Optional[AsnInfo]:
        raise NotImplementedError


class IpinfoAsnLookup(AsnLookup):
    def __init__(
        self,
        token: Optional[str],
        *,
        base_url: str = DEFAULT_IPINFO_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def lookup(self, ip: str) -> Optional[AsnInfo]:
        token = require_setting(self._token, "IPINFO_TOKEN")
        url = f"{self._base_url}/{quote(ip, safe='')}"

        try:
            response = self._session.get(url, params={"token": token}, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("IPinfo lookup failed for %s: %s", ip, e)
            return None

        if not response.ok:
            logger.warning("IPinfo lookup for %s returned HTTP %s", ip, response.status_code)
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning("IPinfo lookup for %s returned invalid JSON", ip)
            return None

        if not isinstance(data, dict):
            return None

        asn = normalize_asn(data.get("asn") or "")
        if asn is None:
            logger.warning("IPinfo response for %s carries no usable ASN", ip)
            return None

        return AsnInfo(asn=asn, as_name=data.get("as_name"), country_code=data.get("country_code"))
