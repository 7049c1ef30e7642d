"""Office pass: a short-lived HMAC-signed capability token.

Format: ``base64url(payload) + "." + base64url(HMAC-SHA256(secret, payload))``
where ``payload`` is the canonical JSON of the claims (including ``exp``).
The signature covers the JSON text itself, not its base64 body. A pass only
proves that, at mint time, the presenter's network passed the gate.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional

from ..common.datetime_utils import now_epoch_seconds
from ..common.validators import require_setting
from ..core.constants import DEFAULT_PASS_TTL_SECONDS

logger = logging.getLogger(__name__)


def b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def b64url_decode(value: str) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    return base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)


def canonical_json(claims: Mapping[str, Any]) -> str:
    return json.dumps(claims, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class OfficePassSigner:
    def __init__(self, secret: Optional[str], *, clock: Callable[[], float] = now_epoch_seconds):
        self._secret = secret
        self._clock = clock

    def _signature(self, payload: str) -> str:
        secret = require_setting(self._secret, "OFFICE_PASS_SECRET")
        digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
        return b64url_encode(digest)

    def sign(self, claims: Mapping[str, Any], ttl_seconds: int = DEFAULT_PASS_TTL_SECONDS) -> str:
        body = dict(claims)
        body["exp"] = int(math.floor(self._clock())) + int(ttl_seconds)
        payload = canonical_json(body)
        return f"{b64url_encode(payload.encode('utf-8'))}.{self._signature(payload)}"

    def decode(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Return the verified claims, or None for any malformed, forged or expired pass.

        Raises ConfigurationError when no secret is configured.
        """

        # Check the secret first so a misconfigured server never looks like a bad pass.
        require_setting(self._secret, "OFFICE_PASS_SECRET")

        body, sep, signature = (token or "").strip().partition(".")
        if not sep or not body or not signature or "." in signature:
            return None

        try:
            payload = b64url_decode(body).decode("utf-8")
        except (binascii.Error, ValueError):
            return None

        expected = self._signature(payload)
        if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
            return None

        try:
            claims = json.loads(payload)
        except ValueError:
            return None
        if not isinstance(claims, dict):
            return None

        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not exp:
            return None
        if math.floor(self._clock()) > exp:
            logger.debug("Office pass expired at %s", exp)
            return None

        return claims

    def verify(self, token: Optional[str]) -> bool:
        return self.decode(token) is not None
