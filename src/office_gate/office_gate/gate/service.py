from __future__ import annotations

import hmac
import logging
from typing import Mapping, Optional

from ..common.validators import require_setting
from ..core.constants import DEFAULT_PASS_TTL_SECONDS
from ..core.exceptions import NetworkDeniedError, PassInvalidError
from ..network.address import AddressResolver
from ..network.allowlist import AllowlistEvaluator
from ..network.asn_lookup import AsnLookup
from ..network.model import NetworkCheckResult
from ..passes.signer import OfficePassSigner
from ..settings.cache import SettingsCache

logger = logging.getLogger(__name__)


class NetworkGateService:
    """Use case: decide whether the caller is on an allowed office network."""

    def __init__(
        self,
        resolver: AddressResolver,
        settings: SettingsCache,
        asn_lookup: AsnLookup,
        evaluator: Optional[AllowlistEvaluator] = None,
    ):
        self._resolver = resolver
        self._settings = settings
        self._asn_lookup = asn_lookup
        self._evaluator = evaluator or AllowlistEvaluator()

    def require_office_network(self, headers: Mapping[str, str], *, remote_addr: Optional[str] = None) -> NetworkCheckResult:
        """Raise NetworkDeniedError unless the request comes from the office network.

        Settings store failures and missing configuration propagate unchanged.
        """

        ip = self._resolver.resolve(headers, remote_addr)
        if not ip:
            raise NetworkDeniedError("Cannot determine client IP")

        allowlist = self._settings.get_allowlist()

        asn: Optional[int] = None
        if allowlist.requires_asn:
            info = self._asn_lookup.lookup(ip)
            asn = info.asn if info else None

        if not self._evaluator.evaluate(ip, asn, allowlist):
            raise NetworkDeniedError(f"IP {ip} (ASN {asn if asn is not None else 'unknown'}) not in office allowlist")

        return NetworkCheckResult(ip=ip, asn=asn or 0)


class AdmissionService:
    """Use case: run the network gate and mint an office pass on success."""

    def __init__(self, gate: NetworkGateService, signer: OfficePassSigner, *, pass_ttl: int = DEFAULT_PASS_TTL_SECONDS):
        self._gate = gate
        self._signer = signer
        self._pass_ttl = int(pass_ttl)

    def issue_pass(self, headers: Mapping[str, str], *, remote_addr: Optional[str] = None) -> str:
        result = self._gate.require_office_network(headers, remote_addr=remote_addr)
        return self._signer.sign(result.as_claims(), self._pass_ttl)


class CheckinGuardService:
    """Use case: authorize a mutating attendance call.

    Both a valid pass and a fresh network check are required; the pass alone
    only proves a past check. The pre-shared gate key is mandatory: a server
    without one refuses every check-in with a configuration error.
    """

    def __init__(self, gate: NetworkGateService, signer: OfficePassSigner, *, gate_key: Optional[str] = None):
        self._gate = gate
        self._signer = signer
        self._gate_key = (gate_key or "").strip() or None

    def _check_gate_key(self, presented: Optional[str]) -> None:
        expected = require_setting(self._gate_key, "OFFICE_GATE_KEY")
        if not presented or not hmac.compare_digest(presented.strip().encode("utf-8"), expected.encode("utf-8")):
            raise PassInvalidError("Missing or invalid gate key")

    def authorize(
        self,
        headers: Mapping[str, str],
        *,
        office_pass: Optional[str],
        gate_key: Optional[str] = None,
        remote_addr: Optional[str] = None,
    ) -> NetworkCheckResult:
        self._check_gate_key(gate_key)

        if not self._signer.verify(office_pass):
            raise PassInvalidError("Invalid office pass")

        return self._gate.require_office_network(headers, remote_addr=remote_addr)
