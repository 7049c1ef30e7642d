from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from ..core.constants import WILDCARD_IP
from ..core.enums import AllowlistMode


@dataclass(frozen=True)
class NetworkAllowlist:
    """Office network rules, rebuilt from the settings store on every cache miss.

    ``"*"`` in ``exact_ips`` disables the gate entirely. An allowlist carrying no
    rules at all is also UNRESTRICTED; the evaluator decides (by policy) whether
    that means allow or deny.

    ``configured`` names the categories that had raw entries in the settings
    store. A configured category whose entries all failed to parse keeps the
    allowlist RESTRICTED and matches nothing.
    """

    exact_ips: FrozenSet[str] = field(default_factory=frozenset)
    cidrs: Tuple[str, ...] = ()
    asns: FrozenSet[int] = field(default_factory=frozenset)
    configured: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD_IP in self.exact_ips

    @property
    def is_empty(self) -> bool:
        return not (self.configured or self.exact_ips or self.cidrs or self.asns)

    @property
    def mode(self) -> AllowlistMode:
        if self.has_wildcard or self.is_empty:
            return AllowlistMode.UNRESTRICTED
        return AllowlistMode.RESTRICTED

    @property
    def requires_asn(self) -> bool:
        """ASN lookups are only worth paying for when an ASN rule can matter."""
        return self.mode == AllowlistMode.RESTRICTED and bool(self.asns)


@dataclass(frozen=True)
class AsnInfo:
    asn: int
    as_name: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class NetworkCheckResult:
    """Outcome of a passed network check; the claims embedded in an office pass."""

    ip: str
    asn: int = 0

    def as_claims(self) -> dict:
        return {"ip": self.ip, "asn": self.asn}
