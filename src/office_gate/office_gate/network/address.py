"""Client IP extraction from proxy headers.

Precedence (first present wins): ``cf-connecting-ip``, first entry of
``x-forwarded-for``, ``x-real-ip``. Forwarded headers are only honoured when
the immediate peer is a trusted CDN / proxy; the trust boundary itself must
still be enforced at the reverse proxy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network
from typing import Iterable, Mapping, Optional, Tuple, Union

from ..core.constants import HEADER_CF_CONNECTING_IP, HEADER_FORWARDED_FOR, HEADER_REAL_IP

logger = logging.getLogger(__name__)

Network = Union[IPv4Network, IPv6Network]


def parse_networks(cidrs: Iterable[str]) -> Tuple[Network, ...]:
    networks = []
    for cidr in cidrs:
        cidr = (cidr or "").strip()
        if not cidr:
            continue
        try:
            networks.append(ip_network(cidr, strict=False))
        except ValueError:
            logger.warning("Ignoring malformed trusted network %r", cidr)
    return tuple(networks)


def _peer_in(peer: Optional[str], networks: Tuple[Network, ...]) -> bool:
    if not peer:
        return False
    try:
        addr = ip_address(peer.strip())
    except ValueError:
        return False
    return any(addr in network for network in networks)


@dataclass(frozen=True)
class TrustPolicy:
    """Which peers may vouch for the client address.

    With both network tuples empty, forwarded headers are trusted from any
    peer, which is only acceptable behind a tightly controlled reverse proxy.
    Once either tuple is configured, an empty tuple trusts nobody for its
    header family.
    """

    cdn_networks: Tuple[Network, ...] = field(default_factory=tuple)
    proxy_networks: Tuple[Network, ...] = field(default_factory=tuple)

    @classmethod
    def from_cidrs(cls, *, cdn_cidrs: Iterable[str] = (), proxy_cidrs: Iterable[str] = ()) -> "TrustPolicy":
        return cls(cdn_networks=parse_networks(cdn_cidrs), proxy_networks=parse_networks(proxy_cidrs))

    @property
    def is_unconditional(self) -> bool:
        return not self.cdn_networks and not self.proxy_networks

    def trusts_cdn(self, peer: Optional[str]) -> bool:
        return self.is_unconditional or _peer_in(peer, self.cdn_networks)

    def trusts_proxy(self, peer: Optional[str]) -> bool:
        return self.is_unconditional or _peer_in(peer, self.proxy_networks)


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive; werkzeug Headers are not.
        lowered = {str(k).lower(): v for k, v in headers.items()}
        value = lowered.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class AddressResolver:
    def __init__(self, trust_policy: Optional[TrustPolicy] = None):
        self._policy = trust_policy or TrustPolicy()

    @property
    def trust_policy(self) -> TrustPolicy:
        return self._policy

    def _forwarded(self, headers: Mapping[str, str], remote_addr: Optional[str]) -> Optional[str]:
        if self._policy.trusts_cdn(remote_addr):
            cf = _header(headers, HEADER_CF_CONNECTING_IP)
            if cf:
                return cf

        if self._policy.trusts_proxy(remote_addr):
            xff = _header(headers, HEADER_FORWARDED_FOR)
            if xff:
                return xff.split(",")[0].strip() or None

            xri = _header(headers, HEADER_REAL_IP)
            if xri:
                return xri

        return None

    def resolve(self, headers: Mapping[str, str], remote_addr: Optional[str] = None) -> Optional[str]:
        """Best-effort originating client IP, or None if undeterminable.

        Under a configured policy the peer itself is the client whenever no
        header it may vouch for is present. Under the unconditional policy the
        peer is assumed to be the proxy and is never returned.
        """

        forwarded = self._forwarded(headers, remote_addr)
        if forwarded or self._policy.is_unconditional:
            return forwarded

        return remote_addr.strip() if remote_addr and remote_addr.strip() else None
