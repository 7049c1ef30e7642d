"""Office network allowlist evaluation.

Three rule categories are supported: exact IPs, IPv4 CIDR ranges and ASNs.
A caller is admitted when any configured category matches. Malformed entries
never raise; they simply do not match.
"""

from __future__ import annotations

import json
import logging
import re
from ipaddress import IPv4Address, AddressValueError
from typing import Any, Iterable, List, Optional

from ..core.constants import SETTING_ALLOWED_ASNS, SETTING_ALLOWED_CIDRS, SETTING_ALLOWED_IPS
from ..core.enums import AllowlistMode
from .model import NetworkAllowlist

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")
_IPV4_ALL_ONES = 0xFFFFFFFF


def _clean_items(items: Iterable[Any]) -> List[str]:
    cleaned = [str(item).strip() for item in items if item is not None]
    # Keep first-seen order, drop blanks and duplicates.
    return list(dict.fromkeys(item for item in cleaned if item))


def normalize_string_list(value: Any) -> List[str]:
    """Normalize a setting value into a list of strings.

    Settings may be stored as native lists, JSON-array strings (``'["a","b"]'``)
    or a single plain string.
    """

    if value is None:
        return []

    if isinstance(value, (list, tuple, set, frozenset)):
        return _clean_items(value)

    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return []
        if trimmed.startswith("["):
            try:
                parsed = json.loads(trimmed)
            except ValueError:
                return [trimmed]
            if isinstance(parsed, list):
                return _clean_items(parsed)
        return [trimmed]

    return []


def normalize_asn(value: Any) -> Optional[int]:
    """``"AS15169"``, ``"as15169"`` and ``" 15169 "`` all become ``15169``."""
    digits = _NON_DIGITS.sub("", str(value))
    if not digits:
        return None
    return int(digits)


def normalize_asn_list(value: Any) -> List[int]:
    asns = (normalize_asn(item) for item in normalize_string_list(value))
    return list(dict.fromkeys(asn for asn in asns if asn is not None))


def parse_ipv4(value: Optional[str]) -> Optional[int]:
    """Dotted-quad to a 32-bit unsigned integer, or None when malformed."""
    if not value:
        return None
    try:
        return int(IPv4Address(value.strip()))
    except (AddressValueError, ValueError):
        return None


def cidr_contains(cidr: str, ip: Optional[str]) -> bool:
    net_str, sep, bits_str = (cidr or "").strip().partition("/")
    if not sep:
        return False

    try:
        bits = int(bits_str)
    except ValueError:
        return False
    if bits < 0 or bits > 32:
        return False

    network = parse_ipv4(net_str)
    address = parse_ipv4(ip)
    if network is None or address is None:
        return False

    mask = (_IPV4_ALL_ONES << (32 - bits)) & _IPV4_ALL_ONES if bits else 0
    return (network & mask) == (address & mask)


def build_allowlist(*, allowed_ips: Any = None, allowed_cidrs: Any = None, allowed_asns: Any = None) -> NetworkAllowlist:
    raw = {
        SETTING_ALLOWED_IPS: normalize_string_list(allowed_ips),
        SETTING_ALLOWED_CIDRS: normalize_string_list(allowed_cidrs),
        SETTING_ALLOWED_ASNS: normalize_string_list(allowed_asns),
    }
    asns = frozenset(normalize_asn_list(raw[SETTING_ALLOWED_ASNS]))
    if raw[SETTING_ALLOWED_ASNS] and not asns:
        logger.warning("No usable entry in %s %r; the ASN rule matches nothing", SETTING_ALLOWED_ASNS, raw[SETTING_ALLOWED_ASNS])

    return NetworkAllowlist(
        exact_ips=frozenset(raw[SETTING_ALLOWED_IPS]),
        cidrs=tuple(raw[SETTING_ALLOWED_CIDRS]),
        asns=asns,
        configured=frozenset(name for name, entries in raw.items() if entries),
    )


class AllowlistEvaluator:
    """Decide whether an (ip, asn) pair is inside the office network."""

    def __init__(self, *, deny_when_unconfigured: bool = False):
        self._deny_when_unconfigured = bool(deny_when_unconfigured)

    def evaluate(self, ip: Optional[str], asn: Optional[int], allowlist: NetworkAllowlist) -> bool:
        if allowlist.has_wildcard:
            return True

        if allowlist.mode == AllowlistMode.UNRESTRICTED:
            return not self._deny_when_unconfigured

        ip_match = bool(ip) and ip.strip() in allowlist.exact_ips
        cidr_match = bool(allowlist.cidrs) and any(cidr_contains(cidr, ip) for cidr in allowlist.cidrs)
        asn_match = asn is not None and asn in allowlist.asns

        return ip_match or cidr_match or asn_match


def evaluate(ip: Optional[str], asn: Optional[int], allowlist: NetworkAllowlist) -> bool:
    """Evaluate with the default policy (no rules configured means allow)."""
    return AllowlistEvaluator().evaluate(ip, asn, allowlist)
