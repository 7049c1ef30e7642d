from __future__ import annotations

from src.office_gate.office_gate.network.address import AddressResolver, TrustPolicy


def test_cdn_header_wins_over_proxies():
    headers = {
        "cf-connecting-ip": "203.0.113.5",
        "x-forwarded-for": "198.51.100.1, 10.0.0.1",
        "x-real-ip": "192.0.2.9",
    }

    assert AddressResolver().resolve(headers) == "203.0.113.5"


def test_first_forwarded_for_entry_is_trimmed():
    headers = {"x-forwarded-for": "  198.51.100.1 , 10.0.0.1", "x-real-ip": "192.0.2.9"}

    assert AddressResolver().resolve(headers) == "198.51.100.1"


def test_real_ip_is_last_resort():
    assert AddressResolver().resolve({"x-real-ip": " 192.0.2.9 "}) == "192.0.2.9"


def test_no_headers_resolves_to_none():
    assert AddressResolver().resolve({}) is None
    assert AddressResolver().resolve({}, "127.0.0.1") is None


def test_header_names_are_case_insensitive():
    assert AddressResolver().resolve({"X-Forwarded-For": "198.51.100.1"}) == "198.51.100.1"


def test_empty_header_values_are_skipped():
    headers = {"cf-connecting-ip": "  ", "x-forwarded-for": "", "x-real-ip": "192.0.2.9"}

    assert AddressResolver().resolve(headers) == "192.0.2.9"


def test_cdn_header_ignored_unless_peer_is_cdn():
    policy = TrustPolicy.from_cidrs(cdn_cidrs=["173.245.48.0/20"], proxy_cidrs=["10.0.0.0/8"])
    resolver = AddressResolver(policy)
    headers = {"cf-connecting-ip": "203.0.113.5", "x-forwarded-for": "198.51.100.1"}

    assert resolver.resolve(headers, "173.245.48.10") == "203.0.113.5"
    assert resolver.resolve(headers, "10.1.2.3") == "198.51.100.1"


def test_untrusted_peer_is_the_client():
    policy = TrustPolicy.from_cidrs(cdn_cidrs=["173.245.48.0/20"], proxy_cidrs=["10.0.0.0/8"])
    resolver = AddressResolver(policy)
    spoofed = {"cf-connecting-ip": "203.0.113.5", "x-forwarded-for": "203.0.113.5"}

    assert resolver.resolve(spoofed, "192.0.2.77") == "192.0.2.77"


def test_malformed_trusted_networks_are_ignored():
    policy = TrustPolicy.from_cidrs(proxy_cidrs=["not-a-cidr", "10.0.0.0/8"])

    assert len(policy.proxy_networks) == 1
    assert policy.is_unconditional is False


def test_proxy_only_policy_ignores_cdn_header_from_outside_peer():
    resolver = AddressResolver(TrustPolicy.from_cidrs(proxy_cidrs=["10.0.0.0/8"]))

    assert resolver.resolve({"cf-connecting-ip": "203.0.113.42"}, "198.51.100.9") == "198.51.100.9"
    assert resolver.resolve({"cf-connecting-ip": "203.0.113.42"}, "10.0.0.5") == "10.0.0.5"
    assert resolver.resolve({"x-forwarded-for": "203.0.113.42"}, "10.0.0.5") == "203.0.113.42"
    assert resolver.trust_policy.is_unconditional is False


def test_cdn_only_policy_ignores_forwarded_for_from_outside_peer():
    resolver = AddressResolver(TrustPolicy.from_cidrs(cdn_cidrs=["173.245.48.0/20"]))
    forged = {"x-forwarded-for": "203.0.113.42", "x-real-ip": "203.0.113.42"}

    assert resolver.resolve(forged, "198.51.100.9") == "198.51.100.9"
    assert resolver.resolve(forged, "173.245.48.10") == "173.245.48.10"
    assert resolver.resolve({"cf-connecting-ip": "203.0.113.42"}, "173.245.48.10") == "203.0.113.42"


def test_trusted_peer_without_its_headers_is_the_client():
    policy = TrustPolicy.from_cidrs(cdn_cidrs=["173.245.48.0/20"], proxy_cidrs=["10.0.0.0/8"])
    resolver = AddressResolver(policy)

    assert resolver.resolve({}, "10.1.2.3") == "10.1.2.3"
    assert resolver.resolve({}, "173.245.48.10") == "173.245.48.10"
    assert resolver.resolve({}, None) is None
