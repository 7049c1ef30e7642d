"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WILDCARD_IP = "*"

SETTING_ALLOWED_IPS = "allowed_ips"
SETTING_ALLOWED_ASNS = "allowed_asns"
SETTING_ALLOWED_CIDRS = "allowed_cidrs"
SETTING_OFFICE_LOCATION = "office_location"

HEADER_CF_CONNECTING_IP = "cf-connecting-ip"
HEADER_FORWARDED_FOR = "x-forwarded-for"
HEADER_REAL_IP = "x-real-ip"
HEADER_OFFICE_PASS = "x-office-pass"
HEADER_GATE_KEY = "x-office-gate-key"

DEFAULT_PASS_TTL_SECONDS = 120
# Client keeps the pass for less than the server TTL so it never presents an expired one.
DEFAULT_CLIENT_PASS_TTL_SECONDS = 110
DEFAULT_SETTINGS_CACHE_TTL_SECONDS = 30
DEFAULT_HTTP_TIMEOUT_SECONDS = 3.0

DEFAULT_IPINFO_URL = "https://api.ipinfo.io/lite"

DEFAULT_OFFICE_RADIUS_METERS = 100.0
EARTH_RADIUS_METERS = 6371e3
