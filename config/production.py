from .config import Config

SETTINGS_BACKEND = Config.SETTINGS_BACKEND
SUPABASE_URL = Config.SUPABASE_URL
SUPABASE_ANON_KEY = Config.SUPABASE_ANON_KEY
DB_CONFIG = Config.DB_CONFIG

IPINFO_TOKEN = Config.IPINFO_TOKEN
IPINFO_URL = Config.IPINFO_URL
ASN_LOOKUP_TIMEOUT = Config.ASN_LOOKUP_TIMEOUT

# No fallback: a missing secret must fail requests, never sign with a default.
OFFICE_PASS_SECRET = Config.OFFICE_PASS_SECRET
OFFICE_PASS_TTL = Config.OFFICE_PASS_TTL
OFFICE_GATE_KEY = Config.OFFICE_GATE_KEY

SETTINGS_CACHE_TTL = Config.SETTINGS_CACHE_TTL
SETTINGS_FETCH_TIMEOUT = Config.SETTINGS_FETCH_TIMEOUT

TRUSTED_CDN_CIDRS = Config.TRUSTED_CDN_CIDRS
TRUSTED_PROXY_CIDRS = Config.TRUSTED_PROXY_CIDRS
DENY_WHEN_UNCONFIGURED = Config.DENY_WHEN_UNCONFIGURED

CORS_ALLOW_ORIGIN = Config.CORS_ALLOW_ORIGIN
LOG_LEVEL = Config.LOG_LEVEL
DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
