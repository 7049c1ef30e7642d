SETTINGS_BACKEND = "rest"
SUPABASE_URL = "http://settings.test"
SUPABASE_ANON_KEY = "test-anon-key"
DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "office_gate_test",
}

IPINFO_TOKEN = "test-ipinfo-token"
IPINFO_URL = "http://ipinfo.test/lite"
ASN_LOOKUP_TIMEOUT = 1.0

OFFICE_PASS_SECRET = "test-secret"
OFFICE_PASS_TTL = 120
OFFICE_GATE_KEY = "test-gate-key"

SETTINGS_CACHE_TTL = 30.0
SETTINGS_FETCH_TIMEOUT = 1.0

TRUSTED_CDN_CIDRS = []
TRUSTED_PROXY_CIDRS = []
DENY_WHEN_UNCONFIGURED = False

CORS_ALLOW_ORIGIN = "*"
LOG_LEVEL = "DEBUG"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
