import os


def env_list(name: str) -> list:
    """Comma-separated environment variable as a list of trimmed strings."""
    return [item.strip() for item in os.environ.get(name, "").split(",") if item.strip()]


def env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Settings store: "rest" (hosted Postgres REST API) or "mysql"
    SETTINGS_BACKEND = os.environ.get("SETTINGS_BACKEND", "rest").lower()
    SUPABASE_URL = os.environ.get("SUPABASE_URL") or os.environ.get("VITE_SUPABASE_URL")
    SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY") or os.environ.get("VITE_SUPABASE_PUBLISHABLE_KEY")

    DB_CONFIG = {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": int(os.environ.get("DB_PORT", "3306")),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", ""),
        "database": os.environ.get("DB_NAME", "office_gate"),
        "connect_timeout": int(os.environ.get("DB_CONNECT_TIMEOUT", "3")),
    }

    IPINFO_TOKEN = os.environ.get("IPINFO_TOKEN") or os.environ.get("VITE_IPINFO_TOKEN")
    IPINFO_URL = os.environ.get("IPINFO_URL", "https://api.ipinfo.io/lite")
    ASN_LOOKUP_TIMEOUT = float(os.environ.get("ASN_LOOKUP_TIMEOUT", "3"))

    OFFICE_PASS_SECRET = os.environ.get("OFFICE_PASS_SECRET")
    OFFICE_PASS_TTL = int(os.environ.get("OFFICE_PASS_TTL", "120"))
    OFFICE_GATE_KEY = os.environ.get("OFFICE_GATE_KEY")

    SETTINGS_CACHE_TTL = float(os.environ.get("SETTINGS_CACHE_TTL", "30"))
    SETTINGS_FETCH_TIMEOUT = float(os.environ.get("SETTINGS_FETCH_TIMEOUT", "3"))

    TRUSTED_CDN_CIDRS = env_list("TRUSTED_CDN_CIDRS")
    TRUSTED_PROXY_CIDRS = env_list("TRUSTED_PROXY_CIDRS")
    DENY_WHEN_UNCONFIGURED = env_flag("DENY_WHEN_UNCONFIGURED")

    CORS_ALLOW_ORIGIN = os.environ.get("CORS_ALLOW_ORIGIN", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    AUTO_INIT_DB = env_flag("AUTO_INIT_DB")
