class GateError(Exception):
    """Base exception for admission gate failures."""


class ConfigurationError(GateError):
    """Raised when a required secret, URL or token is not configured."""


class NetworkDeniedError(GateError):
    """Raised when the caller's network does not satisfy the allowlist."""


class PassInvalidError(GateError):
    """Raised when an office pass (or the gate key) is missing, forged or expired."""


class UpstreamUnavailableError(GateError):
    """Raised when the settings store cannot be read."""
