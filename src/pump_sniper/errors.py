class PumpSniperError(Exception):
    """Base class for errors raised by the sniper core."""


class InvalidOrderError(PumpSniperError, ValueError):
    """Raised when a limit order cannot be priced from its registration inputs."""


class EventDecodeError(PumpSniperError, ValueError):
    """Raised when an SDK event payload is missing fields or carries bad values."""


class ConfigError(PumpSniperError):
    """Raised when the runtime configuration is missing or invalid."""
