"""Package exceptions.

Engines never wrap client errors; these cover configuration and registration only.
"""


class ScoutBridgeError(Exception):
    """Base exception for scoutbridge errors."""


class ConfigurationError(ScoutBridgeError):
    """Raised when engine configuration is invalid or a client library is missing."""


class EngineNotFoundError(ScoutBridgeError):
    """Raised when a requested engine driver is not registered."""
