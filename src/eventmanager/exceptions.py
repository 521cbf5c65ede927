class EventManagerError(Exception):
    """Base exception for the eventmanager package."""


class ConfigError(EventManagerError):
    """Raised when dispatcher configuration values are invalid."""
