class AstralisError(Exception):
    """Base exception for the Astralis debug tooling."""


class ConfigError(AstralisError):
    """Raised when a configuration file cannot be read or is malformed."""


class ConsoleStateError(AstralisError):
    """Raised when the log console is driven with invalid filter values."""
