"""Exceptions raised by the Kahunas CLI."""


class KahunasError(Exception):
    """Base exception for Kahunas CLI errors."""

    pass


class KahunasClientError(KahunasError):
    """HTTP or authentication failure talking to Kahunas."""

    pass


class ConfigError(KahunasError):
    """Unreadable or invalid config/auth file."""

    pass
