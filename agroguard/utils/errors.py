"""
Exception types raised by AgroGuard.
"""


class AgroGuardError(Exception):
    """Base class for all AgroGuard errors."""


class ConfigurationError(AgroGuardError):
    """Configuration file is missing or malformed."""


class WeatherProviderError(AgroGuardError):
    """Weather data could not be fetched or parsed."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
