"""
Base domain exceptions.
"""


class DouanierException(Exception):
    """Base exception for all Douanier domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DouanierException):
    """Raised when request input validation fails."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason, code="VALIDATION_ERROR")


class ConfigurationError(DouanierException):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, setting: str, reason: str = "not configured"):
        self.setting = setting
        message = f"{setting} {reason}"
        super().__init__(message, code="CONFIGURATION_ERROR")
