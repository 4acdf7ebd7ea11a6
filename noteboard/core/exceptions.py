"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Remote store failures share the RemoteStoreError base so the list store
and mutation coordinator can catch them at a single boundary.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")


class RemoteStoreError(ApplicationError):
    """Base for failures reported by the remote note store."""


class NetworkError(RemoteStoreError):
    """Raised when a request to the remote store fails to complete."""

    def __init__(self, message: str = "Network request failed") -> None:
        super().__init__(message, code="SYS_NETWORK_ERROR")


class NotFoundError(RemoteStoreError):
    """Raised when the target note is absent server-side."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")
