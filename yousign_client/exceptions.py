"""
Exception hierarchy for the Yousign client.
"""

from typing import Optional


class YousignError(Exception):
    """Base exception for all Yousign client errors."""
    
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(YousignError):
    """Session configuration is missing or malformed."""
    pass


class ArgumentError(YousignError, ValueError):
    """A public operation received a parameter that violates its field rule."""
    
    def __init__(self, field: str, message: str):
        super().__init__(f"The '{field}' argument {message}.")
        self.field = field


class RequestError(YousignError):
    """An internal precondition of the request dispatcher was violated."""
    pass


class TransportError(YousignError):
    """The remote call failed."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, details=response_body or None)
        self.status_code = status_code
        self.response_body = response_body


class ClientRequestError(TransportError):
    """The server answered with a non-success status."""
    pass


class AuthenticationError(ClientRequestError):
    """The API key was rejected (HTTP 401)."""
    pass


class PermissionDeniedError(ClientRequestError):
    """The API key is not allowed to access the resource (HTTP 403)."""
    pass


class NotFoundError(ClientRequestError):
    """The requested resource does not exist (HTTP 404)."""
    pass
