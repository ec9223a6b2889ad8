"""
Exception hierarchy for the Avalara tax gateway.
Every error raised by the package derives from AvalaraError.
"""
from enum import Enum
from typing import Optional


class AvalaraError(Exception):
    """Base class for all gateway errors"""
    pass


class ConfigurationError(AvalaraError):
    """Raised when the client is constructed without a mandatory setting"""
    pass


class InvalidRequestError(AvalaraError, ValueError):
    """Raised when a transaction cannot be turned into a valid request"""
    pass


class TransportErrorKind(str, Enum):
    """What went wrong while talking to the tax service"""
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"


class TransportError(AvalaraError):
    """
    Raised when the HTTP round trip fails.

    Attributes:
        kind: TIMEOUT, HTTP_STATUS or NETWORK
        status_code: HTTP status for HTTP_STATUS failures
        body: Raw response body, when the service sent one
    """

    def __init__(self, message: str,
                 kind: TransportErrorKind = TransportErrorKind.NETWORK,
                 status_code: Optional[int] = None,
                 body: Optional[bytes] = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.body = body

    @property
    def is_timeout(self) -> bool:
        return self.kind is TransportErrorKind.TIMEOUT


class ParseError(AvalaraError):
    """Raised when a response body does not match the expected wire format"""
    pass


class CacheError(AvalaraError):
    """Cache read/write failure. Reported through logging, never raised to callers."""
    pass
