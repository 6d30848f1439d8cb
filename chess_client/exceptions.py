# ABOUTME: Exception hierarchy for the chess server client
# ABOUTME: Separates transport failures from malformed or unexpected server responses

from typing import Optional


class ChessClientError(Exception):
    """Base exception for all chess client errors."""

    pass


class TransportError(ChessClientError):
    """The HTTP request could not be completed (connection refused, DNS, timeout)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ProtocolError(ChessClientError):
    """The server responded, but not with the expected body.

    Attributes:
        status_code: HTTP status of the offending response, if known
        server_error: Error message reported by the server in place of a result
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_error: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.server_error = server_error
