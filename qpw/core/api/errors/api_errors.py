"""Platform API errors and exceptions."""
from typing import Dict, Optional

from ...exceptions import QPWException


class HTTPStatusText:
    """Short descriptions for the statuses the platform commonly returns."""

    STATUS_TEXT: Dict[int, str] = {
        400: 'Bad Request: the request parameters were rejected',
        401: 'Unauthorized: the token is missing, invalid or expired',
        403: 'Forbidden: the token lacks a permission for this resource',
        404: 'Not Found',
        408: 'Request Timeout',
        409: 'Conflict',
        413: 'Payload Too Large',
        429: 'Too Many Requests: rate limit exceeded',
        500: 'Internal Server Error',
        502: 'Bad Gateway',
        503: 'Service Unavailable',
        504: 'Gateway Timeout',
    }

    @classmethod
    def get_message(cls, status: int) -> str:
        """Gets a description for an HTTP status."""
        return cls.STATUS_TEXT.get(status, f"HTTP {status}")


class ApiError(QPWException):
    """
    Exception raised for non-2xx API responses.

    Attributes:
        path: Resource path that was requested
        status: HTTP status code
        status_text: Reason phrase sent by the server
        body: Response body (best effort, may be empty)
    """

    def __init__(
        self,
        path: str,
        status: int,
        status_text: Optional[str] = None,
        body: str = ''
    ):
        self.path = path
        self.status = status
        self.status_text = status_text or HTTPStatusText.get_message(status)
        self.body = body or ''
        message = f"API {path} failed: {status} {self.status_text}"
        if self.body:
            message += f" {self.body}"
        super().__init__(message, 'request')

    @property
    def is_unauthorized(self) -> bool:
        """True for 401/403, which invalidate the session by convention."""
        return self.status in (401, 403)


class NetworkError(QPWException):
    """Transport failure (DNS, connection, timeout) before any response."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        reason = str(cause) or type(cause).__name__
        super().__init__(f"Network error for {path}: {reason}", 'request')
