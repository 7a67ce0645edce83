"""Platform API errors and exceptions."""
from .api_errors import ApiError, NetworkError, HTTPStatusText

__all__ = [
    'ApiError',
    'NetworkError',
    'HTTPStatusText',
]
