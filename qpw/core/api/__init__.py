"""Platform API module: HTTP layer, pagination and implicit-grant login."""
from .errors import ApiError, NetworkError, HTTPStatusText
from .events import EventEmitter
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, PaginationConfig
from .request import RequestBuilder, ResponseHandler, PageResult, encode_query, default_page_adapter
from .async_client import AsyncAPIClient
from .pagination import PaginationWalker
from .async_auth import (
    AsyncAuthService,
    AuthResult,
    LoginResult,
    RedirectLocation,
    StaticLocation,
    build_authorize_url,
    parse_redirect_fragment,
    make_state,
    region_from_state,
)

__all__ = [
    # Client
    'AsyncAPIClient',
    'PaginationWalker',

    # Auth
    'AsyncAuthService',
    'AuthResult',
    'LoginResult',
    'RedirectLocation',
    'StaticLocation',
    'build_authorize_url',
    'parse_redirect_fragment',
    'make_state',
    'region_from_state',

    # Requests
    'RequestBuilder',
    'ResponseHandler',
    'PageResult',
    'encode_query',
    'default_page_adapter',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'PaginationConfig',

    # Errors
    'ApiError',
    'NetworkError',
    'HTTPStatusText',

    # Events
    'EventEmitter',
]
