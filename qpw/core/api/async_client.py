"""
Async platform API client.

Fully asynchronous HTTP layer: builds region-scoped URLs, attaches the
bearer token from the session store, and maps failures to typed errors.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional

import aiohttp

from .config import APIConfig
from .errors import ApiError, NetworkError
from .events import EventEmitter
from .request import RequestBuilder, ResponseHandler
from .request.request_builder import QueryParams
from ..exceptions import AuthenticationRequiredError, QPWException
from ..session import SessionStore


class AsyncAPIClient:
    """
    Asynchronous platform API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling
    - Session (token + region) read from a SessionStore on every call
    - 'unauthorized' event on 401/403 responses

    There are no automatic retries; every failure reaches the caller.

    Example:
        >>> store = SessionStore(MemorySession({'token': 't', 'region': 'mypurecloud.ie'}))
        >>> async with AsyncAPIClient(store) as client:
        ...     me = await client.request('/api/v2/users/me')
    """

    def __init__(self, store: SessionStore, config: Optional[APIConfig] = None):
        """
        Initialize async API client.

        Args:
            store: Session store holding token and region
            config: API configuration (uses defaults if not provided)
        """
        self._store = store
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._event_emitter = EventEmitter('qpw.api')

        from ..logging import get_logger
        self._logger = get_logger('qpw.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    def on(self, event: str, callback: Callable) -> 'AsyncAPIClient':
        """Register an event handler ('unauthorized' receives the ApiError)."""
        self._event_emitter.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'AsyncAPIClient':
        """Remove an event handler."""
        self._event_emitter.off(event, callback)
        return self

    def emit(self, event: str, *args, **kwargs):
        """Emit an event."""
        self._event_emitter.emit(event, *args, **kwargs)

    @property
    def store(self) -> SessionStore:
        """Get the session store."""
        return self._store

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def build_url(self, path: str, params: Optional[QueryParams] = None) -> str:
        """
        Build a fully-qualified API URL for the current region.

        Only the region is needed; no token is required.

        Raises:
            AuthenticationRequiredError: If no region is set
        """
        region = self._store.region
        if not region:
            raise AuthenticationRequiredError('region', f"build_url {path}")
        return RequestBuilder(self._config.api_base(region), self._store.token or '').build_url(path, params)

    async def request(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        *,
        method: str = 'GET',
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> Any:
        """
        Make one authenticated request.

        Args:
            path: Resource path, e.g. '/api/v2/routing/queues'
            params: Query parameters (list values repeat the key)
            method: HTTP method
            json: Optional JSON request body
            headers: Extra headers merged over the defaults

        Returns:
            Parsed JSON, or None for 204 / empty bodies

        Raises:
            AuthenticationRequiredError: Token or region missing (no request made)
            ApiError: Non-2xx response
            NetworkError: Transport failure
        """
        if self._closed:
            raise QPWException("Client is closed", 'request')

        token, region = self._store.require(f"{method} {path}")
        builder = RequestBuilder(self._config.api_base(region), token)
        url = builder.build_url(path, params)
        request_headers = builder.build_headers(headers)

        session = await self._ensure_session()
        self._logger.debug(f"{method} {url}")

        try:
            async with session.request(
                method,
                url,
                headers=request_headers,
                json=json,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
            ) as response:
                status = response.status

                if not ResponseHandler.is_success(status):
                    body = await self._read_body(response)
                    error = ApiError(path, status, response.reason, body)
                    self._logger.debug(f"{method} {path} -> {status}")
                    if error.is_unauthorized:
                        self.emit('unauthorized', error)
                    raise error

                text = '' if status == 204 else await response.text()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error for {method} {path}: {e}")
            raise NetworkError(path, e) from e

        try:
            return ResponseHandler.parse_body(status, text)
        except ValueError as e:
            raise ApiError(path, status, f"Invalid JSON response: {e}", text[:200]) from e

    async def _read_body(self, response: aiohttp.ClientResponse) -> str:
        """Read an error body, best effort."""
        try:
            return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError):
            return ''

    # Convenience methods

    async def get_me(self) -> Dict[str, Any]:
        """Get the authenticated user's profile."""
        return await self.request('/api/v2/users/me')
