"""
QPWClient - High-level async client for the contact-center platform.

Example:
    >>> async with QPWClient("work") as qpw:
    ...     if await qpw.resume():
    ...         lookups = await qpw.load_lookups()
    ...         print(len(lookups['queues']))
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.api import (
    APIConfig,
    ApiError,
    AsyncAPIClient,
    AsyncAuthService,
    LoginResult,
    PaginationWalker,
    ProxyConfig,
    RedirectLocation,
    SSLConfig,
    StaticLocation,
    TimeoutConfig,
    PaginationConfig,
    make_state,
)
from .core.api.request.request_builder import QueryParams
from .core.exceptions import QPWException
from .core.logging import get_logger
from .core.lookups import LookupAggregator, LookupOption, LookupResult
from .core.session import MemorySession, SessionStorage, SessionStore, SQLiteSession


@dataclass
class UserProfile:
    """The authenticated user, from /api/v2/users/me."""
    id: str
    name: str
    email: str = ''
    username: str = ''
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'UserProfile':
        user_id = str(data.get('id', ''))
        return cls(
            id=user_id,
            name=data.get('name') or data.get('username') or user_id,
            email=data.get('email') or '',
            username=data.get('username') or '',
            raw=dict(data),
        )

    def __str__(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>"
        return self.name


class QPWClient:
    """
    High-level async client with a persisted session.

    Session modes:

    1. Named profile (SQLite file ``<name>.session``):
        >>> client = QPWClient("work")

    2. Custom storage:
        >>> client = QPWClient(MemorySession())

    3. No persistence:
        >>> client = QPWClient(None)

    Login is a browser round trip:
        >>> url = client.authorize_url(client_id, "mypurecloud.ie", redirect_uri)
        >>> # ... operator signs in, browser lands on redirect_uri#access_token=...
        >>> result = await client.complete_login(redirected_url)
    """

    def __init__(
        self,
        session: Optional[Union[str, SessionStorage]] = 'qpw',
        *,
        config: Optional[APIConfig] = None,
        base_path: Optional[Path] = None
    ):
        """
        Initialize the client.

        Args:
            session: Profile name (creates .session file), a SessionStorage,
                or None for an in-memory session
            config: Optional API configuration
            base_path: Base path for session files
        """
        self._config = config or APIConfig.default()
        self._logger = get_logger('qpw.client')

        if session is None:
            storage: SessionStorage = MemorySession()
        elif isinstance(session, str):
            storage = SQLiteSession(session, base_path)
        else:
            storage = session

        self._store = SessionStore(storage)
        self._api = AsyncAPIClient(self._store, self._config)
        self._auth = AsyncAuthService(self._api, self._store)
        self._walker = PaginationWalker(self._api, defaults=self._config.pagination)
        self._lookups = LookupAggregator(self._walker, max_pages=self._config.pagination.max_pages)
        self._expected_state: Optional[str] = None
        self._me: Optional[UserProfile] = None
        self._confirming_login = False

        if self._config.invalidate_on_unauthorized:
            self._api.on('unauthorized', self._on_unauthorized)

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_pass: Optional[str] = None,
        timeout: float = 300,
        verify_ssl: bool = True,
        page_size: int = 100,
        max_pages: int = 50,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            proxy: Proxy URL (e.g., "http://proxy:8080")
            proxy_user: Proxy username
            proxy_pass: Proxy password
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            page_size: Default entities per page
            max_pages: Page ceiling per list walk
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        proxy_config = None
        if proxy:
            proxy_config = ProxyConfig(
                url=proxy,
                username=proxy_user,
                password=proxy_pass
            )

        return APIConfig(
            proxy=proxy_config,
            timeout=TimeoutConfig(total=timeout),
            ssl=SSLConfig(verify=verify_ssl),
            pagination=PaginationConfig(page_size=page_size, max_pages=max_pages),
            user_agent=user_agent or 'qpw/1.0.0'
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def session(self) -> SessionStore:
        """Get the session store."""
        return self._store

    @property
    def api(self) -> AsyncAPIClient:
        """Get the low-level API client."""
        return self._api

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def is_logged_in(self) -> bool:
        """True when token and region are present (not necessarily valid)."""
        return self._store.is_authenticated

    @property
    def user(self) -> Optional[UserProfile]:
        """Last confirmed user profile."""
        return self._me

    # =========================================================================
    # Login / logout
    # =========================================================================

    def authorize_url(self, client_id: str, region: str, redirect_uri: str) -> str:
        """
        Build the URL the operator must open to sign in.

        Also persists the region and remembers the expected state for
        complete_login().
        """
        url = self._auth.authorize_url(client_id, region, redirect_uri)
        self._expected_state = make_state(region)
        return url

    async def complete_login(
        self,
        location: Union[str, RedirectLocation],
        expected_state: Optional[str] = None
    ) -> Optional[LoginResult]:
        """
        Finish login from the redirect URL (or location) the browser landed on.

        Args:
            location: Redirect URL or RedirectLocation
            expected_state: State to enforce; defaults to the one from the
                last authorize_url() call, if any

        Returns:
            LoginResult, or None when the location held no login response
        """
        if isinstance(location, str):
            location = StaticLocation(location)

        # A rejected identity check right after login keeps the new session
        self._confirming_login = True
        try:
            result = await self._auth.complete(location, expected_state or self._expected_state)
        finally:
            self._confirming_login = False
        if result is not None:
            self._expected_state = None
            self._me = UserProfile.from_api(result.me) if result.me else None
            if self._me:
                self._logger.info(f"Logged in as {self._me}")
        return result

    async def resume(self) -> Optional[UserProfile]:
        """
        Confirm an existing session.

        Returns:
            The user profile, or None if there is no session or the
            token does not work (logged)
        """
        if not self._store.is_authenticated:
            return None
        try:
            return await self.me()
        except QPWException as e:
            self._logger.warning(f"Existing token invalid: {e}")
            return None

    async def me(self) -> UserProfile:
        """
        Fetch the authenticated user.

        Raises:
            AuthenticationRequiredError, ApiError, NetworkError
        """
        self._me = UserProfile.from_api(await self._api.get_me() or {})
        return self._me

    def logout(self) -> None:
        """Forget the session (token and region)."""
        self._auth.logout()
        self._me = None

    def _on_unauthorized(self, error: ApiError) -> None:
        if self._confirming_login:
            return
        if self._store.token:
            self._logger.warning(f"Session invalidated after {error.status} on {error.path}")
            self._store.clear()
            self._me = None

    # =========================================================================
    # Data access
    # =========================================================================

    async def request(self, path: str, params: Optional[QueryParams] = None, **kwargs) -> Any:
        """Make one authenticated request (see AsyncAPIClient.request)."""
        return await self._api.request(path, params, **kwargs)

    async def get_all_pages(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None
    ) -> List[Any]:
        """Fetch every entity of a list resource."""
        return await self._walker.walk(path, params, page_size=page_size, max_pages=max_pages)

    async def load_lookups(self) -> LookupResult:
        """Load all lookup resources (all or nothing)."""
        return await self._lookups.load_all()

    async def load_lookup(self, name: str) -> List[LookupOption]:
        """Load a single lookup resource; errors propagate."""
        return await self._lookups.load_one(name)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Close HTTP resources and the session storage."""
        await self._api.close()
        self._store.storage.close()

    async def __aenter__(self) -> 'QPWClient':
        await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"QPWClient({self._store.get()!r})"
