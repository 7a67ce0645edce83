"""
Session store.

Holds the current bearer token and region and mirrors every change into
a SessionStorage backend.
"""
from typing import Optional, Tuple

from .models import SessionData
from .protocols import SessionStorage
from .memory_session import MemorySession
from ..exceptions import AuthenticationRequiredError


class SessionStore:
    """
    Single source of truth for the bearer-token session.

    Every outbound API call reads the store; only the login flow and
    logout write it. Values are restored from the storage on creation.

    Example:
        >>> store = SessionStore(MemorySession())
        >>> store.set_region('mypurecloud.ie')
        >>> store.set_token('abc')
        >>> store.get().is_authenticated
        True
    """

    TOKEN_KEY = 'token'
    REGION_KEY = 'region'

    def __init__(self, storage: Optional[SessionStorage] = None):
        """
        Initialize the store.

        Args:
            storage: Persistence backend (memory if not provided)
        """
        self._storage = storage if storage is not None else MemorySession()
        self._token: Optional[str] = self._storage.get(self.TOKEN_KEY) or None
        self._region: Optional[str] = self._storage.get(self.REGION_KEY) or None

    @property
    def storage(self) -> SessionStorage:
        """Get the persistence backend."""
        return self._storage

    def get(self) -> SessionData:
        """Return a snapshot of the current session."""
        return SessionData(token=self._token, region=self._region)

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def region(self) -> Optional[str]:
        return self._region

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token and self._region)

    def set_token(self, token: Optional[str]) -> None:
        """
        Set or remove the access token.

        Args:
            token: New token; None or empty string removes it
        """
        self._token = token or None
        self._sync(self.TOKEN_KEY, self._token)

    def set_region(self, region: Optional[str]) -> None:
        """
        Set or remove the region.

        Args:
            region: Region domain; None or empty string removes it
        """
        self._region = region or None
        self._sync(self.REGION_KEY, self._region)

    def clear(self) -> None:
        """Forget token and region (logout or invalidation)."""
        self.set_token(None)
        self.set_region(None)

    def require(self, operation: Optional[str] = None) -> Tuple[str, str]:
        """
        Return (token, region) or fail before any network activity.

        Args:
            operation: Operation name for the error message

        Raises:
            AuthenticationRequiredError: If token or region is missing
        """
        if not self._token:
            raise AuthenticationRequiredError('token', operation)
        if not self._region:
            raise AuthenticationRequiredError('region', operation)
        return self._token, self._region

    def _sync(self, key: str, value: Optional[str]) -> None:
        if value:
            self._storage.set(key, value)
        else:
            self._storage.delete(key)

    def __repr__(self) -> str:
        return f"SessionStore({self.get()!r})"
