"""
Async authentication service.

Handles the OAuth2 implicit grant: building the authorize URL, reading the
access token back from the redirect fragment, and seeding the session.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from .async_client import AsyncAPIClient
from .config import APIConfig
from ..exceptions import AuthFragmentInvalid, QPWException
from ..logging import get_logger
from ..session import SessionStore

STATE_PREFIX = 'qpw'
STATE_SEPARATOR = '|'


@dataclass
class AuthResult:
    """Token response carried in the redirect fragment."""
    access_token: str
    token_type: str = ''
    expires_in: int = 0
    state: str = ''

    def __repr__(self) -> str:
        return (
            f"AuthResult(access_token='***', token_type={self.token_type!r}, "
            f"expires_in={self.expires_in!r}, state={self.state!r})"
        )


@dataclass
class LoginResult:
    """Outcome of a completed redirect: the token and, if confirmed, the user."""
    auth: AuthResult
    region: Optional[str]
    me: Optional[Dict[str, Any]] = None

    @property
    def confirmed(self) -> bool:
        """True when the identity check succeeded."""
        return self.me is not None


class RedirectLocation(Protocol):
    """Where the redirect fragment can be read from and erased."""

    def get_fragment(self) -> str:
        ...

    def clear_fragment(self) -> None:
        ...


class StaticLocation:
    """
    A redirect URL held in memory (e.g. pasted by the operator).

    clear_fragment() drops the fragment so the token cannot be read back.
    """

    def __init__(self, url: str):
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def get_fragment(self) -> str:
        return urlsplit(self._url).fragment

    def clear_fragment(self) -> None:
        parts = urlsplit(self._url)
        self._url = urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ''))

    def __repr__(self) -> str:
        parts = urlsplit(self._url)
        return f"StaticLocation({parts.scheme}://{parts.netloc}{parts.path})"


def make_state(region: str) -> str:
    """State value that round-trips the region: 'qpw|<region>'."""
    return f"{STATE_PREFIX}{STATE_SEPARATOR}{region}"


def region_from_state(state: Optional[str]) -> Optional[str]:
    """Extract the region from a 'qpw|<region>' state, None otherwise."""
    prefix = f"{STATE_PREFIX}{STATE_SEPARATOR}"
    if not state or not state.startswith(prefix):
        return None
    return state[len(prefix):].split(STATE_SEPARATOR, 1)[0] or None


def build_authorize_url(
    client_id: str,
    region: str,
    redirect_uri: str,
    state: Optional[str] = None,
    config: Optional[APIConfig] = None
) -> str:
    """
    Build the provider authorize URL for the implicit grant.

    Args:
        client_id: OAuth client id
        region: Region domain, e.g. 'mypurecloud.ie'
        redirect_uri: Where the provider sends the browser back
        state: Override for the state value (defaults to 'qpw|<region>')
        config: API configuration for the login host

    Returns:
        Authorize URL
    """
    config = config or APIConfig.default()
    query = urlencode([
        ('response_type', 'token'),
        ('client_id', client_id),
        ('redirect_uri', redirect_uri),
        ('state', state if state is not None else make_state(region)),
    ])
    return f"{config.login_base(region)}/oauth/authorize?{query}"


def parse_redirect_fragment(fragment: Optional[str]) -> Optional[AuthResult]:
    """
    Parse an implicit-grant redirect fragment.

    Args:
        fragment: Fragment with or without the leading '#'

    Returns:
        AuthResult, or None if the fragment is empty or has no access token

    Raises:
        AuthFragmentInvalid: If expires_in is present but not a number
    """
    if not fragment:
        return None
    if fragment.startswith('#'):
        fragment = fragment[1:]
    if not fragment:
        return None

    values = parse_qs(fragment, keep_blank_values=True)

    def first(name: str) -> str:
        return values.get(name, [''])[0]

    access_token = first('access_token')
    if not access_token:
        return None

    raw_expires = first('expires_in')
    try:
        expires_in = int(raw_expires) if raw_expires else 0
    except ValueError:
        raise AuthFragmentInvalid("expires_in is not a number", 'parse_redirect_fragment') from None

    return AuthResult(
        access_token=access_token,
        token_type=first('token_type'),
        expires_in=expires_in,
        state=first('state')
    )


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Seeds the session store from a redirect and confirms the identity.
    """

    def __init__(self, client: AsyncAPIClient, store: Optional[SessionStore] = None):
        """
        Initialize auth service.

        Args:
            client: Async API client used for the identity check
            store: Session store to seed (defaults to the client's)
        """
        self._client = client
        self._store = store or client.store
        self._logger = get_logger('qpw.auth')

    def authorize_url(self, client_id: str, region: str, redirect_uri: str) -> str:
        """
        Remember the region and build the authorize URL.

        The region is persisted first so it is known even if the provider
        strips the state on the way back.
        """
        client_id = client_id.strip()
        if not client_id:
            raise ValueError("client_id is required")
        if not region:
            raise ValueError("region is required")
        self._store.set_region(region)
        return build_authorize_url(client_id, region, redirect_uri, config=self._client.config)

    async def complete(
        self,
        location: RedirectLocation,
        expected_state: Optional[str] = None
    ) -> Optional[LoginResult]:
        """
        Consume a redirect fragment, if it is a login response.

        Args:
            location: Location holding the fragment
            expected_state: If given, the state the fragment must carry

        Returns:
            LoginResult, or None when no login occurred
        """
        fragment = location.get_fragment()
        if not fragment:
            return None

        try:
            auth = parse_redirect_fragment(fragment)
            if auth is not None and expected_state is not None and auth.state != expected_state:
                raise AuthFragmentInvalid("state does not match", 'complete_login')
        except AuthFragmentInvalid as e:
            self._logger.warning(f"Ignoring redirect fragment: {e}")
            location.clear_fragment()
            return None

        if auth is None:
            self._logger.debug("Fragment is not a login response")
            return None

        region = region_from_state(auth.state)
        if region:
            self._store.set_region(region)
        self._store.set_token(auth.access_token)
        location.clear_fragment()
        self._logger.info(f"Token received for region {self._store.region}")

        me = await self.confirm_identity()
        return LoginResult(auth=auth, region=self._store.region, me=me)

    async def confirm_identity(self) -> Optional[Dict[str, Any]]:
        """
        Probe the token with /users/me.

        Returns:
            The user profile, or None if the probe failed (logged)
        """
        try:
            return await self._client.get_me()
        except QPWException as e:
            self._logger.warning(f"Could not fetch /users/me after login: {e}")
            return None

    def logout(self) -> None:
        """Forget the token and region."""
        self._store.clear()
        self._logger.info("Logged out")
