"""Tests for the high-level QPWClient."""
import logging

import pytest

from qpw import APIConfig, ApiError, MemorySession, QPWClient, SQLiteSession, UserProfile
from qpw.core.exceptions import AuthenticationRequiredError

REDIRECT = 'http://localhost:8080/app'
ME = {'id': 'u1', 'name': 'Ada Agent', 'email': 'ada@example.com', 'username': 'ada'}


@pytest.fixture
def qpw(http_session):
    """Client over an in-memory session and a fake HTTP session."""
    client = QPWClient(None)
    client.api._session = http_session
    return client


@pytest.fixture
def logged_in(http_session):
    client = QPWClient(MemorySession({'token': 'abc', 'region': 'mypurecloud.ie'}))
    client.api._session = http_session
    return client


class TestUserProfile:
    """Tests for UserProfile."""

    def test_from_api(self):
        profile = UserProfile.from_api(ME)

        assert profile.id == 'u1'
        assert str(profile) == 'Ada Agent <ada@example.com>'

    def test_name_fallback(self):
        assert UserProfile.from_api({'id': 'u9', 'username': 'bob'}).name == 'bob'
        assert str(UserProfile.from_api({'id': 'u9'})) == 'u9'


class TestSessionModes:
    """Tests for the session argument."""

    def test_none_is_memory(self):
        assert isinstance(QPWClient(None).session.storage, MemorySession)

    def test_name_is_sqlite(self, tmp_path):
        client = QPWClient('work', base_path=tmp_path)

        assert isinstance(client.session.storage, SQLiteSession)
        client.session.storage.close()

    def test_custom_storage(self):
        storage = MemorySession()

        assert QPWClient(storage).session.storage is storage

    def test_create_config(self):
        config = QPWClient.create_config(proxy='http://proxy:8080', page_size=50, max_pages=5)

        assert config.proxy.url == 'http://proxy:8080'
        assert config.pagination.page_size == 50
        assert config.pagination.max_pages == 5

    def test_repr_hides_token(self, logged_in):
        assert 'abc' not in repr(logged_in)


class TestLogin:
    """Tests for the login round trip."""

    @pytest.mark.asyncio
    async def test_complete_login(self, qpw, http_session, response_factory):
        """Test the redirect URL seeds the session and confirms identity."""
        http_session.request.return_value = response_factory(200, ME)
        qpw.authorize_url('client-1', 'mypurecloud.ie', REDIRECT)

        result = await qpw.complete_login(
            f"{REDIRECT}#access_token=abc&expires_in=3600&state=qpw|mypurecloud.ie"
        )

        assert result.confirmed is True
        assert qpw.is_logged_in is True
        assert qpw.session.token == 'abc'
        assert qpw.user.name == 'Ada Agent'
        url = http_session.request.call_args[0][1]
        assert url == 'https://api.mypurecloud.ie/api/v2/users/me'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected_identity_check_keeps_session(self, qpw, http_session, response_factory, status):
        """Test a 401/403 on /users/me right after login leaves the session set."""
        http_session.request.return_value = response_factory(status, '', 'Unauthorized')

        result = await qpw.complete_login(
            f"{REDIRECT}#access_token=abc&expires_in=3600&state=qpw|mypurecloud.ie"
        )

        assert result.confirmed is False
        assert qpw.session.token == 'abc'
        assert qpw.session.region == 'mypurecloud.ie'
        assert qpw.user is None

    @pytest.mark.asyncio
    async def test_invalidation_resumes_after_login(self, qpw, http_session, response_factory):
        """Test a later 401 still clears the session."""
        http_session.request.return_value = response_factory(401, '', 'Unauthorized')
        await qpw.complete_login(f"{REDIRECT}#access_token=abc&state=qpw|mypurecloud.ie")

        with pytest.raises(ApiError):
            await qpw.request('/api/v2/routing/queues')

        assert qpw.session.token is None

    @pytest.mark.asyncio
    async def test_state_from_other_region_rejected(self, qpw, http_session):
        """Test the state remembered by authorize_url is enforced."""
        qpw.authorize_url('client-1', 'mypurecloud.ie', REDIRECT)

        result = await qpw.complete_login(
            f"{REDIRECT}#access_token=abc&state=qpw|mypurecloud.de"
        )

        assert result is None
        assert qpw.session.token is None
        http_session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_fragment(self, qpw):
        assert await qpw.complete_login(REDIRECT) is None
        assert qpw.is_logged_in is False

    @pytest.mark.asyncio
    async def test_resume_without_session(self, qpw, http_session):
        assert await qpw.resume() is None
        http_session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_resume(self, logged_in, http_session, response_factory):
        http_session.request.return_value = response_factory(200, ME)

        profile = await logged_in.resume()

        assert profile.id == 'u1'
        assert logged_in.user is profile

    @pytest.mark.asyncio
    async def test_resume_with_rejected_token(self, logged_in, http_session, response_factory, caplog):
        """Test a rejected token logs a warning and invalidates the session."""
        http_session.request.return_value = response_factory(401, '', 'Unauthorized')

        with caplog.at_level(logging.WARNING, logger='qpw.client'):
            assert await logged_in.resume() is None

        assert logged_in.is_logged_in is False
        assert 'invalid' in caplog.text

    def test_logout(self, logged_in):
        logged_in.logout()

        assert logged_in.is_logged_in is False
        assert logged_in.session.region is None


class TestInvalidation:
    """401/403 responses clear the session."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_unauthorized_clears_session(self, logged_in, http_session, response_factory, status):
        http_session.request.return_value = response_factory(status, '', 'Unauthorized')

        with pytest.raises(ApiError):
            await logged_in.request('/api/v2/routing/queues')

        assert logged_in.session.token is None

        with pytest.raises(AuthenticationRequiredError):
            await logged_in.request('/api/v2/routing/queues')

    @pytest.mark.asyncio
    async def test_other_errors_keep_session(self, logged_in, http_session, response_factory):
        http_session.request.return_value = response_factory(500, '', 'Internal Server Error')

        with pytest.raises(ApiError):
            await logged_in.request('/api/v2/routing/queues')

        assert logged_in.session.token == 'abc'

    @pytest.mark.asyncio
    async def test_invalidation_can_be_disabled(self, http_session, response_factory):
        client = QPWClient(
            MemorySession({'token': 'abc', 'region': 'mypurecloud.ie'}),
            config=APIConfig(invalidate_on_unauthorized=False)
        )
        client.api._session = http_session
        http_session.request.return_value = response_factory(401, '', 'Unauthorized')

        with pytest.raises(ApiError):
            await client.request('/api/v2/users/me')

        assert client.session.token == 'abc'


class TestDataAccess:
    """Tests for paging and lookups through the client."""

    @pytest.mark.asyncio
    async def test_get_all_pages(self, logged_in, http_session, response_factory):
        http_session.request.side_effect = [
            response_factory(200, {'entities': [{'id': 1}], 'nextUri': '/next'}),
            response_factory(200, {'entities': [{'id': 2}]}),
        ]

        entities = await logged_in.get_all_pages('/api/v2/teams', page_size=10)

        assert entities == [{'id': 1}, {'id': 2}]
        last_url = http_session.request.call_args[0][1]
        assert last_url == 'https://api.mypurecloud.ie/api/v2/teams?pageNumber=2&pageSize=10'

    @pytest.mark.asyncio
    async def test_load_lookups(self, logged_in, http_session, response_factory):
        """Test all eight resources load through the HTTP layer."""
        def respond(method, url, **kwargs):
            return response_factory(200, {'entities': [{'id': 'x', 'name': url.split('?')[0]}]})

        http_session.request.side_effect = respond

        result = await logged_in.load_lookups()

        assert result.ok is True
        assert len(result.options) == 8
        assert result['users'][0].label == 'https://api.mypurecloud.ie/api/v2/users'
        assert http_session.request.call_count == 8

    @pytest.mark.asyncio
    async def test_load_lookups_without_session(self, qpw, http_session):
        """Test missing session empties every lookup without network calls."""
        result = await qpw.load_lookups()

        assert result.ok is False
        assert all(options == [] for options in result.options.values())
        assert all(isinstance(e, AuthenticationRequiredError) for e in result.errors.values())
        http_session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_load_lookup(self, logged_in, http_session, response_factory):
        http_session.request.return_value = response_factory(
            200, {'entities': [{'id': 'q1', 'name': 'Support'}]}
        )

        options = await logged_in.load_lookup('queues')

        assert [o.label for o in options] == ['Support']

    @pytest.mark.asyncio
    async def test_close(self, logged_in, http_session):
        await logged_in.close()

        http_session.close.assert_awaited_once()
