"""
Unit tests for session management.

Tests SessionData, MemorySession, SQLiteSession and SessionStore.
"""
import pytest
import tempfile
from pathlib import Path

from qpw.core.exceptions import AuthenticationRequiredError
from qpw.core.session import (
    SessionStorage,
    SessionData,
    SessionStore,
    SQLiteSession,
    MemorySession
)


class TestSessionData:
    """Tests for SessionData model."""

    def test_defaults_are_absent(self):
        """Test a new snapshot has no token and no region."""
        data = SessionData()

        assert data.token is None
        assert data.region is None
        assert data.is_authenticated is False

    def test_is_authenticated_needs_both(self):
        """Test authentication requires token and region."""
        assert SessionData(token='t', region='r').is_authenticated is True
        assert SessionData(token='t').is_authenticated is False
        assert SessionData(region='r').is_authenticated is False
        assert SessionData(token='', region='r').is_authenticated is False

    def test_repr_hides_token(self):
        """Test the token never shows up in repr."""
        data = SessionData(token='secret-token', region='mypurecloud.ie')

        assert 'secret-token' not in repr(data)
        assert 'mypurecloud.ie' in repr(data)


class TestMemorySession:
    """Tests for MemorySession storage."""

    def test_implements_protocol(self):
        """Test that MemorySession implements SessionStorage."""
        assert isinstance(MemorySession(), SessionStorage)

    def test_set_and_get(self):
        """Test writing and reading a key."""
        storage = MemorySession()
        storage.set('region', 'mypurecloud.de')

        assert storage.get('region') == 'mypurecloud.de'
        assert storage.get('token') is None

    def test_exists(self):
        """Test exists check."""
        storage = MemorySession()
        assert storage.exists() is False

        storage.set('token', 'abc')
        assert storage.exists() is True

    def test_delete(self):
        """Test deleting keys, including absent ones."""
        storage = MemorySession({'token': 'abc'})

        storage.delete('token')
        storage.delete('missing')

        assert storage.get('token') is None
        assert storage.exists() is False

    def test_context_manager(self):
        """Test context manager usage."""
        with MemorySession() as storage:
            storage.set('token', 'abc')
            assert 'token' in storage


class TestSQLiteSession:
    """Tests for SQLiteSession storage."""

    @pytest.fixture
    def temp_session(self):
        """Create a temporary session file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = SQLiteSession("test_session", Path(tmpdir))
            yield storage
            storage.close()

    def test_implements_protocol(self, temp_session):
        """Test that SQLiteSession implements SessionStorage."""
        assert isinstance(temp_session, SessionStorage)

    def test_creates_session_file(self):
        """Test that session file is created."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = SQLiteSession("work", Path(tmpdir))

            assert (Path(tmpdir) / "work.session").exists()
            assert storage.path == Path(tmpdir) / "work.session"

            storage.close()

    def test_set_and_get(self, temp_session):
        """Test writing and reading keys."""
        temp_session.set('token', 'abc')
        temp_session.set('region', 'mypurecloud.ie')

        assert temp_session.get('token') == 'abc'
        assert temp_session.get('region') == 'mypurecloud.ie'
        assert temp_session.get('other') is None

    def test_overwrite(self, temp_session):
        """Test that set replaces the previous value."""
        temp_session.set('token', 'first')
        temp_session.set('token', 'second')

        assert temp_session.get('token') == 'second'

    def test_delete_and_exists(self, temp_session):
        """Test deleting keys."""
        assert temp_session.exists() is False

        temp_session.set('token', 'abc')
        assert temp_session.exists() is True

        temp_session.delete('token')
        assert temp_session.exists() is False
        assert temp_session.get('token') is None

    def test_persistence(self):
        """Test that data persists across instances."""
        with tempfile.TemporaryDirectory() as tmpdir:
            first = SQLiteSession("persistent", Path(tmpdir))
            first.set('token', 'persisted')
            first.set('region', 'mypurecloud.jp')
            first.close()

            second = SQLiteSession("persistent", Path(tmpdir))
            token = second.get('token')
            region = second.get('region')
            second.close()

            assert token == 'persisted'
            assert region == 'mypurecloud.jp'

    def test_delete_file(self):
        """Test deleting session file completely."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = SQLiteSession("gone", Path(tmpdir))
            storage.set('token', 'abc')
            path = storage.path

            storage.delete_file()

            assert not path.exists()

    def test_context_manager(self):
        """Test context manager usage."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with SQLiteSession("context_test", Path(tmpdir)) as storage:
                storage.set('region', 'usw2.pure.cloud')
                assert storage.exists() is True


class TestSessionStore:
    """Tests for SessionStore."""

    def test_restores_from_storage(self):
        """Test values already in storage are picked up."""
        store = SessionStore(MemorySession({'token': 'abc', 'region': 'mypurecloud.ie'}))

        assert store.get() == SessionData(token='abc', region='mypurecloud.ie')
        assert store.is_authenticated is True

    def test_starts_empty(self, empty_store):
        """Test a fresh store has nothing."""
        assert empty_store.get() == SessionData()
        assert empty_store.is_authenticated is False

    def test_set_token_writes_storage(self, empty_store):
        """Test mutations are mirrored into storage."""
        empty_store.set_token('abc')
        empty_store.set_region('mypurecloud.de')

        assert empty_store.storage.get('token') == 'abc'
        assert empty_store.storage.get('region') == 'mypurecloud.de'

    @pytest.mark.parametrize("absent", [None, ""])
    def test_absent_removes_key(self, store, absent):
        """Test None or empty string removes the key instead of writing ''."""
        store.set_token(absent)

        assert store.token is None
        assert store.storage.get('token') is None
        assert 'token' not in store.storage

    def test_clear(self, store):
        """Test clear forgets both fields."""
        store.clear()

        assert store.get() == SessionData()
        assert store.storage.exists() is False

    def test_require_returns_pair(self, store):
        """Test require returns token and region."""
        assert store.require() == ('test-token', 'mypurecloud.ie')

    def test_require_missing_token(self):
        """Test require fails without a token."""
        store = SessionStore(MemorySession({'region': 'x'}))

        with pytest.raises(AuthenticationRequiredError) as exc_info:
            store.require('GET /api/v2/users/me')

        assert exc_info.value.missing == 'token'
        assert 'GET /api/v2/users/me' in str(exc_info.value)

    def test_require_missing_region(self):
        """Test require fails without a region."""
        store = SessionStore(MemorySession({'token': 'abc'}))

        with pytest.raises(AuthenticationRequiredError) as exc_info:
            store.require()

        assert exc_info.value.missing == 'region'

    def test_persists_through_sqlite(self):
        """Test a store over SQLite survives a restart."""
        with tempfile.TemporaryDirectory() as tmpdir:
            first = SessionStore(SQLiteSession("profile", Path(tmpdir)))
            first.set_region('mypurecloud.ie')
            first.set_token('abc')
            first.storage.close()

            second = SessionStore(SQLiteSession("profile", Path(tmpdir)))
            snapshot = second.get()
            second.storage.close()

            assert snapshot.token == 'abc'
            assert snapshot.region == 'mypurecloud.ie'

    def test_repr_hides_token(self, store):
        """Test the store repr does not leak the token."""
        assert 'test-token' not in repr(store)
