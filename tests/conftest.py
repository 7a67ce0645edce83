"""Pytest fixtures for qpw tests."""
import json

import pytest
from unittest.mock import AsyncMock, Mock

from qpw.core.session import MemorySession, SessionStore


@pytest.fixture
def store():
    """Session store with a token and region already set."""
    return SessionStore(MemorySession({
        'token': 'test-token',
        'region': 'mypurecloud.ie',
    }))


@pytest.fixture
def empty_store():
    """Session store with nothing set."""
    return SessionStore(MemorySession())


def make_response(status=200, body=None, reason='OK'):
    """
    Build an async context manager that yields a fake aiohttp response.

    body may be a dict/list (JSON encoded), a string, or None (empty).
    """
    if body is None:
        text = ''
    elif isinstance(body, str):
        text = body
    else:
        text = json.dumps(body)

    response = AsyncMock()
    response.status = status
    response.reason = reason
    response.text = AsyncMock(return_value=text)

    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=None)
    return ctx


@pytest.fixture
def response_factory():
    """Expose make_response to tests."""
    return make_response


@pytest.fixture
def http_session():
    """Fake aiohttp.ClientSession; set .request.side_effect or return_value."""
    session = Mock()
    session.closed = False
    session.close = AsyncMock()
    session.request = Mock(return_value=make_response(200, {}))
    return session


@pytest.fixture
def sample_users():
    """Users as returned by /api/v2/users."""
    return [
        {'id': 'u1', 'name': 'Ada Agent', 'username': 'ada@example.com'},
        {'id': 'u2', 'name': '', 'username': 'bob@example.com'},
        {'id': 'u3'},
    ]
