"""
Session management module.

Keeps the bearer token and region, persisted per profile.
"""
from .protocols import SessionStorage
from .models import SessionData
from .sqlite_session import SQLiteSession
from .memory_session import MemorySession
from .store import SessionStore

__all__ = [
    'SessionStorage',
    'SessionData',
    'SQLiteSession',
    'MemorySession',
    'SessionStore',
]
