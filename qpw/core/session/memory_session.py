"""
In-memory session storage implementation.

Provides non-persistent session storage for testing and temporary use.
"""
from typing import Dict, Optional

from .protocols import SessionStorage


class MemorySession(SessionStorage):
    """
    In-memory session storage.

    Stores session keys in a dict. Data is lost when the object is
    destroyed.

    Useful for:
    - Unit testing
    - One-shot scripts that should not leave a token on disk

    Example:
        >>> storage = MemorySession({'region': 'mypurecloud.ie'})
        >>> storage.get('region')
        'mypurecloud.ie'
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        """
        Initialize memory session storage.

        Args:
            initial: Optional starting entries
        """
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def exists(self) -> bool:
        return bool(self._data)

    def close(self) -> None:
        """Close storage (no-op for memory storage)."""
        pass

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __enter__(self) -> 'MemorySession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
