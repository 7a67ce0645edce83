"""
Session storage protocols.

Defines the key/value interface the session store persists through.
"""
from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class SessionStorage(Protocol):
    """
    Protocol for session storage implementations.

    A storage is a small string key/value map scoped to one profile,
    the way a browser tab's session storage is scoped to one tab.
    Implementations can use SQLite, memory, a keyring, or anything else.
    """

    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string, or None when the key is absent
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Storage key
            value: Non-empty string value
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        ...

    def exists(self) -> bool:
        """
        Check if any key is stored.

        Returns:
            True if the storage holds at least one entry
        """
        ...

    def close(self) -> None:
        """Close storage connection and release resources."""
        ...
