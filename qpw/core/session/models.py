"""
Session data models.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class SessionData:
    """
    Snapshot of the current bearer-token session.

    Attributes:
        token: OAuth access token, None when logged out
        region: Deployment domain suffix (e.g. 'mypurecloud.ie')
    """
    token: Optional[str] = field(default=None, repr=False)
    region: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        """True when both token and region are present and non-empty."""
        return bool(self.token and self.region)

    def __repr__(self) -> str:
        token = '***' if self.token else None
        return f"SessionData(token={token!r}, region={self.region!r})"
