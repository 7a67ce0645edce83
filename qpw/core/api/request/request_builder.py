"""Request builder for API requests."""
from urllib.parse import urlencode
from typing import Any, Dict, List, Mapping, Optional, Tuple

QueryParams = Mapping[str, Any]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def encode_query(params: Optional[QueryParams] = None) -> str:
    """
    Encode query parameters.

    List and tuple values repeat the key once per element, in order.
    None values (and None list elements) are skipped.

    Args:
        params: Mapping of parameter name to scalar or sequence

    Returns:
        Encoded query string without the leading '?'
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _stringify(item)) for item in value if item is not None)
        else:
            pairs.append((key, _stringify(value)))
    return urlencode(pairs)


class RequestBuilder:
    """Builds URLs and headers for platform API requests."""

    AUTH_HEADER = 'Authorization'

    def __init__(self, base_url: str, token: str):
        """
        Initializes request builder.

        Args:
            base_url: API base, e.g. 'https://api.mypurecloud.ie'
            token: Bearer token
        """
        self.base_url = base_url.rstrip('/')
        self.token = token

    def build_url(self, path: str, params: Optional[QueryParams] = None) -> str:
        """Builds the full request URL."""
        if not path.startswith('/'):
            path = f"/{path}"
        query = encode_query(params)
        if not query:
            return f"{self.base_url}{path}"
        separator = '&' if '?' in path else '?'
        return f"{self.base_url}{path}{separator}{query}"

    def build_headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Builds request headers.

        Caller headers override the defaults, but an empty or missing
        Authorization value never replaces the bearer header.
        """
        headers = {
            self.AUTH_HEADER: f"Bearer {self.token}",
            'Content-Type': 'application/json',
        }
        for name, value in (extra or {}).items():
            if name.lower() == self.AUTH_HEADER.lower():
                if value:
                    headers[self.AUTH_HEADER] = value
                continue
            headers[name] = value
        return headers
