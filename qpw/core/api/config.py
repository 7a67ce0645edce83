"""
API configuration module.

Provides configuration for the platform API client.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables checks)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    The client imposes no timeout of its own; these are the transport's.
    """
    total: float = 300.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 60.0  # Socket read timeout
    sock_connect: float = 30.0  # Socket connect timeout

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class PaginationConfig:
    """
    Pagination defaults for list resources.

    max_pages is a hard ceiling: a walk stops after that many pages even
    if the server keeps returning a continuation link.
    """
    page_size: int = 100
    max_pages: int = 50

    MIN_PAGE_SIZE = 1
    MAX_PAGE_SIZE = 200

    def __post_init__(self):
        if not self.MIN_PAGE_SIZE <= self.page_size <= self.MAX_PAGE_SIZE:
            raise ValueError(
                f"page_size must be between {self.MIN_PAGE_SIZE} and "
                f"{self.MAX_PAGE_SIZE}, got {self.page_size}"
            )
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {self.max_pages}")


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the platform API client.
    """
    # Host prefixes; the region is appended (api.<region>, login.<region>)
    api_host_prefix: str = 'api'
    login_host_prefix: str = 'login'
    scheme: str = 'https'

    user_agent: str = 'qpw/1.0.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Clear the session when the API answers 401/403
    invalidate_on_unauthorized: bool = True

    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def api_base(self, region: str) -> str:
        """Base URL of the REST API for a region."""
        return f"{self.scheme}://{self.api_host_prefix}.{region}"

    def login_base(self, region: str) -> str:
        """Base URL of the authorization server for a region."""
        return f"{self.scheme}://{self.login_host_prefix}.{region}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
