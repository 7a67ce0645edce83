"""Tests for API configuration."""
import aiohttp
import pytest

from qpw.core.api import APIConfig, PaginationConfig, ProxyConfig, SSLConfig, TimeoutConfig


class TestProxyConfig:
    """Test suite for ProxyConfig."""

    def test_no_url(self):
        assert ProxyConfig().to_aiohttp_proxy() is None

    def test_plain_url(self):
        assert ProxyConfig(url='http://proxy:8080').to_aiohttp_proxy() == 'http://proxy:8080'

    def test_credentials_embedded(self):
        proxy = ProxyConfig(url='http://proxy:8080', username='u', password='p')

        assert proxy.to_aiohttp_proxy() == 'http://u:p@proxy:8080'


class TestPaginationConfig:
    """Test suite for PaginationConfig."""

    def test_defaults(self):
        config = PaginationConfig()

        assert config.page_size == 100
        assert config.max_pages == 50

    @pytest.mark.parametrize("kwargs", [
        {'page_size': 0},
        {'page_size': 201},
        {'max_pages': 0},
    ])
    def test_rejects_out_of_range(self, kwargs):
        with pytest.raises(ValueError):
            PaginationConfig(**kwargs)

    def test_bounds_accepted(self):
        assert PaginationConfig(page_size=1, max_pages=1).page_size == 1
        assert PaginationConfig(page_size=200).page_size == 200


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_region_bases(self):
        config = APIConfig.default()

        assert config.api_base('mypurecloud.ie') == 'https://api.mypurecloud.ie'
        assert config.login_base('mypurecloud.ie') == 'https://login.mypurecloud.ie'

    def test_with_proxy(self):
        config = APIConfig.with_proxy('http://proxy:3128', user_agent='custom')

        assert config.proxy.url == 'http://proxy:3128'
        assert config.user_agent == 'custom'

    def test_insecure(self):
        config = APIConfig.insecure()

        assert config.ssl.verify is False
        assert config.get_connector_kwargs()['ssl'] is False

    def test_connector_kwargs(self):
        kwargs = APIConfig(limit=5, limit_per_host=2).get_connector_kwargs()

        assert kwargs['limit'] == 5
        assert kwargs['limit_per_host'] == 2

    def test_session_kwargs(self):
        config = APIConfig(extra_headers={'X-Team': 'qa'}, timeout=TimeoutConfig(total=12))

        kwargs = config.get_session_kwargs()

        assert kwargs['headers'] == {'User-Agent': 'qpw/1.0.0', 'X-Team': 'qa'}
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)
        assert kwargs['timeout'].total == 12

    def test_ssl_context_when_verifying(self):
        context = SSLConfig().create_ssl_context()

        assert context.check_hostname is True
