"""
qpw - Async client for building contact-center quality search criteria.

Usage:
    >>> from qpw import QPWClient, Criteria
    >>>
    >>> async with QPWClient("work") as qpw:
    ...     await qpw.resume()
    ...     lookups = await qpw.load_lookups()
    ...     criteria = Criteria.default().replace(queues=lookups.ids('queues')[:1])
"""
import logging
from .client import QPWClient, UserProfile
from .criteria import Criteria

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    PaginationConfig,
    AsyncAPIClient,
    AsyncAuthService,
    PaginationWalker,
    AuthResult,
    LoginResult,
    StaticLocation,
    build_authorize_url,
    parse_redirect_fragment,
    ApiError,
    NetworkError,
)

# Session management
from .core.session import (
    SessionStorage,
    SessionData,
    SessionStore,
    SQLiteSession,
    MemorySession
)

from .core.lookups import LookupAggregator, LookupOption, LookupResult, LookupSpec, LOOKUP_SPECS
from .core.exceptions import (
    QPWException,
    AuthenticationRequiredError,
    PreconditionError,
    AuthFragmentInvalid,
    CriteriaValidationError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for qpw modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'qpw',
        'qpw.api',
        'qpw.auth',
        'qpw.client',
        'qpw.events',
        'qpw.lookups',
        'qpw.pagination',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'QPWClient',
    'UserProfile',
    'Criteria',
    'SessionStorage',
    'SessionData',
    'SessionStore',
    'SQLiteSession',
    'MemorySession',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'PaginationConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'PaginationWalker',
    'AuthResult',
    'LoginResult',
    'StaticLocation',
    'build_authorize_url',
    'parse_redirect_fragment',
    'LookupAggregator',
    'LookupOption',
    'LookupResult',
    'LookupSpec',
    'LOOKUP_SPECS',
    'QPWException',
    'AuthenticationRequiredError',
    'PreconditionError',
    'AuthFragmentInvalid',
    'CriteriaValidationError',
    'ApiError',
    'NetworkError',
    'setup_logging',
]
