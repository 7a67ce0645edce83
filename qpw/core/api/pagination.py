"""
Pagination walker.

Collects every entity of a paged list resource by following the
server's continuation link, one page at a time.
"""
from typing import Any, Callable, Dict, List, Optional, Protocol

from .config import PaginationConfig
from .request import PageResult, default_page_adapter
from .request.request_builder import QueryParams
from ..logging import get_logger

PageAdapter = Callable[[Any], PageResult]


class RequestClient(Protocol):
    """Anything that can perform one API request."""

    async def request(self, path: str, params: Optional[QueryParams] = None) -> Any:
        ...


class PaginationWalker:
    """
    Sequential page walker.

    Page N+1 is requested only after page N's result is known. The walk
    ends when a page carries no continuation link or after ``max_pages``
    pages, whichever comes first. Hitting the ceiling is not an error; the
    entities gathered so far are returned. A failed page aborts the whole
    walk and the error propagates unchanged.

    Example:
        >>> walker = PaginationWalker(client)
        >>> queues = await walker.walk('/api/v2/routing/queues', page_size=100)
    """

    def __init__(
        self,
        client: RequestClient,
        adapter: PageAdapter = default_page_adapter,
        defaults: Optional[PaginationConfig] = None
    ):
        """
        Initialize walker.

        Args:
            client: Client used for each page request
            adapter: Turns a raw response into a PageResult
            defaults: Default page size and page ceiling
        """
        self._client = client
        self._adapter = adapter
        self._defaults = defaults or PaginationConfig()
        self._logger = get_logger('qpw.pagination')

    async def walk(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None,
        start_page: Optional[int] = None
    ) -> List[Any]:
        """
        Fetch all pages of a list resource.

        Args:
            path: Resource path
            params: Base query parameters; 'pageNumber' and 'pageSize' in
                here are used as start page and page size when the explicit
                arguments are not given
            page_size: Entities per page (1..200)
            max_pages: Hard ceiling on the number of page requests
            start_page: First page number (default 1)

        Returns:
            Entities of all fetched pages, in order

        Raises:
            ValueError: If page_size, max_pages or start_page is out of range
        """
        base: Dict[str, Any] = dict(params or {})
        param_page = base.pop('pageNumber', None)
        param_size = base.pop('pageSize', None)

        if start_page is None:
            start_page = 1 if param_page is None else param_page
        if page_size is None:
            page_size = self._defaults.page_size if param_size is None else param_size
        page_number = int(start_page)
        size = int(page_size)
        ceiling = self._defaults.max_pages if max_pages is None else max_pages

        config = PaginationConfig(page_size=size, max_pages=ceiling)
        if page_number < 1:
            raise ValueError(f"start page must be at least 1, got {page_number}")

        entities: List[Any] = []
        for fetched in range(1, config.max_pages + 1):
            data = await self._client.request(
                path,
                {**base, 'pageNumber': page_number, 'pageSize': config.page_size}
            )
            page = self._adapter(data)
            entities.extend(page.entities)

            if not page.has_next:
                break

            if fetched == config.max_pages:
                self._logger.warning(
                    f"{path}: stopped after {fetched} pages with more pages reported"
                )
                break

            page_number += 1

        self._logger.debug(f"{path}: {len(entities)} entities")
        return entities
