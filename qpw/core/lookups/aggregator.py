"""
Lookup aggregator.

Runs one pagination walk per lookup resource concurrently and commits the
results only when every walk succeeded.
"""
import asyncio
from typing import Dict, List, Optional, Sequence

from .models import LookupOption, LookupResult
from .specs import LOOKUP_SPECS, LookupSpec, get_spec
from ..api.pagination import PaginationWalker
from ..logging import get_logger


class LookupAggregator:
    """
    Concurrent loader for the lookup resources.

    Walks overlap with each other; each walk is sequential. If any walk
    fails the whole set resets to empty lists, so callers never see some
    resources populated and others missing.

    Example:
        >>> aggregator = LookupAggregator(PaginationWalker(client))
        >>> result = await aggregator.load_all()
        >>> if not result.ok:
        ...     print(result.errors)
    """

    def __init__(
        self,
        walker: PaginationWalker,
        specs: Sequence[LookupSpec] = LOOKUP_SPECS,
        max_pages: Optional[int] = None
    ):
        """
        Initialize aggregator.

        Args:
            walker: Pagination walker used for every resource
            specs: Lookup table
            max_pages: Page ceiling per resource (walker default if None)
        """
        self._walker = walker
        self._specs = tuple(specs)
        self._max_pages = max_pages
        self._logger = get_logger('qpw.lookups')

    @property
    def names(self) -> List[str]:
        return [spec.name for spec in self._specs]

    async def load(self, spec: LookupSpec) -> List[LookupOption]:
        """
        Load one resource.

        Errors propagate to the caller.
        """
        entities = await self._walker.walk(
            spec.path,
            dict(spec.params),
            page_size=spec.page_size,
            max_pages=self._max_pages
        )
        options = spec.to_options(entities)
        self._logger.debug(f"{spec.name}: {len(options)} options")
        return options

    async def load_one(self, name: str) -> List[LookupOption]:
        """Load one resource by name."""
        return await self.load(get_spec(name, self._specs))

    async def load_all(self) -> LookupResult:
        """
        Load every resource concurrently.

        Returns:
            LookupResult with all options, or all lists empty and the
            failures recorded when any resource failed
        """
        outcomes = await asyncio.gather(
            *(self.load(spec) for spec in self._specs),
            return_exceptions=True
        )

        options: Dict[str, List[LookupOption]] = {}
        errors: Dict[str, BaseException] = {}
        for spec, outcome in zip(self._specs, outcomes):
            if isinstance(outcome, BaseException):
                errors[spec.name] = outcome
            else:
                options[spec.name] = outcome

        if errors:
            for name, error in errors.items():
                self._logger.warning(f"Lookup load failed for {name}: {error}")
            return LookupResult.empty(self.names, errors)

        return LookupResult(options=options)
