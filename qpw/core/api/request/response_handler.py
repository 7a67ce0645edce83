"""Response handler for API responses."""
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence


@dataclass
class PageResult:
    """One page of a list resource."""
    entities: List[Any] = field(default_factory=list)
    has_next: bool = False


class ResponseHandler:
    """Handles API responses."""

    # Servers are inconsistent about the list field name
    ENTITY_FIELDS: Sequence[str] = ('entities', 'items')
    NEXT_FIELD = 'nextUri'

    @staticmethod
    def parse_body(status: int, text: str) -> Any:
        """
        Parses a successful response body.

        204 and empty bodies yield None; anything else must be JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        if status == 204 or not text or not text.strip():
            return None
        return json.loads(text)

    @staticmethod
    def is_success(status: int) -> bool:
        """True for 2xx statuses."""
        return 200 <= status < 300

    @classmethod
    def to_page(cls, data: Any) -> PageResult:
        """
        Adapts a list response into a PageResult.

        Entities come from the first known list field that is present, so
        an empty 'entities' wins over 'items'. A value that is not a list
        counts as no entities. Only a non-empty continuation link means
        more pages.
        """
        if not isinstance(data, dict):
            return PageResult()

        entities: Optional[Any] = None
        for name in cls.ENTITY_FIELDS:
            entities = data.get(name)
            if entities is not None:
                break

        if not isinstance(entities, list):
            entities = []

        return PageResult(
            entities=list(entities),
            has_next=bool(data.get(cls.NEXT_FIELD))
        )


default_page_adapter = ResponseHandler.to_page
