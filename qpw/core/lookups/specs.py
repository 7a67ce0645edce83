"""
Lookup resource table.

Each entry names a paged reference-data endpoint and how to label its
entities.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .models import LookupOption


@dataclass(frozen=True)
class LookupSpec:
    """
    One lookup resource.

    Attributes:
        name: Key of the resource in a LookupResult
        path: API path of the list endpoint
        page_size: Entities per page
        label_fields: Entity fields tried in order for the label; the
            entity id is always the last resort
        params: Extra query parameters (e.g. state=active)
    """
    name: str
    path: str
    page_size: int = 200
    label_fields: Tuple[str, ...] = ('name',)
    params: Mapping[str, Any] = field(default_factory=dict)

    def label_for(self, entity: Mapping[str, Any]) -> str:
        """Pick the label of an entity; never empty when it has an id."""
        for name in self.label_fields:
            value = entity.get(name)
            if value is not None and str(value).strip():
                return str(value)
        return str(entity.get('id') or '')

    def to_option(self, entity: Any) -> Optional[LookupOption]:
        """
        Normalize a raw entity.

        Returns:
            LookupOption, or None for entities without an id
        """
        if not isinstance(entity, Mapping):
            return None
        entity_id = entity.get('id')
        if entity_id is None or not str(entity_id):
            return None
        return LookupOption(id=str(entity_id), label=self.label_for(entity))

    def to_options(self, entities: Iterable[Any]) -> List[LookupOption]:
        """Normalize entities, dropping id-less ones and later duplicates."""
        seen = set()
        options = []
        for entity in entities:
            option = self.to_option(entity)
            if option is None or option.id in seen:
                continue
            seen.add(option.id)
            options.append(option)
        return options


LOOKUP_SPECS: Tuple[LookupSpec, ...] = (
    LookupSpec('users', '/api/v2/users', 100, ('name', 'username'), {'state': 'active'}),
    LookupSpec('queues', '/api/v2/routing/queues', 100),
    LookupSpec('skills', '/api/v2/routing/skills', 200),
    LookupSpec('languages', '/api/v2/routing/languages', 200, ('name', 'code')),
    LookupSpec('work_teams', '/api/v2/teams', 200),
    LookupSpec('wrap_ups', '/api/v2/routing/wrapupcodes', 200),
    LookupSpec('topics', '/api/v2/speechandtextanalytics/topics', 200),
    LookupSpec('categories', '/api/v2/speechandtextanalytics/categories', 200),
)

LOOKUP_NAMES: Tuple[str, ...] = tuple(spec.name for spec in LOOKUP_SPECS)


def get_spec(name: str, specs: Iterable[LookupSpec] = LOOKUP_SPECS) -> LookupSpec:
    """
    Find a lookup spec by name.

    Raises:
        KeyError: If no spec has that name
    """
    by_name: Dict[str, LookupSpec] = {spec.name: spec for spec in specs}
    try:
        return by_name[name]
    except KeyError:
        raise KeyError(f"Unknown lookup '{name}', expected one of {sorted(by_name)}") from None
