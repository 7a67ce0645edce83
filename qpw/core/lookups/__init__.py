"""Reference-data lookups (agents, queues, skills, ...)."""
from .models import LookupOption, LookupResult
from .specs import LookupSpec, LOOKUP_SPECS, LOOKUP_NAMES, get_spec
from .aggregator import LookupAggregator

__all__ = [
    'LookupOption',
    'LookupResult',
    'LookupSpec',
    'LOOKUP_SPECS',
    'LOOKUP_NAMES',
    'get_spec',
    'LookupAggregator',
]
