"""
Search criteria model.

A plain value describing the filters an operator picked. It is replaced
as a whole (``criteria.replace(...)``) and never reaches out to the API.

Advanced fields only count when their gate is on. Turning a gate off
does not clear the values behind it; use ``active_advanced()`` to read
what is actually in effect.
"""
from dataclasses import dataclass, field, fields, replace as dataclass_replace
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from .core.exceptions import CriteriaValidationError

MEDIA_TYPES = ('voice', 'chat', 'email', 'message')
DIRECTIONS = ('both', 'inbound', 'outbound')
SENTIMENT_RANGE = (-100, 100)

# Criteria list field -> lookup resource offering its ids
LOOKUP_FIELDS: Dict[str, str] = {
    'queues': 'queues',
    'users': 'users',
    'work_teams': 'work_teams',
    'wrap_up_codes': 'wrap_ups',
    'skills': 'skills',
    'languages': 'languages',
    'include_topics': 'topics',
    'exclude_topics': 'topics',
    'include_categories': 'categories',
    'exclude_categories': 'categories',
}

# Python attribute -> wire name
_WIRE_NAMES: Dict[str, str] = {
    'date_from': 'dateFrom',
    'date_to': 'dateTo',
    'media_type': 'mediaType',
    'direction': 'direction',
    'queues': 'queues',
    'users': 'users',
    'work_teams': 'workTeams',
    'wrap_up_codes': 'wrapUpCodes',
    'skills': 'skills',
    'languages': 'languages',
    'min_duration_sec': 'minDurationSec',
    'max_duration_sec': 'maxDurationSec',
    'use_advanced': 'useAdvanced',
    'use_sentiment': 'useSentiment',
    'sentiment_min': 'sentimentMin',
    'sentiment_max': 'sentimentMax',
    'use_topics': 'useTopics',
    'include_topics': 'includeTopics',
    'exclude_topics': 'excludeTopics',
    'use_categories': 'useCategories',
    'include_categories': 'includeCategories',
    'exclude_categories': 'excludeCategories',
}


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class Criteria:
    """
    Selected search filters.

    Attributes:
        date_from: First day of the range (UTC)
        date_to: Last day of the range (UTC)
        media_type: One of voice, chat, email, message
        direction: One of both, inbound, outbound
        queues, users, work_teams, wrap_up_codes, skills, languages:
            Ids picked from the matching lookups
        min_duration_sec, max_duration_sec: Optional duration bounds
        use_advanced: Gate for the whole advanced block
        use_sentiment, sentiment_min, sentiment_max: Sentiment bounds
        use_topics, include_topics, exclude_topics: Topic filters
        use_categories, include_categories, exclude_categories: Category filters
    """
    date_from: date
    date_to: date
    media_type: str = 'voice'
    direction: str = 'both'
    queues: Tuple[str, ...] = ()
    users: Tuple[str, ...] = ()
    work_teams: Tuple[str, ...] = ()
    wrap_up_codes: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    min_duration_sec: Optional[int] = None
    max_duration_sec: Optional[int] = None
    use_advanced: bool = False
    use_sentiment: bool = False
    sentiment_min: Optional[int] = None
    sentiment_max: Optional[int] = None
    use_topics: bool = False
    include_topics: Tuple[str, ...] = ()
    exclude_topics: Tuple[str, ...] = ()
    use_categories: bool = False
    include_categories: Tuple[str, ...] = ()
    exclude_categories: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept lists and ISO strings; store tuples and dates
        object.__setattr__(self, 'date_from', _as_date(self.date_from))
        object.__setattr__(self, 'date_to', _as_date(self.date_to))
        for name in LOOKUP_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @classmethod
    def default(cls, today: Optional[date] = None) -> 'Criteria':
        """Trailing 7 days ending today, voice, both directions, nothing picked."""
        today = today or _utc_today()
        return cls(date_from=today - timedelta(days=7), date_to=today)

    def replace(self, **changes: Any) -> 'Criteria':
        """Return a new Criteria with some fields changed."""
        return dataclass_replace(self, **changes)

    def validate(self) -> 'Criteria':
        """
        Check structural consistency.

        Gated fields are checked only while their gate is on.

        Returns:
            self, for chaining

        Raises:
            CriteriaValidationError: On the first problem found
        """
        if self.date_from > self.date_to:
            raise CriteriaValidationError('date_from', "must not be after date_to")
        if self.media_type not in MEDIA_TYPES:
            raise CriteriaValidationError('media_type', f"must be one of {', '.join(MEDIA_TYPES)}")
        if self.direction not in DIRECTIONS:
            raise CriteriaValidationError('direction', f"must be one of {', '.join(DIRECTIONS)}")

        for name in ('min_duration_sec', 'max_duration_sec'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise CriteriaValidationError(name, "must not be negative")
        if (self.min_duration_sec is not None and self.max_duration_sec is not None
                and self.min_duration_sec > self.max_duration_sec):
            raise CriteriaValidationError('min_duration_sec', "must not exceed max_duration_sec")

        if self.use_advanced and self.use_sentiment:
            low, high = SENTIMENT_RANGE
            for name in ('sentiment_min', 'sentiment_max'):
                value = getattr(self, name)
                if value is not None and not low <= value <= high:
                    raise CriteriaValidationError(name, f"must be between {low} and {high}")
            if (self.sentiment_min is not None and self.sentiment_max is not None
                    and self.sentiment_min > self.sentiment_max):
                raise CriteriaValidationError('sentiment_min', "must not exceed sentiment_max")

        return self

    def active_advanced(self) -> Dict[str, Any]:
        """
        Advanced values that are in effect.

        Returns:
            Only the groups whose gates (and use_advanced) are on
        """
        if not self.use_advanced:
            return {}
        active: Dict[str, Any] = {}
        if self.use_sentiment:
            active['sentiment_min'] = self.sentiment_min
            active['sentiment_max'] = self.sentiment_max
        if self.use_topics:
            active['include_topics'] = list(self.include_topics)
            active['exclude_topics'] = list(self.exclude_topics)
        if self.use_categories:
            active['include_categories'] = list(self.include_categories)
            active['exclude_categories'] = list(self.exclude_categories)
        return active

    def unknown_ids(self, lookups) -> Dict[str, List[str]]:
        """
        Ids not offered by the matching lookup.

        Args:
            lookups: LookupResult (anything with ``ids(name)``)

        Returns:
            Field name -> unknown ids, only for fields that have some
        """
        unknown: Dict[str, List[str]] = {}
        for name, lookup in LOOKUP_FIELDS.items():
            offered = set(lookups.ids(lookup))
            missing = [value for value in getattr(self, name) if value not in offered]
            if missing:
                unknown[name] = missing
        return unknown

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with wire names; dates as ISO strings, lists as lists."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, tuple):
                value = list(value)
            result[_WIRE_NAMES[f.name]] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Criteria':
        """
        Create from a wire dict.

        Unknown keys are ignored; missing keys take the defaults.
        """
        base = cls.default()
        values: Dict[str, Any] = {}
        for attr, wire in _WIRE_NAMES.items():
            if wire in data:
                values[attr] = data[wire]
            elif attr in data:
                values[attr] = data[attr]
        return base.replace(**values)
