"""
Data models for lookups.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class LookupOption:
    """A selectable reference-data entry."""
    id: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'label': self.label}


@dataclass
class LookupResult:
    """
    Options for every lookup resource, plus the failures of the last load.

    After a failed load all option lists are empty and ``errors`` maps
    each failed resource name to its exception.
    """
    options: Dict[str, List[LookupOption]] = field(default_factory=dict)
    errors: Dict[str, BaseException] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def empty(
        cls,
        names: Sequence[str],
        errors: Optional[Dict[str, BaseException]] = None
    ) -> 'LookupResult':
        """Every list empty."""
        return cls(options={name: [] for name in names}, errors=dict(errors or {}))

    def __getitem__(self, name: str) -> List[LookupOption]:
        return self.options[name]

    def __contains__(self, name: str) -> bool:
        return name in self.options

    def ids(self, name: str) -> List[str]:
        """Ids offered for a resource."""
        return [option.id for option in self.options.get(name, [])]

    def label_for(self, name: str, option_id: str) -> str:
        """Label of an id, or the id itself when it is not offered."""
        for option in self.options.get(name, []):
            if option.id == option_id:
                return option.label
        return option_id

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            name: [option.to_dict() for option in options]
            for name, options in self.options.items()
        }
