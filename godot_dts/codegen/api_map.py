"""
API map: correspondence between engine identifiers and emitted identifiers.

Entries are produced per class by ``build_class_entry`` and merged into an
``ApiMap`` accumulator, which is serialized once at the end of a run.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils import collation_key
from .core.schema import ClassDescription


@dataclass
class ApiMapItem:
    """One source → emitted name pair."""

    snake: str
    camel: str
    private: Optional[bool] = None  # signals carry no visibility

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"snake": self.snake, "camel": self.camel}
        if self.private is not None:
            data["private"] = self.private
        return data


@dataclass
class ApiMapEntry:
    """Name correspondence of one class."""

    members: List[ApiMapItem] = field(default_factory=list)
    methods: List[ApiMapItem] = field(default_factory=list)
    signals: List[ApiMapItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "members": [item.to_dict() for item in self.members],
            "methods": [item.to_dict() for item in self.methods],
            "signals": [item.to_dict() for item in self.signals],
        }


def build_class_entry(description: ClassDescription) -> ApiMapEntry:
    """Build the API map entry of one resolved class."""
    return ApiMapEntry(
        members=[
            ApiMapItem(m.source_name, m.emitted_name, m.is_private)
            for m in description.members
        ],
        methods=[
            ApiMapItem(m.source_name, m.emitted_name, m.is_private)
            for m in description.methods
        ],
        signals=[ApiMapItem(s.source_name, s.emitted_name) for s in description.signals],
    )


class ApiMap:
    """Accumulates class entries across a run."""

    def __init__(self, version: str):
        self.version = version
        self._classes: Dict[str, ApiMapEntry] = {}

    def add(self, class_name: str, entry: ApiMapEntry) -> None:
        self._classes[class_name] = entry

    def add_class(self, description: ClassDescription) -> ApiMapEntry:
        entry = build_class_entry(description)
        self.add(description.name, entry)
        return entry

    def merge(self, other: "ApiMap") -> None:
        """Fold another accumulator (e.g. from a worker) into this one."""
        for class_name, entry in other._classes.items():
            self.add(class_name, entry)

    def class_names(self) -> List[str]:
        return sorted(self._classes, key=collation_key)

    def get(self, class_name: str) -> Optional[ApiMapEntry]:
        return self._classes.get(class_name)

    def __contains__(self, class_name: str) -> bool:
        return class_name in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form with classes in case-insensitive alphabetical order."""
        return {
            "version": self.version,
            "classes": {name: self._classes[name].to_dict() for name in self.class_names()},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"
