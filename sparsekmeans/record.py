"""
Sparse feature vectors used by the clustering engine.

Both Records and Centroids wrap a mapping from attribute name to value.
Keys may differ from one vector to another.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple


class _SparseVector(object):
    """Read-only mapping of attribute name -> float value.

    Equality and hashing are by content, and only between vectors of the
    same concrete type, so a Record never equals a Centroid.
    """

    __slots__ = ("_values", "_hash")

    def __init__(self, values: Mapping[str, float]) -> None:
        if values is None:
            raise ValueError("Feature vector cannot be None")
        self._values = MappingProxyType({k: float(v) for k, v in values.items()})
        self._hash = None

    def _content(self) -> Tuple:
        return (frozenset(self._values.items()),)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._content() == other._content()

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((type(self).__name__,) + self._content())
        return self._hash

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __getitem__(self, key: str) -> float:
        return self._values[key]


class Record(_SparseVector):
    """A single observation: sparse features plus an optional description.

    Args:
        features: Attribute name -> value. Copied on construction.
        description: Free-text label, used by the report to name members.
    """

    __slots__ = ("_description",)

    def __init__(self, features: Mapping[str, float], description: str = "") -> None:
        super().__init__(features)
        self._description = description

    @property
    def features(self) -> Mapping[str, float]:
        return self._values

    @property
    def description(self) -> str:
        return self._description

    def _content(self) -> Tuple:
        return (self._description, frozenset(self._values.items()))

    def __repr__(self) -> str:
        prefix = self._description if self._description and self._description.strip() else "Record"
        return f"{prefix}: {dict(self._values)}"


class Centroid(_SparseVector):
    """Cluster representative. Identity is its coordinate map only."""

    __slots__ = ()

    @property
    def coordinates(self) -> Mapping[str, float]:
        return self._values

    def to_dict(self) -> Dict[str, float]:
        """Return a mutable copy of the coordinates."""
        return dict(self._values)

    def sorted_coordinates(self) -> List[Tuple[str, float]]:
        """Coordinates ordered by value, largest first."""
        return sorted(self._values.items(), key=lambda item: item[1], reverse=True)

    def __repr__(self) -> str:
        return f"Centroid({dict(self._values)})"
