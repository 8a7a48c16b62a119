"""
Distance metrics between sparse feature vectors.

A smaller distance means two vectors are more similar.
"""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Type

import numpy as np


class DistanceMetric(ABC):
    """Contract for computing a non-negative dissimilarity between two
    feature vectors (attribute name -> value mappings)."""

    name = None

    @abstractmethod
    def calculate(self, a: Mapping[str, float], b: Mapping[str, float]) -> float:
        """Return the distance between `a` and `b`.

        Raises:
            ValueError: If either vector is None.
        """

    def __call__(self, a: Mapping[str, float], b: Mapping[str, float]) -> float:
        return self.calculate(a, b)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EuclideanDistance(DistanceMetric):
    """Euclidean distance over the attributes present in BOTH vectors.

    Attributes defined on only one side are left out of the sum rather
    than treated as zero, so vectors with disjoint keys are at distance 0.
    """

    name = "euclidean"

    def calculate(self, a: Mapping[str, float], b: Mapping[str, float]) -> float:
        if a is None or b is None:
            raise ValueError("Feature vectors cannot be None")

        # Sorted so that calculate(a, b) and calculate(b, a) add the same
        # terms in the same order.
        shared = sorted(k for k in a if k in b)
        if not shared:
            return 0.0

        diff = np.fromiter((a[k] - b[k] for k in shared), dtype=np.float64, count=len(shared))
        return float(np.sqrt(np.dot(diff, diff)))


METRICS: Dict[str, Type[DistanceMetric]] = {
    EuclideanDistance.name: EuclideanDistance,
}


def get_metric(name: str) -> DistanceMetric:
    """Instantiate a registered metric by name (case-insensitive)."""
    try:
        return METRICS[name.lower()]()
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown distance metric: {name!r}. Available: {sorted(METRICS)}"
        ) from None
