"""
K-means clustering over sparse, attribute-named feature vectors.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
from sklearn.utils import check_random_state

from .distance import DistanceMetric, EuclideanDistance
from .record import Centroid, Record

# Centroid -> records assigned to it, in assignment order.
ClusterAssignment = Dict[Centroid, List[Record]]


class KMeans:
    """
    K-means clustering for records whose attribute sets may differ.

    Features:
    - Random initialization inside the observed [min, max] range of every attribute
    - Pluggable distance metric (intersection-only Euclidean by default)
    - Stops as soon as two consecutive assignments are exactly equal
    - Explicit random source for reproducible runs

    Convergence requires bit-identical centroid coordinates and member order,
    so most runs use the whole iteration budget.
    """

    def __init__(
        self,
        n_clusters: int,
        max_iters: int = 300,
        distance: Optional[DistanceMetric] = EuclideanDistance(),
        random_state=None,
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            n_clusters: Number of clusters, must be greater than 1
            max_iters: Maximum number of assignment passes, must be positive
            distance: Metric used to compare a record with a centroid
            random_state: None, an int seed, or a numpy RandomState to draw
                initial centroids from. A RandomState instance is shared,
                not copied. None uses a new OS-seeded RandomState per fit,
                leaving numpy's global generator untouched.
            verbose: Whether to print progress information
        """
        self.n_clusters = n_clusters
        self.max_iters = max_iters
        self.distance = distance
        self.random_state = random_state
        self.verbose = verbose

        # Results
        self.clusters_ = None
        self.cluster_centers_ = None
        self.inertia_ = None
        self.n_iter_ = None
        self.converged_ = None

    def _check_preconditions(self, records: Sequence[Record]) -> None:
        if records is None or len(records) == 0:
            raise ValueError("Dataset must not be empty")
        if self.n_clusters is None or self.n_clusters <= 1:
            raise ValueError(f"Number of clusters must be greater than 1, got {self.n_clusters}")
        if self.distance is None:
            raise ValueError("A distance metric is required")
        if self.max_iters is None or self.max_iters <= 0:
            raise ValueError(f"Maximum iterations must be positive, got {self.max_iters}")

    def _init_centroids(self, records: Sequence[Record], rng: np.random.RandomState) -> List[Centroid]:
        """Draw k centroids uniformly inside each attribute's observed range.

        An attribute missing from a record does not affect that attribute's
        range. Attributes keep the order in which they are first seen.
        """
        mins: Dict[str, float] = {}
        maxs: Dict[str, float] = {}
        for record in records:
            for key, value in record.features.items():
                if key not in mins or value < mins[key]:
                    mins[key] = value
                if key not in maxs or value > maxs[key]:
                    maxs[key] = value

        attributes = list(mins)
        low = np.array([mins[a] for a in attributes], dtype=np.float64)
        high = np.array([maxs[a] for a in attributes], dtype=np.float64)

        # One draw per (centroid, attribute), row by row.
        coords = rng.uniform(low, high, size=(self.n_clusters, len(attributes)))

        return [Centroid(dict(zip(attributes, row.tolist()))) for row in coords]

    def _nearest_centroid(self, record: Record, centroids: Sequence[Centroid]) -> Centroid:
        """Return the closest centroid; the first one wins on ties."""
        nearest = centroids[0]
        minimum = self.distance.calculate(record.features, nearest.coordinates)

        for centroid in centroids[1:]:
            current = self.distance.calculate(record.features, centroid.coordinates)
            if current < minimum:
                minimum = current
                nearest = centroid

        return nearest

    def _assign_clusters(self, records: Sequence[Record], centroids: Sequence[Centroid]) -> ClusterAssignment:
        """Assign every record to its nearest centroid."""
        clusters: ClusterAssignment = {}
        for record in records:
            centroid = self._nearest_centroid(record, centroids)
            clusters.setdefault(centroid, []).append(record)
        return clusters

    @staticmethod
    def _average(centroid: Centroid, records: Sequence[Record]) -> Centroid:
        """Move a centroid to the mean of its records.

        Attributes defined by at least one record become sum / len(records),
        so a record lacking the attribute counts as 0. Attributes only the
        old centroid had are not reset and are divided by len(records) too,
        which makes them decay toward zero over iterations.
        """
        if not records:
            return centroid

        average = centroid.to_dict()

        for record in records:
            for key in record.features:
                average[key] = 0.0

        for record in records:
            for key, value in record.features.items():
                average[key] += value

        n = len(records)
        return Centroid({key: value / n for key, value in average.items()})

    def _relocate_centroids(self, clusters: ClusterAssignment) -> List[Centroid]:
        """Build the next generation from the assigned centroids, in assignment order.

        A centroid that received no records is dropped, so the number of
        clusters never grows and may shrink.
        """
        return [self._average(c, members) for c, members in clusters.items()]

    def _calculate_inertia(self, clusters: ClusterAssignment) -> float:
        """Within-cluster sum of squared distances."""
        distances = [
            self.distance.calculate(record.features, centroid.coordinates)
            for centroid, members in clusters.items()
            for record in members
        ]
        return float(np.sum(np.square(distances)))

    def fit(self, records: Sequence[Record]) -> 'KMeans':
        """
        Fit K-means clustering to the records.

        Args:
            records: Dataset, never modified

        Returns:
            self
        """
        self._check_preconditions(records)
        # A fresh generator when none is given, never numpy's global one.
        if self.random_state is None:
            rng = np.random.RandomState()
        else:
            rng = check_random_state(self.random_state)

        if self.verbose:
            print(f"Fitting K-means with {self.n_clusters} clusters on {len(records)} records...")

        centroids = self._init_centroids(records, rng)
        last_state: ClusterAssignment = {}
        converged = False

        for iteration in range(self.max_iters):
            is_last_iteration = iteration == self.max_iters - 1

            clusters = self._assign_clusters(records, centroids)

            # Stop once the assignment no longer changes
            converged = clusters == last_state
            last_state = clusters
            if is_last_iteration or converged:
                break

            centroids = self._relocate_centroids(clusters)

            if self.verbose and (iteration + 1) % 50 == 0:
                print(f"Iteration {iteration + 1}, non-empty clusters: {len(clusters)}")

        if self.verbose:
            if converged:
                print(f"Converged after {iteration + 1} iterations")
            else:
                print(f"Stopped at iteration limit ({self.max_iters})")

        self.clusters_ = last_state
        self.cluster_centers_ = list(last_state)
        self.inertia_ = self._calculate_inertia(last_state)
        self.n_iter_ = iteration + 1
        self.converged_ = converged

        if self.verbose:
            print(f"Final inertia: {self.inertia_:.2f}")

        return self

    def fit_predict(self, records: Sequence[Record]) -> ClusterAssignment:
        """
        Fit the model and return the final cluster assignment.

        Args:
            records: Dataset

        Returns:
            Mapping of centroid -> assigned records
        """
        return self.fit(records).clusters_

    def predict(self, records: Sequence[Record]) -> List[Centroid]:
        """
        Find the nearest fitted centroid for each record.

        Args:
            records: Records to place, not necessarily seen during fit

        Returns:
            One centroid per record
        """
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted before prediction")

        return [self._nearest_centroid(record, self.cluster_centers_) for record in records]

    def get_cluster_info(self) -> dict:
        """Get information about the clustering results."""
        if self.clusters_ is None:
            raise ValueError("Model must be fitted first")

        cluster_sizes = np.array([len(members) for members in self.clusters_.values()])

        return {
            'n_clusters': self.n_clusters,
            'n_non_empty': len(self.clusters_),
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'converged': self.converged_,
            'cluster_sizes': {centroid: len(members) for centroid, members in self.clusters_.items()},
            'avg_cluster_size': float(np.mean(cluster_sizes)),
            'std_cluster_size': float(np.std(cluster_sizes)),
            'min_cluster_size': int(np.min(cluster_sizes)),
            'max_cluster_size': int(np.max(cluster_sizes))
        }


def fit(
    records: Sequence[Record],
    k: int,
    distance: Optional[DistanceMetric],
    max_iterations: int,
    random_state=None
) -> ClusterAssignment:
    """Cluster `records` into at most `k` groups and return the assignment."""
    return KMeans(
        n_clusters=k,
        max_iters=max_iterations,
        distance=distance,
        random_state=random_state,
    ).fit_predict(records)
