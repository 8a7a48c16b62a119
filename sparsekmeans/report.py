"""
Plain-text report of a finished clustering.
"""

from typing import List, Mapping, Sequence, Tuple

from .record import Centroid, Record

SEPARATOR = "------------------------------ CLUSTER -----------------------------------"


def sorted_coordinates(centroid: Centroid) -> List[Tuple[str, float]]:
    """Centroid coordinates, largest value first."""
    return centroid.sorted_coordinates()


def cluster_members(records: Sequence[Record]) -> List[str]:
    """Distinct record descriptions in first-seen order.

    Records sharing a description are listed once.
    """
    return list(dict.fromkeys(record.description for record in records))


def format_cluster(centroid: Centroid, records: Sequence[Record]) -> str:
    coords = ", ".join(f"{key}={value:.6g}" for key, value in sorted_coordinates(centroid))
    return "\n".join([
        SEPARATOR,
        f"Centroid({{{coords}}})",
        ", ".join(cluster_members(records)),
        "",
    ])


def format_report(clusters: Mapping[Centroid, Sequence[Record]]) -> str:
    """Render every cluster: separator, sorted centroid, member list."""
    return "\n".join(format_cluster(c, records) for c, records in clusters.items())


def print_report(clusters: Mapping[Centroid, Sequence[Record]]) -> None:
    print(format_report(clusters))
