"""
K-means clustering for sparse, attribute-named feature vectors.
"""

from .version import __version__
from .record import Record, Centroid
from .distance import DistanceMetric, EuclideanDistance, get_metric
from .kmeans import KMeans, ClusterAssignment, fit
from .loader import load_records, ParseError
from .config import ClusteringConfig, load_config
from .report import format_report

__all__ = [
    "Record", "Centroid", "DistanceMetric", "EuclideanDistance", "get_metric",
    "KMeans", "ClusterAssignment", "fit", "load_records", "ParseError",
    "ClusteringConfig", "load_config", "format_report", "__version__",
]
