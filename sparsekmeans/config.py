"""
Configuration for a clustering run.

Values come from a JSON file or a Java-style .properties file; command-line
flags may override them afterwards.
"""

import configparser
import json
import os
from dataclasses import dataclass, fields
from typing import Optional

# .properties key -> ClusteringConfig field
PROPERTY_KEYS = {
    'file.name': 'data_file',
    'clusters.count': 'clusters_count',
    'iterations.max': 'max_iterations',
    'metric.name': 'metric',
    'random.seed': 'random_seed',
    'file.delimiter': 'delimiter',
    'file.description_column': 'description_column',
    'verbose': 'verbose',
}


@dataclass
class ClusteringConfig:
    """Settings consumed by the clustering driver."""
    # Dataset
    data_file: str
    delimiter: str = ","
    description_column: Optional[str] = None

    # Algorithm
    clusters_count: int = 2
    max_iterations: int = 100
    metric: str = "euclidean"
    random_seed: Optional[int] = None

    # Output
    verbose: bool = False

    def __post_init__(self):
        """Coerce string values and validate ranges."""
        self.clusters_count = _as_int('clusters_count', self.clusters_count)
        self.max_iterations = _as_int('max_iterations', self.max_iterations)
        if self.random_seed is not None:
            self.random_seed = _as_int('random_seed', self.random_seed)
        if isinstance(self.verbose, str):
            self.verbose = self.verbose.strip().lower() in ('1', 'true', 'yes', 'on')

        if not self.data_file:
            raise ValueError("data_file is required")
        if self.clusters_count <= 1:
            raise ValueError(f"clusters_count must be greater than 1, got {self.clusters_count}")
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")


def _as_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _read_properties(path: str) -> dict:
    parser = configparser.ConfigParser(interpolation=None, delimiters=('=', ':'))
    parser.optionxform = str
    with open(path, encoding='utf-8') as f:
        parser.read_string("[properties]\n" + f.read())

    values = {}
    for key, value in parser['properties'].items():
        if key not in PROPERTY_KEYS:
            raise ValueError(f"Unknown configuration key: {key}")
        values[PROPERTY_KEYS[key]] = value
    return values


def _read_json(path: str) -> dict:
    with open(path, encoding='utf-8') as f:
        values = json.load(f)
    known = {f.name for f in fields(ClusteringConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
    return values


def load_config(path: str, **overrides) -> ClusteringConfig:
    """Load a ClusteringConfig from `path`.

    Files ending in .json are read as JSON objects keyed by field name, any
    other file as key=value properties. Keyword arguments that are not None
    replace the file's values.
    """
    if os.path.splitext(path)[1].lower() == '.json':
        values = _read_json(path)
    else:
        values = _read_properties(path)

    values.update({k: v for k, v in overrides.items() if v is not None})
    for required in ('data_file', 'clusters_count', 'max_iterations'):
        if required not in values:
            raise ValueError(f"{path}: missing required setting {required!r}")
    return ClusteringConfig(**values)
