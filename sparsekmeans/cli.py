"""
Command-line driver: load a dataset, cluster it and print the clusters.

    sparse-kmeans --config config.properties
    sparse-kmeans data.csv -k 3 --max-iters 50 --seed 42
"""

import argparse
import sys
from typing import List, Optional

from .config import ClusteringConfig, load_config
from .distance import METRICS, get_metric
from .kmeans import KMeans
from .loader import load_records
from .report import print_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="K-means clustering of sparse delimited data")
    parser.add_argument("data_file", nargs="?", help="Delimited file with a header row")
    parser.add_argument("--config", help="JSON or .properties configuration file")
    parser.add_argument("-k", "--clusters", dest="clusters_count", type=int, help="Number of clusters")
    parser.add_argument("--max-iters", dest="max_iterations", type=int, help="Maximum iterations")
    parser.add_argument("--metric", choices=sorted(METRICS), help="Distance metric")
    parser.add_argument("--seed", dest="random_seed", type=int, help="Random seed for initialization")
    parser.add_argument("--delimiter", help="Cell separator")
    parser.add_argument("--description-column", dest="description_column",
                        help="Header column used to label records")
    parser.add_argument("--verbose", action="store_true", default=None, help="Print progress")
    return parser


def resolve_config(args: argparse.Namespace) -> ClusteringConfig:
    overrides = {
        key: getattr(args, key)
        for key in ("data_file", "clusters_count", "max_iterations", "metric",
                    "random_seed", "delimiter", "description_column", "verbose")
    }
    if args.config:
        return load_config(args.config, **overrides)
    if not args.data_file:
        raise ValueError("a data file or --config is required")
    return ClusteringConfig(**{k: v for k, v in overrides.items() if v is not None})


def run(config: ClusteringConfig) -> KMeans:
    records = load_records(config.data_file, config.delimiter, config.description_column)
    if config.verbose:
        print(f"Loaded {len(records)} records from {config.data_file}")

    model = KMeans(
        n_clusters=config.clusters_count,
        max_iters=config.max_iterations,
        distance=get_metric(config.metric),
        random_state=config.random_seed,
        verbose=config.verbose,
    )
    return model.fit(records)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
        model = run(config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_report(model.clusters_)
    return 0


if __name__ == "__main__":
    sys.exit(main())
