"""
hiercluster - Main Entry Point

Loads a training and a test set, sweeps the cluster count downward and
prints the accuracy of the classifier built at each count.
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from hiercluster.clustering.sweep import SweepResult, best_result, sweep
from hiercluster.config import UNDEFINED_LABEL_POLICIES, HierClusterConfig
from hiercluster.errors import HierClusterError
from hiercluster.ingest.loader import DataLoader, LabeledDataset


def setup_logging(level: str = "INFO"):
    """Set up logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="hiercluster - agglomerative nearest-centroid classifier sweep"
    )
    parser.add_argument("train", help="Training CSV (coordinates then label per row)")
    parser.add_argument("test", help="Test CSV in the same format")
    parser.add_argument(
        "--min-clusters",
        type=int,
        help="Smallest cluster count to evaluate (default: 1)"
    )
    parser.add_argument(
        "--max-clusters",
        type=int,
        help="Largest cluster count to evaluate (default: training set size)"
    )
    parser.add_argument(
        "--policy",
        choices=UNDEFINED_LABEL_POLICIES,
        help="Handling of labels absent from the test set when averaging (default: exclude)"
    )
    parser.add_argument(
        "--delimiter",
        type=str,
        help="Column delimiter (default: ',')"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    parser.add_argument(
        "--show-data",
        action="store_true",
        help="Print both datasets before sweeping"
    )
    return parser


def _format_accuracy(value: Optional[float]) -> str:
    if value is None:
        return "undefined"
    if math.isnan(value):
        return "nan"
    return f"{value:.2%}"


def _print_dataset(console: Console, name: str, dataset: LabeledDataset) -> None:
    frame = dataset.to_frame()
    coordinates = [column for column in frame.columns if column != "label"]

    table = Table(title=f"{name} ({dataset.size:,} points)")
    table.add_column("Point", justify="right", style="cyan")
    for column in coordinates:
        table.add_column(column, justify="right")
    table.add_column("Label", justify="right", style="green")

    for i, row in frame.iterrows():
        table.add_row(
            str(i),
            *(f"{row[column]:.2f}" for column in coordinates),
            str(int(row["label"])),
        )
    console.print(table)


def _results_table(results: List[SweepResult]) -> Table:
    table = Table(title="Cluster count sweep")
    table.add_column("Clusters", justify="right", style="cyan")
    table.add_column("Accuracy", justify="right", style="green")
    table.add_column("Avg label accuracy", justify="right", style="yellow")
    table.add_column("New best", justify="center")

    for result in results:
        table.add_row(
            str(result.n_clusters),
            _format_accuracy(result.accuracy),
            _format_accuracy(result.report.average_label_accuracy),
            "*" if result.is_new_best else "",
        )
    return table


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    console = Console()

    # Create config
    try:
        config = HierClusterConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        return 1

    # Override with CLI args
    if args.min_clusters is not None:
        config.min_clusters = args.min_clusters
    if args.max_clusters is not None:
        config.max_clusters = args.max_clusters
    if args.policy:
        config.undefined_label_policy = args.policy
    if args.delimiter:
        config.delimiter = args.delimiter
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    console.print(Panel.fit(
        "[bold blue]hiercluster[/bold blue]\n"
        "Agglomerative nearest-centroid classifier",
        border_style="blue"
    ))

    loader = DataLoader(delimiter=config.delimiter)
    try:
        train = loader.load_csv(args.train)
        test_set = loader.load_csv(args.test)
    except (OSError, HierClusterError) as e:
        console.print(f"[red]Error loading data: {e}[/red]")
        return 1

    if args.show_data:
        _print_dataset(console, "Training set", train)
        _print_dataset(console, "Test set", test_set)

    results = []
    try:
        for result in sweep(
            train,
            test_set,
            start=config.max_clusters,
            stop=config.min_clusters,
            config=config,
        ):
            results.append(result)
            logger.info(
                f"{result.n_clusters} clusters: accuracy "
                f"{_format_accuracy(result.accuracy)}"
            )
    except (ValueError, HierClusterError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(_results_table(results))

    best = best_result(results)
    if best is not None:
        console.print(
            f"\n[bold]Best:[/bold] {best.n_clusters} clusters, "
            f"accuracy [green]{_format_accuracy(best.accuracy)}[/green]\n"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
