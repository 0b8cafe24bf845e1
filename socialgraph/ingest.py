#!/usr/bin/env python3
"""
ingest.py - Convert a raw social-graph dataset into a snapshot file.

Parses an edge list (or CSV / JSON variant), writes the resulting
``{"nodes": [...], "links": [...]}`` snapshot and logs dataset statistics.

Usage:
    python -m socialgraph.ingest data/raw/facebook_combined.txt
    python -m socialgraph.ingest edges.csv --format csv --output data/out/graph_data.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from socialgraph import parser
from socialgraph.degree import degree_distribution, top_nodes_by_degree
from socialgraph.models import GraphSnapshot
from socialgraph.snapshot import get_global_stats, save_snapshot
from socialgraph.utils.config import ConfigValidationError, load_config
from socialgraph.utils.console_encoding import setup_console_encoding
from socialgraph.utils.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_IO_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    log_exit,
)
from socialgraph.utils.validation import ParseError, ValidationError

SNAPSHOT_FILENAME = "graph_data.json"


def setup_logging(log_file: Path, level: str = "info") -> logging.Logger:
    """Set up logging configuration.

    Args:
        log_file: Path to log file
        level: Log level name from config

    Returns:
        Configured logger instance
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8"), logging.StreamHandler()],
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    return logger


def log_statistics(
    snapshot: GraphSnapshot, config: Dict[str, Any], logger: logging.Logger
) -> None:
    """Log the dataset summary: degrees, density, communities and top hubs."""
    graph_stats = get_global_stats(snapshot, config["stats"]["clustering_sample_cap"])
    report = snapshot.report

    logger.info("=== Dataset statistics ===")
    logger.info(f"  - Retained lines: {report.total_lines}")
    logger.info(f"  - Errors: {report.errors}")
    logger.info(f"  - Success rate: {report.success_rate:.2f}%")
    logger.info(f"  - Nodes: {graph_stats.total_nodes}")
    logger.info(f"  - Edges: {graph_stats.total_edges}")
    logger.info(f"  - Max degree: {graph_stats.max_degree}")
    logger.info(f"  - Min degree: {graph_stats.min_degree}")
    logger.info(f"  - Avg degree: {graph_stats.avg_degree:.2f}")
    logger.info(f"  - Density: {graph_stats.density:.6f}")
    logger.info(f"  - Connected components: {graph_stats.component_count}")

    estimate = " (estimate)" if graph_stats.clustering_is_estimate else ""
    logger.info(f"  - Avg clustering{estimate}: {graph_stats.avg_clustering:.4f}")
    logger.info(f"  - Distinct degree values: {len(degree_distribution(snapshot.nodes))}")

    communities = {
        group: community.count
        for group, community in graph_stats.community_distribution.items()
    }
    logger.info(f"  - Community distribution: {communities}")

    top_n = config["ingest"]["top_nodes"]
    if top_n:
        logger.info(f"Top {top_n} nodes by degree:")
        for rank, node in enumerate(top_nodes_by_degree(snapshot.nodes, top_n), start=1):
            logger.info(f"  {rank}. node {node.id} (degree: {node.degree})")


def run(
    input_file: Path,
    format_hint: str,
    output_file: Path,
    config: Dict[str, Any],
    logger: logging.Logger,
) -> GraphSnapshot:
    """Parse ``input_file``, save the snapshot and log its statistics."""
    if not input_file.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    logger.info(f"Reading {input_file} as {format_hint}")
    with open(input_file, "rb") as f:
        raw = f.read()

    snapshot = parser.parse(raw, format_hint, config["parser"]["comment_prefix"])
    save_snapshot(snapshot, output_file)
    log_statistics(snapshot, config, logger)
    return snapshot


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the ingest utility.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    setup_console_encoding()

    arg_parser = argparse.ArgumentParser(
        description="Convert a social-graph dataset into a snapshot file"
    )
    arg_parser.add_argument("input", type=Path, help="Dataset file to parse")
    arg_parser.add_argument(
        "--format",
        choices=parser.FORMATS,
        default=None,
        help="Input format (default: parser.default_format from config)",
    )
    arg_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Snapshot path (default: <ingest.output_dir>/{SNAPSHOT_FILENAME})",
    )
    arg_parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of top nodes by degree to log (default: ingest.top_nodes)",
    )
    arg_parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    arg_parser.add_argument(
        "--log-file", type=Path, default=Path("logs") / "ingest.log", help="Log file path"
    )
    args = arg_parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ConfigValidationError) as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger = setup_logging(args.log_file, config["ingest"]["log_level"])

    if args.top is not None:
        config["ingest"]["top_nodes"] = max(args.top, 0)

    format_hint = args.format or config["parser"]["default_format"]
    output_file = args.output or Path(config["ingest"]["output_dir"]) / SNAPSHOT_FILENAME

    try:
        logger.info("=== START ingest ===")
        snapshot = run(args.input, format_hint, output_file, config, logger)

        success_msg = (
            f"Snapshot written: {snapshot.node_count} nodes, {snapshot.edge_count} edges "
            f"-> {output_file}"
        )
        print(f"✓ {success_msg}")
        log_exit(logger, EXIT_SUCCESS, success_msg)
        return EXIT_SUCCESS

    except FileNotFoundError as e:
        error_msg = str(e)
        print(f"✗ Error: {error_msg}")
        log_exit(logger, EXIT_INPUT_ERROR, error_msg)
        return EXIT_INPUT_ERROR

    except (ParseError, ValidationError) as e:
        error_msg = f"Invalid input: {e}"
        print(f"✗ Error: {error_msg}")
        log_exit(logger, EXIT_INPUT_ERROR, error_msg)
        return EXIT_INPUT_ERROR

    except OSError as e:
        error_msg = f"I/O error: {e}"
        print(f"✗ Error: {error_msg}")
        log_exit(logger, EXIT_IO_ERROR, error_msg)
        return EXIT_IO_ERROR

    except Exception as e:
        error_msg = f"Unexpected error: {e}"
        print(f"✗ Error: {error_msg}")
        log_exit(logger, EXIT_RUNTIME_ERROR, error_msg)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
