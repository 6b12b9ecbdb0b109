"""Command-line entry point for the transit ranking engine.

Examples:
  python -m transit_rank dfs 0            Depth-first exploration from node 0
  python -m transit_rank bfs 0            Breadth-first exploration from node 0
  python -m transit_rank path 0 12        Shortest path from node 0 to node 12
  python -m transit_rank merge            Collapse transfer clusters
  python -m transit_rank rank             Rank stations and write pageRank.csv
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, configure_logging, get_config
from .container import Container
from .domain.errors import TransitRankError
from .services import NetworkAnalysisService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit_rank",
        description="Structural importance metrics over a transit network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n\n", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--data-dir", type=Path, help="Directory holding stops.csv and edges.csv")
    parser.add_argument("--output-dir", type=Path, help="Directory the rank report is written to")
    parser.add_argument("--log-level", help="Logging level (default from TRANSIT_LOG_LEVEL)")

    commands = parser.add_subparsers(dest="command", required=True)

    dfs_parser = commands.add_parser("dfs", help="Depth-first exploration")
    dfs_parser.add_argument("start", type=int)

    bfs_parser = commands.add_parser("bfs", help="Breadth-first exploration")
    bfs_parser.add_argument("start", type=int)

    path_parser = commands.add_parser("path", help="Shortest path between two nodes")
    path_parser.add_argument("start", type=int)
    path_parser.add_argument("end", type=int)

    commands.add_parser("merge", help="Collapse transfer clusters")

    rank_parser = commands.add_parser("rank", help="Rank stations")
    rank_parser.add_argument("--top", type=int, default=10, help="Number of stations to print")
    rank_parser.add_argument(
        "--no-merge",
        action="store_true",
        help="Rank the graph as loaded, without collapsing transfer clusters",
    )

    return parser


def _load_config(args: argparse.Namespace) -> AppConfig:
    config = get_config().model_copy(deep=True)
    if args.data_dir is not None:
        config.graph.data_dir = args.data_dir
    if args.output_dir is not None:
        config.report.output_dir = args.output_dir
    if args.log_level is not None:
        config.observability.level = args.log_level
    if getattr(args, "no_merge", False):
        config.rank.merge_transfers = False
    return config


def run(args: argparse.Namespace, service: NetworkAnalysisService) -> None:
    if args.command == "dfs":
        traverser = service.explore(args.start)
        print(f"Visited {len(traverser.visited_nodes)} stations: {traverser.visited_nodes}")

    elif args.command == "bfs":
        traverser = asyncio.run(service.breadth_first_async(args.start))
        print(f"Visited {traverser.last_summary['stations_visited']} stations")

    elif args.command == "path":
        result = service.shortest_path(args.start, args.end)
        if not result.is_reachable:
            print(f"No path between {args.start} and {args.end}.")
        else:
            path = " -> ".join(str(node) for node in result.nodes)
            print(f"Shortest path: {path}\nTotal length: {result.length}")

    elif args.command == "merge":
        graph = service.graph()
        merged = service.merged_graph()
        if merged is graph:
            print("Nothing to merge.")
        else:
            print(f"Merged {graph.num_nodes} stops into {merged.num_nodes}.")

    elif args.command == "rank":
        result = service.rank()
        for ranked in result.ranked[: args.top]:
            print(f"{ranked.position:>4}. {ranked.rank:<10} {ranked.stop.name} ({ranked.stop.routes_text})")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI support."""
    args = build_parser().parse_args(argv)
    config = _load_config(args)
    configure_logging(config.observability)

    service = Container.create_default(config).resolve(NetworkAnalysisService)
    try:
        run(args, service)
    except TransitRankError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
