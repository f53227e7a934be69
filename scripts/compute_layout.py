#!/usr/bin/env python3
"""Compute a layered layout for a graph snapshot file and print it as JSON.

Usage:
    python scripts/compute_layout.py snapshot.json
    python scripts/compute_layout.py snapshot.json --orientation LR -o layout.json

The snapshot is a JSON object with "nodes" and "connections" lists in the
format of the course/roadmap service (camelCase endpoint keys accepted).
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

from conceptmap.config import LayoutConfig, settings
from conceptmap.graph import GraphDataError, build_graph
from conceptmap.layout import layout
from conceptmap.models import ConceptNode, Connection

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> tuple[list[ConceptNode], list[Connection]]:
    """Read nodes and connections from a snapshot file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    nodes = [ConceptNode.from_dict(item) for item in data.get("nodes", [])]
    connections = [Connection.from_dict(item) for item in data.get("connections", [])]
    return nodes, connections


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Lay out a knowledge-graph snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/compute_layout.py roadmap.json                  # Top-to-bottom layout
    python scripts/compute_layout.py roadmap.json --orientation LR # Left-to-right layout
        """,
    )
    parser.add_argument("snapshot", type=Path, help="Snapshot JSON file")
    parser.add_argument(
        "--orientation",
        choices=["TB", "LR"],
        default=settings.layout_default_orientation,
        help="Flow direction (default: %(default)s)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the layout to this file instead of stdout",
    )
    args = parser.parse_args(argv)

    if not args.snapshot.exists():
        print(f"Error: Snapshot not found: {args.snapshot}", file=sys.stderr)
        return 1

    try:
        nodes, connections = load_snapshot(args.snapshot)
        graph = build_graph(nodes, connections)
    except (GraphDataError, ValueError, KeyError) as e:
        # JSONDecodeError and invalid field values are ValueErrors
        print(f"Error: graph failed to load: {e}", file=sys.stderr)
        return 2

    result = layout(graph, args.orientation, LayoutConfig.from_settings())
    logger.info(
        f"Laid out {len(result.nodes)} nodes and {len(result.edges)} edges "
        f"({result.width:.0f}x{result.height:.0f})"
    )

    output = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
