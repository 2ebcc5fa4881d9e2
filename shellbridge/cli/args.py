"""Command line argument parsing."""

import argparse
from pathlib import Path

from shellbridge import __version__


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to YAML config file (default: $SHELLBRIDGE_CONFIG_PATH or shellbridge.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logs",
    )


def parse_server_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments for the MCP server.

    Returns:
        Parsed arguments namespace with:
        - config: Config file path (optional)
        - verbose: Whether to show debug logs
    """
    parser = argparse.ArgumentParser(
        prog="shellbridge",
        description="shellbridge - MCP tools for a remote terminal and knowledge store",
    )
    _add_common_arguments(parser)
    return parser.parse_args(argv)


def parse_watcher_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments for the transcript watcher.

    Returns:
        Parsed arguments namespace with:
        - config: Config file path (optional)
        - verbose: Whether to show debug logs
        - history_file: History file to tail instead of the configured one
        - interval: Checkpoint interval in minutes
    """
    parser = argparse.ArgumentParser(
        prog="shellbridge-watch",
        description="shellbridge-watch - checkpoint conversation text to the knowledge store",
        epilog="Pipe terminal output into stdin to watch it instead of the history file.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--history-file",
        type=Path,
        default=None,
        help="History file to tail (default: ~/.claude/history.jsonl)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Minutes between checkpoints (default: 30)",
    )
    return parser.parse_args(argv)
