"""CLI utilities."""

from .args import parse_server_args, parse_watcher_args
from .display import display_watcher_banner

__all__ = [
    "parse_server_args",
    "parse_watcher_args",
    "display_watcher_banner",
]
