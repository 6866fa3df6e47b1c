"""CLI commands."""

from wordgate.cli.commands.config import config_cmd
from wordgate.cli.commands.probe import probe_cmd
from wordgate.cli.commands.status import status_cmd

__all__ = [
    "config_cmd",
    "probe_cmd",
    "status_cmd",
]
