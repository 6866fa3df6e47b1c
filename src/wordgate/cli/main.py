"""wordgate command-line entry point.

Usage:
    wordgate config
    wordgate status
    wordgate probe grok --path /api/wordinfo/serendipity
"""

from typing import Optional

import click

from wordgate import __version__
from wordgate.cli.commands import config_cmd, probe_cmd, status_cmd
from wordgate.cli.context import get_context
from wordgate.config.settings import WordgateConfig


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML config file (default: $WORDGATE_CONFIG_FILE, ./wordgate.toml, XDG config).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log to stderr at DEBUG level.")
@click.version_option(__version__, prog_name="wordgate")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], verbose: bool) -> None:
    """Inspect and probe wordgate's external service adapters."""
    cli_ctx = get_context(ctx)
    if cli_ctx.config is None:
        cli_ctx.config = WordgateConfig.from_env(config_file)
    if verbose:
        cli_ctx.config.log_level = "DEBUG"
        cli_ctx.config.setup_logging()


cli.add_command(config_cmd)
cli.add_command(status_cmd)
cli.add_command(probe_cmd)


if __name__ == "__main__":
    cli()
