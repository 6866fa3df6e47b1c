"""`wordgate config`: show the resolved configuration."""

import click

from wordgate.cli.context import get_context
from wordgate.cli.output import emit_success
from wordgate.config.services import validate_env


@click.command("config")
@click.pass_context
def config_cmd(ctx: click.Context) -> None:
    """Show the resolved service configuration.

    Credentials are never printed; each service reports whether one is set
    and which environment variables are still missing.
    """
    cli_ctx = get_context(ctx)
    config = cli_ctx.config
    assert config is not None

    report = validate_env()
    emit_success(
        {
            "config": config.to_dict(),
            "env": {"valid": report.valid, "missing": report.missing},
            "warnings": list(config.startup_warnings),
        }
    )
