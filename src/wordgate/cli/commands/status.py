"""`wordgate status`: circuit breaker status per service."""

import click

from wordgate.cli.context import get_context
from wordgate.cli.output import emit_success


@click.command("status")
@click.pass_context
def status_cmd(ctx: click.Context) -> None:
    """Show circuit breaker state and counters for every service."""
    cli_ctx = get_context(ctx)
    adapters = cli_ctx.build_adapters()
    emit_success(
        {
            "services": {
                name: {
                    "configured": adapter.is_configured(),
                    "circuit": adapter.get_circuit_status().to_dict(),
                }
                for name, adapter in adapters.items()
            }
        }
    )
