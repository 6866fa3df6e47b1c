"""`wordgate probe`: run one logical call against a service."""

import asyncio
from typing import Any, Optional

import click

from wordgate.cli.context import CliContext, get_context
from wordgate.cli.output import emit_failure, emit_success
from wordgate.config.services import SERVICE_DEFINITIONS
from wordgate.core.errors import error_to_response
from wordgate.core.resilience import CallOutcome, CircuitStatus
from wordgate.core.transport import HttpxTransport


async def _run_probe(
    cli_ctx: CliContext,
    service: str,
    method: str,
    path: str,
    retries: Optional[int],
) -> tuple[CallOutcome[Any], CircuitStatus]:
    transport = cli_ctx.transport or HttpxTransport()
    try:
        adapter = cli_ctx.build_adapters(transport)[service]
        outcome = await adapter.request(method, path, retries=retries)
        return outcome, adapter.get_circuit_status()
    finally:
        if isinstance(transport, HttpxTransport) and cli_ctx.transport is None:
            await transport.aclose()


@click.command("probe")
@click.argument("service", type=click.Choice(sorted(SERVICE_DEFINITIONS)))
@click.option("--path", default="/", show_default=True, help="Path relative to the service base URL.")
@click.option(
    "--method",
    type=click.Choice(["GET", "POST"], case_sensitive=False),
    default="GET",
    show_default=True,
)
@click.option(
    "--retries",
    type=click.IntRange(min=0),
    default=None,
    help="Retries after the first attempt (default: the service's retry policy).",
)
@click.pass_context
def probe_cmd(
    ctx: click.Context,
    service: str,
    path: str,
    method: str,
    retries: Optional[int],
) -> None:
    """Send one request to SERVICE through its circuit breaker and retry policy.

    Prints the outcome and the breaker status. Exits with status 1 when the
    call fails.
    """
    cli_ctx = get_context(ctx)
    outcome, status = asyncio.run(
        _run_probe(cli_ctx, service, method.upper(), path, retries)
    )

    if outcome.success:
        emit_success(
            {
                "service": service,
                "outcome": outcome.to_dict(),
                "circuit": status.to_dict(),
            }
        )
        return

    assert outcome.error is not None
    envelope = error_to_response(outcome.error)
    assert envelope is not None
    envelope["data"]["service"] = service
    envelope["data"]["circuit"] = status.to_dict()
    emit_failure(envelope)
