"""Shared state handed from the CLI group to its commands."""

from dataclasses import dataclass
from typing import Dict, Optional

import click

from wordgate.config.settings import WordgateConfig
from wordgate.core.providers import ServiceAdapter, build_adapters
from wordgate.core.resilience import SleepFunc
from wordgate.core.transport import Transport


@dataclass
class CliContext:
    """Configuration and collaborators for one CLI invocation.

    ``transport`` and ``sleep_func`` are None in normal use; tests supply
    fakes through ``CliRunner.invoke(..., obj=CliContext(...))``.
    """

    config: Optional[WordgateConfig] = None
    transport: Optional[Transport] = None
    sleep_func: Optional[SleepFunc] = None

    def build_adapters(self, transport: Optional[Transport] = None) -> Dict[str, ServiceAdapter]:
        assert self.config is not None
        return build_adapters(
            self.config,
            transport=transport or self.transport,
            sleep_func=self.sleep_func,
        )


def get_context(ctx: click.Context) -> CliContext:
    return ctx.ensure_object(CliContext)
