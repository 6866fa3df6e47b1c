"""Shared fixtures for CLI command tests."""

from typing import Any, List

import pytest
from click.testing import CliRunner

from wordgate.cli.context import CliContext
from wordgate.config import WordgateConfig
from wordgate.core.resilience import TransportRequest, TransportResponse


class RecordingTransport:
    """Transport returning one canned response and recording requests."""

    def __init__(self, response: Any = None):
        self.response = response or TransportResponse(status=200, body={})
        self.requests: List[TransportRequest] = []

    async def __call__(self, request: TransportRequest) -> TransportResponse:
        self.requests.append(request)
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response


async def _no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def config():
    """Config with a Grok credential and nothing else configured."""
    config = WordgateConfig()
    config._service_settings("grok").credential = "xai-test-key"
    return config


@pytest.fixture
def cli_obj(config, transport):
    return CliContext(config=config, transport=transport, sleep_func=_no_sleep)
