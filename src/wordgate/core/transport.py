"""httpx-backed transport for outbound provider calls.

The transport performs exactly one physical HTTP request and returns a
TransportResponse for every status code. It never classifies or retries;
transport exceptions (timeouts, connection errors) propagate to the caller,
where ResilientClient normalizes them into the error taxonomy.

Example usage:
    async with HttpxTransport() as transport:
        response = await transport(
            TransportRequest(method="GET", url="https://api.grok.ai/api/wordinfo/word")
        )
"""

import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from wordgate.core.observability.redaction import redact_for_logging
from wordgate.core.resilience.models import TransportRequest, TransportResponse

logger = logging.getLogger(__name__)

Transport = Callable[[TransportRequest], Awaitable[TransportResponse]]
"""Signature of the consumed transport boundary."""


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text.

    Returns None for an empty body.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpxTransport:
    """Transport backed by a shared ``httpx.AsyncClient``.

    A client passed in is borrowed and left open on ``aclose()``; a client
    created here is owned and closed with the transport.

    Attributes:
        client: The underlying AsyncClient (created lazily when not injected)
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def __call__(self, request: TransportRequest) -> TransportResponse:
        """Send one request and return its response for any status code.

        Raises:
            httpx.TimeoutException: If the request exceeds ``request.timeout_ms``
            httpx.TransportError: On connection or protocol failures
        """
        logger.debug(
            "%s %s headers=%s body=%s",
            request.method.upper(),
            request.url,
            redact_for_logging(request.headers),
            redact_for_logging(request.json),
        )
        response = await self.client.request(
            request.method.upper(),
            request.url,
            headers=request.headers,
            json=request.json,
            params=request.params,
            timeout=httpx.Timeout(request.timeout_ms / 1000.0),
        )
        body = decode_body(response)
        logger.debug(
            "%s %s -> %d body=%s",
            request.method.upper(),
            request.url,
            response.status_code,
            redact_for_logging(body),
        )
        return TransportResponse(
            status=response.status_code,
            body=body,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
