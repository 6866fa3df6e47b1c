"""Perplexity adapter for contextual language understanding."""

import logging
from typing import Any
from urllib.parse import quote

from wordgate.core.providers.base import ServiceAdapter
from wordgate.core.providers.models import LanguageRequest, LanguageResponse
from wordgate.core.resilience import CallOutcome

logger = logging.getLogger(__name__)

QUERY_ENDPOINT = "/api/query"
SOURCES_ENDPOINT = "/api/sources"
DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7


class PerplexityAdapter(ServiceAdapter):
    """Adapter for the Perplexity query API."""

    async def query(self, request: LanguageRequest) -> CallOutcome[LanguageResponse]:
        """Ask Perplexity a question, optionally with context items."""
        payload = {
            "query": request.query,
            "model": self.config.model,
            "max_tokens": request.max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": (
                request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
            ),
            "context_items": request.context_items,
        }
        outcome = self._parse(await self._post(QUERY_ENDPOINT, payload), LanguageResponse)
        if outcome.success and outcome.data is not None:
            logger.debug(
                "Perplexity answered %r with %d source(s), %d tokens",
                request.query[:30],
                len(outcome.data.sources),
                outcome.data.tokens.total,
            )
        return outcome

    async def get_sources(self, query_id: str) -> CallOutcome[Any]:
        """Fetch citation sources for a previous query."""
        return await self._get(f"{SOURCES_ENDPOINT}/{quote(query_id, safe='')}")
