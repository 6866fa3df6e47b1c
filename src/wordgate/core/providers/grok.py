"""Grok adapter for creative word suggestions.

When Grok is unavailable, suggestions degrade to offline mock data (see
``fallbacks.mock_suggestions``) if the ``suggestions`` fallback is enabled.
"""

import logging
from typing import Any
from urllib.parse import quote

from wordgate.core.providers.base import ServiceAdapter
from wordgate.core.providers.fallbacks import mock_suggestions
from wordgate.core.providers.models import SuggestionRequest, SuggestionResponse
from wordgate.core.resilience import CallOutcome

logger = logging.getLogger(__name__)

SUGGESTIONS_ENDPOINT = "/api/suggestions"
WORD_INFO_ENDPOINT = "/api/wordinfo"
SUGGESTIONS_CAPABILITY = "suggestions"


class GrokAdapter(ServiceAdapter):
    """Adapter for the Grok suggestions API."""

    async def get_suggestions(
        self, request: SuggestionRequest
    ) -> CallOutcome[SuggestionResponse]:
        """Get creative suggestions related to ``request.word``."""
        payload = {
            "word": request.word,
            "count": request.count,
            "creativity": request.creativity,
            "include_synonyms": request.include_synonyms,
            "include_antonyms": request.include_antonyms,
            "include_related": request.include_related,
            "model": self.config.model,
        }
        outcome = self._parse(
            await self._post(SUGGESTIONS_ENDPOINT, payload), SuggestionResponse
        )
        if outcome.success and outcome.data is not None:
            logger.debug(
                "Grok returned %d suggestion(s) for %r",
                len(outcome.data.suggestions),
                request.word,
            )
        return self._with_fallback(
            outcome, SUGGESTIONS_CAPABILITY, lambda: mock_suggestions(request.word)
        )

    async def get_word_info(self, word: str) -> CallOutcome[Any]:
        """Get in-depth information about a single word."""
        return await self._get(f"{WORD_INFO_ENDPOINT}/{quote(word, safe='')}")
