"""Anthropic Claude adapter for linguistic analysis.

Calls the Messages API and maps its response into the canonical
LanguageResponse. ``analyze_language`` asks Claude for a JSON analysis and
parses it; a reply that is not a JSON object becomes an UNKNOWN_ERROR
outcome with ``details.reason == "parse_error"``.
"""

import json
import logging
from typing import Any, Dict, Optional

from wordgate.core.providers.base import ServiceAdapter
from wordgate.core.providers.models import (
    AnthropicMessage,
    LanguageRequest,
    LanguageResponse,
)
from wordgate.core.resilience import CallOutcome, ErrorKind, StandardError

logger = logging.getLogger(__name__)

MESSAGES_ENDPOINT = "/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.5
ANALYSIS_MAX_TOKENS = 2000
ANALYSIS_TEMPERATURE = 0.2

SYSTEM_PROMPT = (
    "You are Claude, a highly sophisticated AI language model specialized in "
    "providing detailed linguistic analysis, deep contextual understanding, and "
    "precise semantic exploration. Craft thorough, educational responses that "
    "help users understand language nuances."
)

ANALYSIS_PROMPT = """Analyze the provided word or phrase and provide detailed linguistic information including:
1. Etymology and historical context
2. Semantic analysis
3. Common collocations and usage patterns
4. Related concepts and semantic associations
5. Register and connotation information

Format your response as a single JSON object with the following keys:
- etymology
- semantics
- usage
- related
- register
"""


class AnthropicAdapter(ServiceAdapter):
    """Adapter for the Anthropic Messages API."""

    extra_headers = {"anthropic-version": ANTHROPIC_VERSION}

    def _auth_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.config.credential or ""}

    def _message_payload(
        self,
        text: str,
        *,
        system: str,
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [{"role": "user", "content": text}],
            "max_tokens": max_tokens,
            "temperature": temperature,
            "system": system,
        }

    async def _message(
        self,
        text: str,
        *,
        system: str,
        max_tokens: int,
        temperature: float,
    ) -> CallOutcome[AnthropicMessage]:
        payload = self._message_payload(
            text, system=system, max_tokens=max_tokens, temperature=temperature
        )
        return self._parse(await self._post(MESSAGES_ENDPOINT, payload), AnthropicMessage)

    async def query(self, request: LanguageRequest) -> CallOutcome[LanguageResponse]:
        """Send a free-text query to Claude."""
        outcome = await self._message(
            request.query,
            system=SYSTEM_PROMPT,
            max_tokens=request.max_tokens or DEFAULT_MAX_TOKENS,
            temperature=(
                request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
            ),
        )
        if not outcome.success or outcome.data is None:
            return outcome  # type: ignore[return-value]

        message = outcome.data
        return CallOutcome.ok(
            LanguageResponse(
                text=message.first_text(),
                model=message.model,
                tokens=message.usage.to_token_usage(),
            ),
            outcome.status,
        )

    async def analyze_language(self, text: str) -> CallOutcome[Dict[str, Any]]:
        """Produce a structured linguistic analysis of a word or phrase.

        Returns:
            The parsed analysis plus ``model`` and ``tokens`` keys on success
        """
        outcome = await self._message(
            text,
            system=ANALYSIS_PROMPT,
            max_tokens=ANALYSIS_MAX_TOKENS,
            temperature=ANALYSIS_TEMPERATURE,
        )
        if not outcome.success or outcome.data is None:
            return outcome  # type: ignore[return-value]

        message = outcome.data
        analysis = _parse_analysis(message.first_text() or "{}")
        if analysis is None:
            logger.warning("Claude analysis for %r was not a JSON object", text[:30])
            return CallOutcome.fail(
                StandardError(
                    kind=ErrorKind.UNKNOWN_ERROR,
                    message="Failed to parse Claude response as JSON",
                    retryable=False,
                    details={"service": self.name, "reason": "parse_error"},
                )
            )

        return CallOutcome.ok(
            {
                **analysis,
                "model": message.model,
                "tokens": message.usage.to_token_usage().model_dump(),
            },
            outcome.status,
        )


def _parse_analysis(raw: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
