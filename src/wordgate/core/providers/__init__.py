"""Service adapters for external AI providers.

Every adapter routes its calls through the resilience layer and returns a
CallOutcome.

Supported providers:
- FluxImageAdapter: Image generation via Replicate Flux (fallback images)
- PerplexityAdapter: Contextual language understanding
- GrokAdapter: Creative word suggestions (offline mock fallback)
- AnthropicAdapter: Linguistic analysis via Claude
"""

from wordgate.core.providers.anthropic import AnthropicAdapter
from wordgate.core.providers.base import ServiceAdapter
from wordgate.core.providers.factory import ADAPTER_CLASSES, build_adapters
from wordgate.core.providers.fallbacks import mock_suggestions, pick_fallback_image
from wordgate.core.providers.flux import FluxImageAdapter, enhance_prompt
from wordgate.core.providers.grok import GrokAdapter
from wordgate.core.providers.models import (
    ImageGenerationRequest,
    ImageGenerationResponse,
    LanguageRequest,
    LanguageResponse,
    ProviderError,
    Source,
    SuggestionMetadata,
    SuggestionRequest,
    SuggestionResponse,
    TokenUsage,
    WordSuggestion,
)
from wordgate.core.providers.perplexity import PerplexityAdapter

__all__ = [
    # Base and factory
    "ServiceAdapter",
    "ADAPTER_CLASSES",
    "build_adapters",
    # Concrete adapters
    "FluxImageAdapter",
    "PerplexityAdapter",
    "GrokAdapter",
    "AnthropicAdapter",
    # Fallbacks
    "enhance_prompt",
    "mock_suggestions",
    "pick_fallback_image",
    # Payloads
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "LanguageRequest",
    "LanguageResponse",
    "ProviderError",
    "Source",
    "SuggestionMetadata",
    "SuggestionRequest",
    "SuggestionResponse",
    "TokenUsage",
    "WordSuggestion",
]
