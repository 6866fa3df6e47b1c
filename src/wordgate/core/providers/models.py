"""Request and response payloads for provider adapters.

Provider JSON is validated into these models at the adapter boundary;
a payload that does not validate becomes an UNKNOWN_ERROR outcome rather
than an exception.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ImageStyle = Literal["realistic", "artistic", "minimalist", "educational"]


class ProviderError(BaseModel):
    """Error note embedded in a (possibly degraded) payload."""

    code: str
    message: str
    details: Optional[Any] = None


# ---------------------------------------------------------------------------
# Image generation
# ---------------------------------------------------------------------------


class ImageGenerationRequest(BaseModel):
    """Request for one generated image."""

    prompt: str = Field(..., min_length=1, description="Text prompt")
    width: int = Field(default=512, gt=0)
    height: int = Field(default=512, gt=0)
    enhance_prompt: bool = Field(
        default=True, description="Append style and quality keywords to the prompt"
    )
    style: Optional[ImageStyle] = None


class ImageGenerationResponse(BaseModel):
    """A generated image, or a fallback image when ``fallback`` is True."""

    url: str
    prompt: str
    model: Optional[str] = None
    error: Optional[ProviderError] = None
    fallback: bool = False
    width: Optional[int] = None
    height: Optional[int] = None


# ---------------------------------------------------------------------------
# Language understanding
# ---------------------------------------------------------------------------


class LanguageRequest(BaseModel):
    """Free-text query for a language model."""

    query: str = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    context_items: list[str] = Field(default_factory=list)


class Source(BaseModel):
    title: str = ""
    url: str
    snippet: str = ""


class TokenUsage(BaseModel):
    total: int = 0
    prompt: int = 0
    completion: int = 0


class LanguageResponse(BaseModel):
    """Canonical language model answer, shared by Perplexity and Anthropic."""

    text: str
    sources: list[Source] = Field(default_factory=list)
    tokens: TokenUsage = Field(default_factory=TokenUsage)
    model: str = ""


class AnthropicContentBlock(BaseModel):
    type: str = "text"
    text: Optional[str] = None


class AnthropicUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0

    def to_token_usage(self) -> TokenUsage:
        return TokenUsage(
            total=self.input_tokens + self.output_tokens,
            prompt=self.input_tokens,
            completion=self.output_tokens,
        )


class AnthropicMessage(BaseModel):
    """Subset of the Anthropic Messages API response the adapter reads."""

    model: str = ""
    content: list[AnthropicContentBlock] = Field(default_factory=list)
    usage: AnthropicUsage = Field(default_factory=AnthropicUsage)

    def first_text(self) -> str:
        for block in self.content:
            if block.text is not None:
                return block.text
        return ""


# ---------------------------------------------------------------------------
# Word suggestions
# ---------------------------------------------------------------------------


class SuggestionRequest(BaseModel):
    """Request for creative suggestions around one word."""

    word: str = Field(..., min_length=1)
    count: int = Field(default=10, gt=0)
    creativity: float = Field(default=0.7, ge=0.0, le=1.0)
    include_synonyms: bool = True
    include_antonyms: bool = True
    include_related: bool = True


class WordSuggestion(BaseModel):
    word: str
    type: str = Field(..., description="synonym, antonym, related, derivative, ...")
    score: float = 0.0
    definition: Optional[str] = None
    examples: list[str] = Field(default_factory=list)


class SuggestionMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    model: str
    requested_word: str = Field(..., alias="requestedWord")
    total_results: int = Field(..., alias="totalResults")


class SuggestionResponse(BaseModel):
    suggestions: list[WordSuggestion] = Field(default_factory=list)
    metadata: SuggestionMetadata
