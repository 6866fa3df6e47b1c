"""Flux image generation via Replicate.

Image generation is the one capability where a degraded answer beats an
error: when the service is unavailable the adapter serves a fallback image
chosen deterministically from the configured local images.

Example usage:
    adapter = FluxImageAdapter(config.service_config("replicate"), fallback=config.fallback)
    outcome = await adapter.generate_image(ImageGenerationRequest(prompt="serendipity"))
    if outcome.fallback:
        ...  # outcome.data.url is a local fallback image
"""

import logging
from typing import Optional

from wordgate.core.providers.base import ServiceAdapter
from wordgate.core.providers.fallbacks import pick_fallback_image
from wordgate.core.providers.models import (
    ImageGenerationRequest,
    ImageGenerationResponse,
    ProviderError,
)
from wordgate.core.resilience import CallOutcome, StandardError

logger = logging.getLogger(__name__)

GENERATE_IMAGE_ENDPOINT = "/api/generate-image"
IMAGES_CAPABILITY = "images"

STYLE_PROMPTS: dict[str, str] = {
    "minimalist": "minimalist style, elegant design, clean composition",
    "artistic": "artistic, creative, expressive, vibrant colors",
    "realistic": "photorealistic, detailed, lifelike, high-definition",
    "educational": "educational, instructive, clear visualization, informative",
}
DEFAULT_STYLE = "minimalist"


def enhance_prompt(prompt: str, style: Optional[str] = None) -> str:
    """Append quality and style keywords to a user prompt."""
    addition = STYLE_PROMPTS.get(style or DEFAULT_STYLE, STYLE_PROMPTS[DEFAULT_STYLE])
    return f"{prompt}, high quality, detailed, 4k, professional, {addition}"


class FluxImageAdapter(ServiceAdapter):
    """Adapter for the Replicate Flux image model."""

    async def generate_image(
        self, request: ImageGenerationRequest
    ) -> CallOutcome[ImageGenerationResponse]:
        """Generate an image for ``request.prompt``.

        Returns:
            The generated image; a degraded outcome carrying a fallback image
            when the service is exhausted or its circuit is open; or a failure
            (missing credentials, non-retryable provider errors).
        """
        prompt = (
            enhance_prompt(request.prompt, request.style)
            if request.enhance_prompt
            else request.prompt
        )
        payload = {
            "prompt": prompt,
            "width": request.width,
            "height": request.height,
            "style": request.style,
            "model": self.config.model,
        }
        outcome = self._parse(
            await self._post(GENERATE_IMAGE_ENDPOINT, payload),
            ImageGenerationResponse,
        )
        return self._with_fallback(
            outcome,
            IMAGES_CAPABILITY,
            lambda: self.fallback_response(request, outcome.error),
        )

    def get_fallback_image(self, prompt: str) -> str:
        """Fallback image URL for ``prompt``; the placeholder when disabled or empty."""
        if not self.fallback.images:
            return self.fallback.placeholder_url
        return pick_fallback_image(
            prompt, self.fallback.local_images, self.fallback.placeholder_url
        )

    def fallback_response(
        self,
        request: ImageGenerationRequest,
        cause: Optional[StandardError] = None,
    ) -> ImageGenerationResponse:
        return ImageGenerationResponse(
            url=self.get_fallback_image(request.prompt),
            prompt=request.prompt,
            error=ProviderError(
                code="FALLBACK_USED",
                message=cause.message if cause else "Failed to generate image",
                details={"kind": cause.kind.value} if cause else None,
            ),
            fallback=True,
            width=request.width,
            height=request.height,
        )
