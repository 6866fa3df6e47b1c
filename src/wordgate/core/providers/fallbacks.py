"""Deterministic fallback payloads for degraded responses.

Fallbacks are served when a provider's retries are exhausted or its
circuit is open. The same input always yields the same payload, so a
degraded page renders identically on every request.
"""

import hashlib
from typing import Sequence

from wordgate.core.providers.models import (
    SuggestionMetadata,
    SuggestionResponse,
    WordSuggestion,
)

OFFLINE_MODEL = "offline-fallback-model"

_PREFIXES = ("re", "un", "in", "dis", "over", "under", "pre", "post", "anti")
_SUFFIXES = ("ness", "ity", "tion", "ing", "ed", "ly", "ful", "less", "able", "ible")

_COMMON_WORDS: dict[str, list[WordSuggestion]] = {
    "happy": [
        WordSuggestion(word="joyful", type="synonym", score=0.95, definition="Feeling or showing great pleasure or happiness", examples=["She was joyful about the news."]),
        WordSuggestion(word="content", type="synonym", score=0.9, definition="In a state of peaceful happiness", examples=["He felt content with his life."]),
        WordSuggestion(word="sad", type="antonym", score=0.85, definition="Feeling or showing sorrow", examples=["He looked sad when he heard the bad news."]),
    ],
    "sad": [
        WordSuggestion(word="unhappy", type="synonym", score=0.95, definition="Not happy; sorrowful", examples=["She was unhappy with the results."]),
        WordSuggestion(word="melancholy", type="synonym", score=0.9, definition="A feeling of pensive sadness", examples=["There was a melancholy atmosphere at the farewell party."]),
        WordSuggestion(word="happy", type="antonym", score=0.85, definition="Feeling or showing pleasure or contentment", examples=["I'm happy to see you."]),
    ],
    "good": [
        WordSuggestion(word="excellent", type="synonym", score=0.95, definition="Extremely good; outstanding", examples=["The food was excellent."]),
        WordSuggestion(word="fine", type="synonym", score=0.9, definition="Of high quality", examples=["That's a fine piece of craftsmanship."]),
        WordSuggestion(word="bad", type="antonym", score=0.85, definition="Not good in quality or condition", examples=["The movie was really bad."]),
    ],
    "bad": [
        WordSuggestion(word="poor", type="synonym", score=0.95, definition="Of low or inferior standard or quality", examples=["The poor quality of the recording made it difficult to hear."]),
        WordSuggestion(word="awful", type="synonym", score=0.9, definition="Very bad or unpleasant", examples=["The weather was awful yesterday."]),
        WordSuggestion(word="good", type="antonym", score=0.85, definition="To be desired or approved of", examples=["The soup tastes good."]),
    ],
    "big": [
        WordSuggestion(word="large", type="synonym", score=0.95, definition="Of considerable or relatively great size", examples=["They have a large house."]),
        WordSuggestion(word="enormous", type="synonym", score=0.9, definition="Very large in size or amount", examples=["He made an enormous mistake."]),
        WordSuggestion(word="small", type="antonym", score=0.85, definition="Of a size that is less than normal or usual", examples=["She has small hands."]),
    ],
}


def stable_index(key: str, size: int) -> int:
    """Map ``key`` to an index in ``range(size)``, stable across processes.

    Raises:
        ValueError: If ``size`` is not positive
    """
    if size <= 0:
        raise ValueError(f"size must be > 0, got {size}")
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return int(digest[:16], 16) % size


def pick_fallback_image(prompt: str, images: Sequence[str], placeholder_url: str) -> str:
    """Choose a fallback image for ``prompt``, or the placeholder if none exist."""
    if not images:
        return placeholder_url
    return images[stable_index(prompt, len(images))]


def mock_suggestions(word: str) -> SuggestionResponse:
    """Offline word suggestions for ``word``.

    Common words get curated entries; anything else gets suggestions
    derived from the word itself.
    """
    normalized = word.strip().lower()
    curated = _COMMON_WORDS.get(normalized)
    if curated is not None:
        suggestions = [s.model_copy(deep=True) for s in curated]
    else:
        prefix = _PREFIXES[stable_index(f"prefix:{normalized}", len(_PREFIXES))]
        suffix = _SUFFIXES[stable_index(f"suffix:{normalized}", len(_SUFFIXES))]
        suggestions = [
            WordSuggestion(
                word=f"{prefix}{word}",
                type="synonym",
                score=0.9,
                definition=f"Similar in meaning to {word}",
                examples=[f"The {word} was impressive."],
            ),
            WordSuggestion(
                word=f"{word}{suffix}",
                type="derivative",
                score=0.85,
                definition=f"Derived from {word}",
                examples=[f"They expressed great {word}{suffix}."],
            ),
            WordSuggestion(
                word=f"alternative_{word}",
                type="synonym",
                score=0.8,
                definition=f"Another term for {word}",
                examples=[f"The alternative_{word} provided a new perspective."],
            ),
            WordSuggestion(
                word=f"opposite_{word}",
                type="antonym",
                score=0.75,
                definition=f"Opposite in meaning to {word}",
                examples=[f"While some prefer {word}, others choose opposite_{word}."],
            ),
            WordSuggestion(
                word=f"{word}_concept",
                type="related",
                score=0.7,
                definition=f"Conceptually related to {word}",
                examples=[f"The {word}_concept is fundamental to understanding this field."],
            ),
        ]

    return SuggestionResponse(
        suggestions=suggestions,
        metadata=SuggestionMetadata(
            model=OFFLINE_MODEL,
            requested_word=word,
            total_results=len(suggestions),
        ),
    )
