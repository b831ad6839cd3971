"""Duration estimates for content that carries no explicit length."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..constants import MEDIA_IMAGE


@dataclass(frozen=True)
class DurationEstimationConfig:
    seconds_per_image: int = 15
    words_per_minute: int = 150


DEFAULT_DURATION_CONFIG = DurationEstimationConfig()


def count_words(text: Optional[str]) -> int:
    if not text or not text.strip():
        return 0
    return len(text.split())


def estimate_image_duration(config: DurationEstimationConfig = DEFAULT_DURATION_CONFIG) -> int:
    return config.seconds_per_image


def _seconds_for_words(words: int, config: DurationEstimationConfig) -> int:
    return math.ceil(words / config.words_per_minute * 60)


def estimate_text_duration(text: str, config: DurationEstimationConfig = DEFAULT_DURATION_CONFIG) -> int:
    return _seconds_for_words(count_words(text), config)


def estimate_duration(
    media_type: str,
    text: Optional[str] = None,
    word_count: Optional[int] = None,
    config: DurationEstimationConfig = DEFAULT_DURATION_CONFIG,
) -> int:
    """Seconds to show an item: fixed for images, reading time for text, 0 for video."""
    if media_type == MEDIA_IMAGE:
        return estimate_image_duration(config)
    if media_type == "text":
        if word_count:
            return _seconds_for_words(word_count, config)
        if text:
            return estimate_text_duration(text, config)
    return 0


__all__ = [
    "DurationEstimationConfig",
    "DEFAULT_DURATION_CONFIG",
    "count_words",
    "estimate_image_duration",
    "estimate_text_duration",
    "estimate_duration",
]
