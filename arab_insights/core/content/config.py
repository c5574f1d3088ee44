from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


PLACEHOLDER_PATTERNS: Tuple[str, ...] = (
    r"ONLY AVAILABLE IN PAID PLANS",
    r"upgrade to premium",
    r"subscribe to read",
    r"premium content",
    r"paywall",
)

MEANINGFUL_WORDS: Tuple[str, ...] = (
    "في", "من", "على", "إلى", "عن", "مع", "هذا", "هذه", "التي", "الذي",
)


@dataclass(frozen=True)
class ContentQualityConfig:
    placeholder_patterns: Tuple[str, ...] = field(default=PLACEHOLDER_PATTERNS)
    meaningful_words: Tuple[str, ...] = field(default=MEANINGFUL_WORDS)
    # (min, good, excellent) word counts
    main_word_thresholds: Tuple[int, int, int] = (20, 100, 200)
    fallback_word_thresholds: Tuple[int, int, int] = (10, 30, 50)
    main_min_quality: int = 20
    fallback_min_quality: int = 15
    min_usable_quality: int = 10  # below this an article is skipped
