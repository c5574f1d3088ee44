from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from arab_insights.core.content.config import ContentQualityConfig

_RE_ARABIC_CHAR = re.compile(r"[\u0600-\u06FF]")
_RE_SENTENCE_END = re.compile(r"[.!؟]")


@dataclass(frozen=True)
class ContentScore:
    is_valid: bool
    quality: int
    content_type: str  # none | blocked_main_content | non-arabic | good | fair | short
    error: str = ""


@dataclass(frozen=True)
class ExtractedContent:
    text: str
    source: str  # content | title_description | title_only | none
    quality: int


class ContentExtractor:
    """Picks the most analysable text of a scraped article.

    Main content wins unless it is a paywall placeholder or scores too low;
    then title + description, then the bare title.
    """

    def __init__(self, config: ContentQualityConfig | None = None):
        self.cfg = config or ContentQualityConfig()
        self._placeholders = [
            re.compile(p, re.IGNORECASE) for p in self.cfg.placeholder_patterns
        ]

    def score(self, text: Optional[str], *, is_main_content: bool = True) -> ContentScore:
        text = text or ""
        if len(text.strip()) < 3:
            return ContentScore(False, 0, "none", "Text is empty or too short.")

        if is_main_content and any(p.search(text) for p in self._placeholders):
            return ContentScore(
                False, 0, "blocked_main_content", "Main content is behind a paywall."
            )

        arabic_chars = len(_RE_ARABIC_CHAR.findall(text))
        if not arabic_chars:
            return ContentScore(False, 0, "non-arabic", "Text has no Arabic letters.")

        min_words, good_words, excellent_words = (
            self.cfg.main_word_thresholds
            if is_main_content
            else self.cfg.fallback_word_thresholds
        )
        word_count = len(text.split())

        quality = 0
        if word_count > excellent_words:
            quality += 40
        elif word_count > good_words:
            quality += 30
        elif word_count > min_words:
            quality += 20
        elif word_count > 5:
            quality += 10
        else:
            quality += 5

        sentences = [s for s in _RE_SENTENCE_END.split(text) if s.strip()]
        if len(sentences) > 3:
            quality += 20
        elif len(sentences) > 1:
            quality += 15
        else:
            quality += 5

        density = arabic_chars / len(text)
        if density > 0.7:
            quality += 25
        elif density > 0.5:
            quality += 15
        elif density > 0.3:
            quality += 10

        meaningful = sum(1 for w in self.cfg.meaningful_words if w in text)
        quality += min(meaningful * 2, 15)

        threshold = (
            self.cfg.main_min_quality if is_main_content else self.cfg.fallback_min_quality
        )
        if word_count > good_words:
            content_type = "good"
        elif word_count > min_words:
            content_type = "fair"
        else:
            content_type = "short"

        is_valid = quality >= threshold
        return ContentScore(
            is_valid,
            min(quality, 100),
            content_type,
            "" if is_valid else "Content quality is too low for analysis.",
        )

    def extract(
        self,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        content: Optional[str] = None,
    ) -> ExtractedContent:
        if content and content.strip():
            scored = self.score(content, is_main_content=True)
            if scored.is_valid:
                return ExtractedContent(content, "content", scored.quality)

        title_desc = ". ".join(p for p in (title, description) if p and p.strip())
        if title_desc:
            scored = self.score(title_desc, is_main_content=False)
            if scored.is_valid:
                return ExtractedContent(title_desc, "title_description", scored.quality)

        if title and title.strip():
            scored = self.score(title, is_main_content=False)
            if scored.is_valid:
                return ExtractedContent(title, "title_only", scored.quality)

        return ExtractedContent("", "none", 0)

    def is_usable(self, extracted: ExtractedContent) -> bool:
        return extracted.quality >= self.cfg.min_usable_quality
