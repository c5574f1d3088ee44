from __future__ import annotations
import logging
from typing import List, Tuple, Set

import nltk

from arab_insights.core.stopword_removal.base import StopwordRemover
from arab_insights.core.stopword_removal.config import (
    ARABIC_EXTRA_STOPWORDS,
    StopwordConfig,
)

logger = logging.getLogger(__name__)

NEGATIONS = {"لا", "لم", "لن", "ما", "مش", "ليس"}


def _nltk_stopwords(language: str) -> Set[str]:
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        nltk.download("stopwords", quiet=True)
    from nltk.corpus import stopwords

    return set(stopwords.words(language))


class ArabicStopwordRemover(StopwordRemover):
    def __init__(self, config: StopwordConfig | None = None):
        self.cfg = config or StopwordConfig()
        self._stopset = self._build_stopset()

    def _build_stopset(self) -> Set[str]:
        base: Set[str] = set(ARABIC_EXTRA_STOPWORDS)
        if self.cfg.use_nltk:
            try:
                base |= _nltk_stopwords(self.cfg.language)
            except (LookupError, OSError) as e:
                logger.warning(
                    f"NLTK stopwords for '{self.cfg.language}' unavailable: {e}"
                )

        base |= set(self.cfg.custom_stopwords)
        base -= set(self.cfg.exclude_stopwords)

        if self.cfg.preserve_negations:
            base -= NEGATIONS

        if self.cfg.lowercase:
            base = {w.lower() for w in base}
        return base

    def is_stopword(self, token: str) -> bool:
        norm = token.lower() if self.cfg.lowercase else token
        return norm in self._stopset

    def remove(self, tokens: List[str]) -> Tuple[List[str], List[str]]:
        cleaned: List[str] = []
        removed: List[str] = []
        for t in tokens:
            if self.is_stopword(t) or len(t) < self.cfg.min_token_length:
                removed.append(t)
                continue
            cleaned.append(t)
        return cleaned, removed
