from __future__ import annotations
from collections import Counter
from typing import List

from arab_insights.core.keywords.config import KeywordConfig
from arab_insights.core.normalization.base import TextNormalizer
from arab_insights.core.normalization.normalizer import ArabicTextNormalizer
from arab_insights.core.stopword_removal.base import StopwordRemover
from arab_insights.core.stopword_removal.removal import ArabicStopwordRemover
from arab_insights.core.tokenization.base import Tokenizer
from arab_insights.core.tokenization.tokenizer import DefaultTokenizer


class KeywordExtractor:
    """Most frequent non-stopword Arabic tokens, ties in order of appearance."""

    def __init__(
        self,
        normalizer: TextNormalizer | None = None,
        tokenizer: Tokenizer | None = None,
        remover: StopwordRemover | None = None,
        config: KeywordConfig | None = None,
    ):
        self.normalizer = normalizer or ArabicTextNormalizer()
        self.tokenizer = tokenizer or DefaultTokenizer()
        self.remover = remover or ArabicStopwordRemover()
        self.cfg = config or KeywordConfig()

    def extract(self, text: str) -> List[str]:
        tokens = self.tokenizer.tokenize(self.normalizer.normalize(text))
        cleaned, _removed = self.remover.remove(tokens)
        return [word for word, _ in Counter(cleaned).most_common(self.cfg.top_k)]
