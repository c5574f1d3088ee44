from __future__ import annotations
from typing import Dict, List, Tuple

from arab_insights.core.categorization.config import CategorizationConfig
from arab_insights.core.normalization.base import TextNormalizer
from arab_insights.core.normalization.normalizer import ArabicTextNormalizer


class KeywordCategorizer:
    def __init__(
        self,
        config: CategorizationConfig | None = None,
        normalizer: TextNormalizer | None = None,
    ):
        self.cfg = config or CategorizationConfig()
        self.normalizer = normalizer or ArabicTextNormalizer()
        # keywords go through the same normalizer as the text
        self._keywords: List[Tuple[str, List[str]]] = [
            (c.id, [self.normalizer.normalize(k) for k in c.keywords])
            for c in self.cfg.categories
        ]

    def hits(self, text: str) -> Dict[str, int]:
        norm = self.normalizer.normalize(text)
        return {cid: sum(1 for k in kws if k in norm) for cid, kws in self._keywords}

    def categorize(self, text: str) -> str:
        best, best_hits = self.cfg.fallback, 0
        for cid, n in self.hits(text).items():
            if n > best_hits:
                best, best_hits = cid, n
        return best
