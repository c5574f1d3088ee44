from __future__ import annotations
import re
from typing import List

from arab_insights.core.tokenization.base import Tokenizer
from arab_insights.core.tokenization.config import TokenizationConfig

ARABIC_WORD = r"[\u0621-\u064A\u0671-\u06D3]+"


class DefaultTokenizer(Tokenizer):
    """Splits posts into runs of Arabic letters.

    Digits, Latin, emoji and punctuation all act as separators.
    """

    def __init__(self, config: TokenizationConfig | None = None):
        self.cfg = config or TokenizationConfig()
        self._regex = re.compile(ARABIC_WORD)

    def tokenize(self, text: str) -> List[str]:
        out: List[str] = []
        for t in self._regex.findall(text or ""):
            if not t:
                continue
            if self.cfg.lowercase:
                t = t.lower()
            if self.cfg.remove_numbers_only and t.isdigit():
                continue
            if len(t) < self.cfg.min_token_len:
                continue
            out.append(t)
        return out
