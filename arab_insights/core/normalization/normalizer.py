from __future__ import annotations
import re
from arab_insights.core.normalization.base import TextNormalizer
from arab_insights.core.normalization.config import NormalizationConfig


class ArabicTextNormalizer(TextNormalizer):
    """Orthographic normalisation used before keyword matching.

    The remote models receive the raw text; this is only for our own
    heuristics (keywords, categories) so that spelling variants collapse.
    """

    _re_diacritics = re.compile(r"[\u064B-\u065F\u0670\u06D6-\u06ED]")
    _re_tatweel = re.compile(r"\u0640")
    _re_ws = re.compile(r"\s+")

    def __init__(self, config: NormalizationConfig | None = None):
        self.cfg = config or NormalizationConfig()
        self._re_letters = (
            re.compile("|".join(map(re.escape, self.cfg.letter_map)))
            if self.cfg.letter_map
            else None
        )

    def normalize(self, text: str) -> str:
        if text is None:
            return ""
        s = str(text)

        if self.cfg.strip_diacritics:
            s = self._re_diacritics.sub("", s)
        if self.cfg.strip_tatweel:
            s = self._re_tatweel.sub("", s)
        if self._re_letters is not None:
            s = self._re_letters.sub(lambda m: self.cfg.letter_map[m.group(0)], s)
        if self.cfg.lowercase:
            s = s.lower()
        if self.cfg.collapse_whitespace:
            s = self._re_ws.sub(" ", s)
        return s.strip()
