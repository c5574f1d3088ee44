from __future__ import annotations
import re
from typing import List

from arab_insights.core.dialect.base import DialectResult, DialectScorer
from arab_insights.core.dialect.config import DialectConfig


def _unique(items: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


class JordanianDialectScorer(DialectScorer):
    """Keyword/regex heuristic for Jordanian Arabic.

    score = (#terms found as substrings) + (#regex matches)
    confidence = score / (len(terms) + len(patterns))

    The denominator does not depend on the length of the text. Stored
    dialect_confidence values were computed this way, so keep it.
    """

    def __init__(self, config: DialectConfig | None = None):
        self.cfg = config or DialectConfig()
        self._terms = [(t, t.lower()) for t in self.cfg.terms]
        self._patterns = [re.compile(p, re.IGNORECASE) for p in self.cfg.patterns]
        self._markers = [(m, m.lower()) for m in self.cfg.emotional_markers]

    @property
    def total_checks(self) -> int:
        return len(self._terms) + len(self._patterns)

    def score(self, text: str) -> DialectResult:
        raw = text or ""
        lowered = raw.lower()

        found: List[str] = []
        score = 0

        for term, needle in self._terms:
            if needle in lowered:
                found.append(term)
                score += 1

        for pattern in self._patterns:
            for match in pattern.finditer(raw):
                found.append(match.group(0))
                score += 1

        markers = [m for m, needle in self._markers if needle in lowered]

        confidence = score / max(self.total_checks, 1)
        dialect = (
            self.cfg.positive_label
            if confidence > self.cfg.threshold
            else self.cfg.negative_label
        )

        return DialectResult(
            dialect=dialect,
            confidence=confidence,
            indicators=_unique(found)[: self.cfg.max_indicators],
            emotional_markers=_unique(markers),
        )


_default_scorer = JordanianDialectScorer()


def detect_dialect(text: str) -> str:
    """Return "Jordanian" or "Non-Jordanian" for ``text``."""
    return _default_scorer.score(text).dialect
