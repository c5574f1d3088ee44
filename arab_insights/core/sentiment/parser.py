from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from arab_insights.core.sentiment.config import SentimentConfig


class SentimentParseError(ValueError):
    """The endpoint answered, but not in a shape we understand."""


class LabelScore(BaseModel):
    label: Union[str, int] = ""
    score: Optional[float] = None


class ScoresEnvelope(BaseModel):
    scores: List[LabelScore]


# [[{label, score}]] | [{label, score}] | {"scores": [...]}
SentimentPayload = Union[List[List[LabelScore]], List[LabelScore], ScoresEnvelope]
_payload_adapter: TypeAdapter = TypeAdapter(SentimentPayload)


@dataclass(frozen=True)
class SentimentScores:
    sentiment: str  # "positive" | "negative" | "neutral"
    confidence: float
    positive_prob: float
    negative_prob: float
    fallback_reason: Optional[str] = None


# set when the payload parsed but carried no usable pair of scores
MISSING_SCORES_REASON = "missing_sentiment_scores"


def neutral_scores(
    cfg: SentimentConfig | None = None, reason: Optional[str] = None
) -> SentimentScores:
    p = (cfg or SentimentConfig()).default_prob
    return SentimentScores("neutral", p, p, p, fallback_reason=reason)


def _entries(payload: Any) -> List[LabelScore]:
    try:
        parsed = _payload_adapter.validate_python(payload)
    except ValidationError as e:
        raise SentimentParseError(
            f"Unexpected sentiment response shape: {e.error_count()} validation error(s)"
        ) from e

    if isinstance(parsed, ScoresEnvelope):
        return parsed.scores
    if parsed and isinstance(parsed[0], list):
        return parsed[0]
    # flat list, or an empty outer list
    return [e for e in parsed if isinstance(e, LabelScore)]


def _prob(value: Optional[float], cfg: SentimentConfig) -> float:
    if value is None or not math.isfinite(value):
        return cfg.default_prob
    return min(1.0, max(0.0, value))


def _find(entries: List[LabelScore], labels) -> Optional[LabelScore]:
    for e in entries:
        if str(e.label).strip().lower() in labels:
            return e
    return None


def parse_sentiment_payload(
    payload: Any, cfg: SentimentConfig | None = None
) -> SentimentScores:
    """Validate a classifier response and turn it into rounded probabilities.

    Raises SentimentParseError when ``payload`` matches none of the known shapes.
    """
    cfg = cfg or SentimentConfig()
    entries = _entries(payload)

    positive = _find(entries, cfg.positive_labels)
    negative = _find(entries, cfg.negative_labels)

    if positive is not None and negative is not None:
        pos, neg = positive.score, negative.score
    elif len(entries) >= 2:
        # unlabeled binary head: index 0 = negative, index 1 = positive
        neg, pos = entries[0].score, entries[1].score
    else:
        return neutral_scores(cfg, reason=MISSING_SCORES_REASON)

    pos, neg = _prob(pos, cfg), _prob(neg, cfg)
    if pos == neg:
        sentiment = "neutral"
    else:
        sentiment = "positive" if pos > neg else "negative"
    confidence = max(pos, neg)

    return SentimentScores(
        sentiment=sentiment,
        confidence=round(confidence, cfg.precision),
        positive_prob=round(pos, cfg.precision),
        negative_prob=round(neg, cfg.precision),
    )
