from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class SentimentConfig:
    # Labels are compared after strip().lower()
    positive_labels: FrozenSet[str] = field(
        default=frozenset({"positive", "pos", "label_1", "1"})
    )
    negative_labels: FrozenSet[str] = field(
        default=frozenset({"negative", "neg", "label_0", "0"})
    )
    default_prob: float = 0.5  # missing / non-finite scores
    precision: int = 4
