from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Set


# Dialect fillers and particles that the NLTK Arabic list does not cover
ARABIC_EXTRA_STOPWORDS: FrozenSet[str] = frozenset(
    {
        "في", "من", "إلى", "الى", "على", "عن", "مع", "هذا", "هذه", "ذلك",
        "التي", "الذي", "اللي", "بس", "لكن", "يعني", "كمان", "هيك", "انو", "إنو",
    }
)


def _to_set(x: Iterable[str] | None) -> Set[str]:
    return set(map(str, x or []))


@dataclass(frozen=True)
class StopwordConfig:
    language: str = "arabic"
    use_nltk: bool = True  # merge the NLTK corpus list into the built-in one
    custom_stopwords: Set[str] = field(default_factory=set)  # extra words to remove
    exclude_stopwords: Set[str] = field(
        default_factory=set
    )  # words to keep even if in list
    lowercase: bool = True
    preserve_negations: bool = True  # keep {لا, لم, لن, ما, مش, ليس}
    min_token_length: int = 3  # shorter tokens are dropped as noise
