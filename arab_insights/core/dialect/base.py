from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class DialectResult:
    dialect: str
    confidence: float  # score / total checks, unrounded
    indicators: List[str] = field(default_factory=list)
    emotional_markers: List[str] = field(default_factory=list)

    @property
    def is_jordanian(self) -> bool:
        return self.dialect == "Jordanian"


class DialectScorer(ABC):
    """Port: label a text with a dialect."""

    @abstractmethod
    def score(self, text: str) -> DialectResult: ...
