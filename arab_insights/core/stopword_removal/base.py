from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Tuple


class StopwordRemover(ABC):
    @abstractmethod
    def is_stopword(self, token: str) -> bool: ...

    @abstractmethod
    def remove(self, tokens: List[str]) -> Tuple[List[str], List[str]]:
        """Split ``tokens`` into (kept, dropped), preserving order."""
        ...
