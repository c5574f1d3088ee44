from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List


class Tokenizer(ABC):
    """Port: split a post into word tokens."""

    @abstractmethod
    def tokenize(self, text: str) -> List[str]: ...
