from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TextValidationConfig:
    min_length: int = 2
    max_length: int = 5000
    # Latin-only input is accepted only above this length
    min_english_length: int = 10
    title_description_separator: str = ". "
