from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryConfig:
    max_input_chars: int = 1000  # mT5 XLSum input budget
    max_length: int = 150
    min_length: int = 30
    do_sample: bool = False
    model_label: str = "mT5_multilingual_XLSum"
