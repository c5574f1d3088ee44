from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenizationConfig:
    lowercase: bool = True
    min_token_len: int = 1  # drop tokens shorter than this
    remove_numbers_only: bool = True  # drop tokens that are purely digits
