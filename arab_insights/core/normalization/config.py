from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict


def default_letter_map() -> Dict[str, str]:
    # alif variants -> bare alif, taa marbuta -> haa
    return {
        "أ": "ا",
        "إ": "ا",
        "آ": "ا",
        "ة": "ه",
    }


@dataclass(frozen=True)
class NormalizationConfig:
    letter_map: Dict[str, str] = field(default_factory=default_letter_map)
    strip_diacritics: bool = True
    strip_tatweel: bool = True
    lowercase: bool = True  # only affects Latin text mixed into posts
    collapse_whitespace: bool = True
