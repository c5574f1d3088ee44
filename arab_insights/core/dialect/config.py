from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


JORDANIAN_TERMS: Tuple[str, ...] = (
    "زلمة", "يا زلمة", "خرفنة", "تسليك", "احشش", "انكب", "راعي", "هسا", "شو", "كيفك",
    "إربد", "عمان", "الزرقاء", "العقبة", "واللهي", "عال", "بدك", "مش عارف", "تمام", "فش",
    "عالسريع", "يا رجال", "يلا", "خلص", "دبس", "بسطة", "زَيّ الفل", "جاي", "روح", "حياتي",
    "عن جد", "بكفي", "ما بدي", "طيب", "قديش", "وينك", "عالطول", "شايف", "هسه", "بتعرف",
)

JORDANIAN_PATTERNS: Tuple[str, ...] = (
    r"\b(شو|كيف|وين|بدك|مش|هسا|هسه|منيح)\b",
    r"\b(يا\s*(زلمة|رجال|حياتي|عمي))\b",
    r"\b(عال|فش|كتير|شوي)\b",
    r"\b(بدأيش|بطل|خبرني)\b",
)

# Reported alongside the label and used for emotion mapping; never scored.
EMOTIONAL_MARKERS: Tuple[str, ...] = (
    "واللهي", "يا رب", "حرام", "حبيبي", "يا زلمة", "عن جد", "يا عمي",
    "يا حياتي", "يا رجال", "بتجنن", "روعة", "زفت", "فظيع",
)


@dataclass(frozen=True)
class DialectConfig:
    terms: Tuple[str, ...] = field(default=JORDANIAN_TERMS)
    patterns: Tuple[str, ...] = field(default=JORDANIAN_PATTERNS)
    emotional_markers: Tuple[str, ...] = field(default=EMOTIONAL_MARKERS)
    threshold: float = 0.15  # strictly greater-than
    max_indicators: int = 12
    positive_label: str = "Jordanian"
    negative_label: str = "Non-Jordanian"
