from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Category:
    id: str
    name_ar: str
    name_en: str
    keywords: Tuple[str, ...]


DEFAULT_CATEGORIES: Tuple[Category, ...] = (
    Category(
        "politics", "السياسة", "Politics",
        ("حكومة", "وزير", "برلمان", "انتخابات", "مجلس النواب", "سياسة", "حزب", "سفارة"),
    ),
    Category(
        "economy", "الاقتصاد", "Economy",
        ("اقتصاد", "أسعار", "ضريبة", "دينار", "استثمار", "بنك", "تضخم", "رواتب", "بطالة"),
    ),
    Category(
        "sports", "الرياضة", "Sports",
        ("مباراة", "منتخب", "الدوري", "نادي", "كرة", "لاعب", "بطولة"),
    ),
    Category(
        "technology", "التكنولوجيا", "Technology",
        ("تكنولوجيا", "إنترنت", "تطبيق", "ذكاء اصطناعي", "هاتف", "برمجة", "رقمي"),
    ),
    Category(
        "health", "الصحة", "Health",
        ("صحة", "مستشفى", "طبيب", "مرض", "لقاح", "علاج", "كورونا", "دواء"),
    ),
    Category(
        "education", "التعليم", "Education",
        ("تعليم", "مدرسة", "جامعة", "طلاب", "توجيهي", "امتحان", "معلم"),
    ),
    Category(
        "society", "المجتمع", "Society",
        ("مجتمع", "عائلة", "زواج", "شباب", "مواطن", "أطفال", "المرأة"),
    ),
)


@dataclass(frozen=True)
class CategorizationConfig:
    categories: Tuple[Category, ...] = field(default=DEFAULT_CATEGORIES)
    fallback: str = "general"
