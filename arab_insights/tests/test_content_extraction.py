from arab_insights.core.content.extractor import ContentExtractor

ARTICLE_BODY = (
    "أعلنت الحكومة الأردنية اليوم عن خطة اقتصادية جديدة تهدف إلى دعم المشاريع "
    "الصغيرة في عمان والزرقاء وإربد. وقال الوزير إن الخطة ستوفر فرص عمل للشباب "
    "خلال العام المقبل. وأكد أن الحكومة ملتزمة بتحسين الرواتب ومكافحة البطالة في "
    "جميع المحافظات."
)
TITLE = "ارتفاع أسعار الوقود في الأردن للشهر الثالث على التوالي"
DESCRIPTION = "قررت لجنة تسعير المشتقات النفطية رفع أسعار البنزين والديزل اعتبارا من يوم الجمعة."


def test_main_content_wins_when_good():
    extracted = ContentExtractor().extract(
        title=TITLE, description=DESCRIPTION, content=ARTICLE_BODY
    )
    assert extracted.source == "content"
    assert extracted.text == ARTICLE_BODY
    assert 20 <= extracted.quality <= 100


def test_paywall_placeholder_falls_back_to_title_description():
    extractor = ContentExtractor()
    scored = extractor.score("ONLY AVAILABLE IN PAID PLANS", is_main_content=True)
    assert not scored.is_valid
    assert scored.content_type == "blocked_main_content"

    extracted = extractor.extract(
        title=TITLE, description=DESCRIPTION, content="ONLY AVAILABLE IN PAID PLANS"
    )
    assert extracted.source == "title_description"
    assert extracted.text == f"{TITLE}. {DESCRIPTION}"
    assert extractor.is_usable(extracted)


def test_non_arabic_content_is_invalid():
    scored = ContentExtractor().score("Breaking news from the capital today")
    assert not scored.is_valid
    assert scored.content_type == "non-arabic"


def test_nothing_usable():
    extractor = ContentExtractor()
    extracted = extractor.extract(title=None, description=None, content=None)
    assert extracted.source == "none"
    assert extracted.quality == 0
    assert not extractor.is_usable(extracted)
