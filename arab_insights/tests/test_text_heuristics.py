from arab_insights.core.categorization.categorizer import KeywordCategorizer
from arab_insights.core.keywords.config import KeywordConfig
from arab_insights.core.keywords.extractor import KeywordExtractor
from arab_insights.core.normalization.normalizer import ArabicTextNormalizer
from arab_insights.core.stopword_removal.config import StopwordConfig
from arab_insights.core.stopword_removal.removal import ArabicStopwordRemover
from arab_insights.core.tokenization.tokenizer import DefaultTokenizer


def _remover(**kw):
    return ArabicStopwordRemover(StopwordConfig(use_nltk=False, **kw))


def test_normalizer_folds_spelling_variants():
    norm = ArabicTextNormalizer()
    assert norm.normalize("أحمد  إلى  آخر") == "احمد الى اخر"
    assert norm.normalize("مدرسة") == "مدرسه"
    # fatha + shadda and a tatweel
    assert norm.normalize("زَيّ جـميل") == "زي جميل"


def test_tokenizer_keeps_arabic_runs_only():
    tokens = DefaultTokenizer().tokenize("مرحبا، 2024 hello عالم!")
    assert tokens == ["مرحبا", "عالم"]


def test_stopwords_and_short_tokens_are_removed():
    cleaned, removed = _remover().remove(["في", "الحكومة", "لكن", "قرار"])
    assert cleaned == ["الحكومة", "قرار"]
    assert "في" in removed and "لكن" in removed


def test_negations_are_kept_when_configured():
    remover = _remover(min_token_length=1)
    assert not remover.is_stopword("لا")


def test_keywords_by_frequency():
    extractor = KeywordExtractor(remover=_remover(), config=KeywordConfig(top_k=2))
    keywords = extractor.extract("الحكومة تعلن خطة جديدة. الحكومة تدعم الخطة في عمان")
    assert keywords[0] == "الحكومه"
    assert len(keywords) == 2


def test_keywords_of_non_arabic_text_are_empty():
    extractor = KeywordExtractor(remover=_remover())
    assert extractor.extract("This is English text") == []


def test_categorizer_picks_best_match():
    categorizer = KeywordCategorizer()
    assert categorizer.categorize("الحكومة والوزير في البرلمان") == "politics"
    assert categorizer.categorize("المنتخب يفوز في مباراة الدوري") == "sports"


def test_categorizer_falls_back_to_general():
    assert KeywordCategorizer().categorize("مرحبا بكم") == "general"
