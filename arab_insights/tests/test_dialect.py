import pytest

from arab_insights.core.dialect.config import (
    DialectConfig,
    JORDANIAN_PATTERNS,
    JORDANIAN_TERMS,
)
from arab_insights.core.dialect.scorer import JordanianDialectScorer, detect_dialect


def test_vocabulary_sizes_fix_the_denominator():
    assert len(JORDANIAN_TERMS) == 40
    assert len(JORDANIAN_PATTERNS) == 4
    assert JordanianDialectScorer().total_checks == 44


def test_colloquial_sentence_is_jordanian():
    result = JordanianDialectScorer().score("هسا شو بتعمل يا زلمة")

    # 4 lexical terms + 3 pattern hits
    assert result.confidence == pytest.approx(7 / 44)
    assert result.dialect == "Jordanian"
    assert result.is_jordanian
    assert result.indicators == ["زلمة", "يا زلمة", "هسا", "شو"]
    assert result.emotional_markers == ["يا زلمة"]


def test_english_text_is_not_jordanian():
    result = JordanianDialectScorer().score("This is English text")
    assert result.confidence == 0
    assert result.dialect == "Non-Jordanian"
    assert result.indicators == []


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_scores_zero(text):
    assert JordanianDialectScorer().score(text).confidence == 0


def test_threshold_is_strict():
    # one term plus one pattern hit: "شو" -> 2/44 < threshold
    scorer = JordanianDialectScorer(DialectConfig(threshold=2 / 44))
    assert scorer.score("شو").dialect == "Non-Jordanian"


def test_score_does_not_depend_on_text_length():
    short = JordanianDialectScorer().score("شو")
    padded = JordanianDialectScorer().score("شو " + "كلام " * 200)
    assert short.confidence == padded.confidence


def test_detect_dialect_is_deterministic():
    text = "والله منيح كتير يا زلمة شو بدك"
    assert detect_dialect(text) == detect_dialect(text) == "Jordanian"
