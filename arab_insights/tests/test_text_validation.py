import pytest

from arab_insights.core.validation.config import TextValidationConfig
from arab_insights.core.validation.validator import (
    ArabicTextValidator,
    TextValidationError,
)


@pytest.fixture
def validator():
    return ArabicTextValidator()


@pytest.mark.parametrize("text", [None, "", "   \n\t "])
def test_empty_text_is_rejected(validator, text):
    with pytest.raises(TextValidationError) as exc:
        validator.validate(text)
    assert exc.value.code == "TEXT_EMPTY"


def test_too_short(validator):
    with pytest.raises(TextValidationError) as exc:
        validator.validate(" ا ")
    assert exc.value.code == "TEXT_TOO_SHORT"


def test_too_long_respects_config():
    validator = ArabicTextValidator(TextValidationConfig(max_length=10))
    with pytest.raises(TextValidationError) as exc:
        validator.validate("ا" * 11)
    assert exc.value.code == "TEXT_TOO_LONG"


def test_arabic_text_is_trimmed(validator):
    validated = validator.validate("  مرحبا بكم  ")
    assert validated.text == "مرحبا بكم"
    assert validated.content_type == "arabic"
    assert validated.content_source == "direct_text"


def test_english_needs_more_than_ten_chars(validator):
    assert validator.validate("This is English text").content_type == "english"
    with pytest.raises(TextValidationError) as exc:
        validator.validate("hello")
    assert exc.value.code == "TEXT_UNSUPPORTED"


def test_digits_only_are_unsupported(validator):
    with pytest.raises(TextValidationError) as exc:
        validator.validate("1234567890123")
    assert exc.value.code == "TEXT_UNSUPPORTED"


def test_select_content_prefers_text(validator):
    validated = validator.select_content("نص الخبر", "عنوان", "وصف")
    assert validated.text == "نص الخبر"
    assert validated.content_source == "direct_text"


def test_select_content_falls_back_to_title_and_description(validator):
    validated = validator.select_content("", "عنوان الخبر", "وصف قصير")
    assert validated.text == "عنوان الخبر. وصف قصير"
    assert validated.content_source == "title_description"


def test_select_content_title_only(validator):
    validated = validator.select_content(None, "عنوان الخبر", None)
    assert validated.content_source == "title_only"


def test_select_content_reports_first_error(validator):
    with pytest.raises(TextValidationError) as exc:
        validator.select_content("   ", None, None)
    assert exc.value.code == "TEXT_EMPTY"
