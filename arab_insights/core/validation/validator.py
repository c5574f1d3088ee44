from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from arab_insights.core.validation.config import TextValidationConfig

_RE_ARABIC = re.compile(r"[\u0600-\u06FF]")
_RE_LATIN = re.compile(r"[a-zA-Z]")


class TextValidationError(ValueError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class ValidatedText:
    text: str
    content_type: str  # "arabic" | "english"
    content_source: str = "direct_text"


class ArabicTextValidator:
    """Trims and bounds user text before anything leaves the process."""

    def __init__(self, config: TextValidationConfig | None = None):
        self.cfg = config or TextValidationConfig()

    def validate(self, text: Optional[str]) -> ValidatedText:
        clean = (text or "").strip()
        if not clean:
            raise TextValidationError("TEXT_EMPTY", "Text is empty.")
        if len(clean) < self.cfg.min_length:
            raise TextValidationError(
                "TEXT_TOO_SHORT",
                f"Text must be at least {self.cfg.min_length} characters.",
            )
        if len(clean) > self.cfg.max_length:
            raise TextValidationError(
                "TEXT_TOO_LONG",
                f"Text must be at most {self.cfg.max_length} characters.",
            )

        if _RE_ARABIC.search(clean):
            return ValidatedText(text=clean, content_type="arabic")
        if _RE_LATIN.search(clean) and len(clean) > self.cfg.min_english_length:
            return ValidatedText(text=clean, content_type="english")

        raise TextValidationError(
            "TEXT_UNSUPPORTED", "Text has no Arabic or meaningful English content."
        )

    def select_content(
        self,
        text: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ValidatedText:
        """Prefer explicit text, fall back to title + description."""
        first_error: TextValidationError | None = None

        if text is not None:
            try:
                return self.validate(text)
            except TextValidationError as e:
                first_error = e

        parts = [p for p in (title, description) if p and p.strip()]
        if parts:
            combined = self.cfg.title_description_separator.join(parts)
            try:
                validated = self.validate(combined)
            except TextValidationError as e:
                first_error = first_error or e
            else:
                if title and description:
                    source = "title_description"
                elif title:
                    source = "title_only"
                else:
                    source = "description_only"
                return ValidatedText(
                    text=validated.text,
                    content_type=validated.content_type,
                    content_source=source,
                )

        raise first_error or TextValidationError("TEXT_EMPTY", "Text is empty.")
