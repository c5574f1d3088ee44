# arab_insights/models/db/text_analysis.py

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.sql import func
from arab_insights.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TextAnalysis(Base):
    __tablename__ = "text_analyses"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    project_id = Column(String, nullable=True, index=True)
    article_id = Column(
        String, ForeignKey("news_articles.id", ondelete="SET NULL"), nullable=True
    )

    input_text = Column(Text, nullable=False)

    sentiment = Column(String, nullable=False)  # "positive", "negative", "neutral"
    sentiment_score = Column(Float, nullable=False)
    positive_prob = Column(Float, nullable=False)
    negative_prob = Column(Float, nullable=False)

    dialect = Column(String, nullable=False)
    dialect_confidence = Column(Float, nullable=False)
    dialect_indicators = Column(JSON, nullable=True)
    emotional_markers = Column(JSON, nullable=True)

    emotion = Column(String, nullable=True)
    category = Column(String, nullable=True)
    keywords = Column(JSON, nullable=True)

    model_source = Column(String, nullable=False)
    content_source = Column(String, nullable=True)
    fallback_reason = Column(String, nullable=True)
    model_response = Column(JSON, nullable=True)  # result as returned to the caller

    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
