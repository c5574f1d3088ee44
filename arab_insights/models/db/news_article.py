# arab_insights/models/db/news_article.py

from sqlalchemy import Boolean, Column, DateTime, Float, String, Text
from sqlalchemy.sql import func
from arab_insights.core.database import Base


class NewsArticle(Base):
    __tablename__ = "news_articles"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    project_id = Column(String, nullable=False, index=True)

    title = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    url = Column(String, nullable=True)
    source_name = Column(String, nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)

    # filled by batch analysis
    is_analyzed = Column(Boolean, default=False, nullable=False)
    sentiment = Column(String, nullable=True)
    sentiment_score = Column(Float, nullable=True)
    dialect = Column(String, nullable=True)
    analyzed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
