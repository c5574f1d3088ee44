# arab_insights/models/db/summary.py

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func
from arab_insights.core.database import Base


class Summary(Base):
    __tablename__ = "summaries"

    id = Column(String, primary_key=True, index=True)
    analysis_id = Column(
        String, ForeignKey("text_analyses.id", ondelete="CASCADE"), nullable=False
    )
    summary_text = Column(Text, nullable=False)
    model_used = Column(String, nullable=False)
    source_length = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
