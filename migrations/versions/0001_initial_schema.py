"""initial schema: articles, analyses, summaries, system settings

Revision ID: 0001_initial_schema
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "news_articles",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("source_name", sa.String(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_analyzed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sentiment", sa.String(), nullable=True),
        sa.Column("sentiment_score", sa.Float(), nullable=True),
        sa.Column("dialect", sa.String(), nullable=True),
        sa.Column("analyzed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_news_articles_id", "news_articles", ["id"])
    op.create_index("ix_news_articles_user_id", "news_articles", ["user_id"])
    op.create_index("ix_news_articles_project_id", "news_articles", ["project_id"])

    op.create_table(
        "text_analyses",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column(
            "article_id",
            sa.String(),
            sa.ForeignKey("news_articles.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("input_text", sa.Text(), nullable=False),
        sa.Column("sentiment", sa.String(), nullable=False),
        sa.Column("sentiment_score", sa.Float(), nullable=False),
        sa.Column("positive_prob", sa.Float(), nullable=False),
        sa.Column("negative_prob", sa.Float(), nullable=False),
        sa.Column("dialect", sa.String(), nullable=False),
        sa.Column("dialect_confidence", sa.Float(), nullable=False),
        sa.Column("dialect_indicators", sa.JSON(), nullable=True),
        sa.Column("emotional_markers", sa.JSON(), nullable=True),
        sa.Column("emotion", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=True),
        sa.Column("model_source", sa.String(), nullable=False),
        sa.Column("content_source", sa.String(), nullable=True),
        sa.Column("fallback_reason", sa.String(), nullable=True),
        sa.Column("model_response", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_text_analyses_id", "text_analyses", ["id"])
    op.create_index("ix_text_analyses_user_id", "text_analyses", ["user_id"])
    op.create_index("ix_text_analyses_project_id", "text_analyses", ["project_id"])
    op.create_index("ix_text_analyses_created_at", "text_analyses", ["created_at"])

    op.create_table(
        "summaries",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "analysis_id",
            sa.String(),
            sa.ForeignKey("text_analyses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("summary_text", sa.Text(), nullable=False),
        sa.Column("model_used", sa.String(), nullable=False),
        sa.Column("source_length", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_summaries_id", "summaries", ["id"])

    op.create_table(
        "system_settings",
        sa.Column("key", sa.String(), primary_key=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("system_settings")
    op.drop_index("ix_summaries_id", table_name="summaries")
    op.drop_table("summaries")
    op.drop_index("ix_text_analyses_created_at", table_name="text_analyses")
    op.drop_index("ix_text_analyses_project_id", table_name="text_analyses")
    op.drop_index("ix_text_analyses_user_id", table_name="text_analyses")
    op.drop_index("ix_text_analyses_id", table_name="text_analyses")
    op.drop_table("text_analyses")
    op.drop_index("ix_news_articles_project_id", table_name="news_articles")
    op.drop_index("ix_news_articles_user_id", table_name="news_articles")
    op.drop_index("ix_news_articles_id", table_name="news_articles")
    op.drop_table("news_articles")
