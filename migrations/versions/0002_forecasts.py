"""forecasts table

Revision ID: 0002_forecasts
Revises: 0001_initial_schema
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0002_forecasts"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "forecasts",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "analysis_id",
            sa.String(),
            sa.ForeignKey("text_analyses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("horizon_days", sa.Integer(), nullable=False),
        sa.Column("forecast_json", sa.JSON(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_forecasts_id", "forecasts", ["id"])
    op.create_index("ix_forecasts_user_id", "forecasts", ["user_id"])
    op.create_index("ix_forecasts_project_id", "forecasts", ["project_id"])


def downgrade() -> None:
    op.drop_index("ix_forecasts_project_id", table_name="forecasts")
    op.drop_index("ix_forecasts_user_id", table_name="forecasts")
    op.drop_index("ix_forecasts_id", table_name="forecasts")
    op.drop_table("forecasts")
