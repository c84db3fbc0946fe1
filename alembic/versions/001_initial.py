"""Initial tables: scenarios, responses, progress.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "scenarios",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("scenario_key", sa.String(128), nullable=False),
        sa.Column("example_key", sa.String(128), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("difficulty", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("scenario_key"),
    )
    op.create_index(op.f("ix_scenarios_category"), "scenarios", ["category"], unique=False)

    op.create_table(
        "responses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("scenario_id", sa.Integer(), nullable=False),
        sa.Column("response_text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("created_on", sa.Date(), nullable=False),
        sa.Column("response_time_seconds", sa.Integer(), nullable=True),
        sa.Column("self_rating", sa.Integer(), nullable=True),
        sa.Column("viewed_example", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("response_length", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["scenario_id"], ["scenarios.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_responses_scenario_id"), "responses", ["scenario_id"], unique=False)
    op.create_index(op.f("ix_responses_created_on"), "responses", ["created_on"], unique=False)

    op.create_table(
        "progress",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_responses", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_activity_date", sa.Date(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("total_active_days", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("average_response_length", sa.Float(), nullable=False, server_default="0"),
        sa.Column("average_self_rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("examples_viewed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unique_scenarios_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("preferred_difficulty", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("tutorial_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("achievements_json", sa.Text(), nullable=False, server_default="[]"),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("progress")
    op.drop_index(op.f("ix_responses_created_on"), table_name="responses")
    op.drop_index(op.f("ix_responses_scenario_id"), table_name="responses")
    op.drop_table("responses")
    op.drop_index(op.f("ix_scenarios_category"), table_name="scenarios")
    op.drop_table("scenarios")
