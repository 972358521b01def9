"""
Feedback forms, questions and results.

Revision ID: 20250101_000000_feedback_schema
Revises:
Create Date: 2025-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20250101_000000_feedback_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "feedback_form",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("priority", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="feedback_form_pkey"),
    )

    op.create_table(
        "feedback_form_question",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("form_id", sa.Integer(), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("priority", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("options", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.CheckConstraint(
            "type IN ('OpenText', 'SingleAnswer', 'MultipleAnswer')",
            name="ck_feedback_form_question_question_type",
        ),
        sa.ForeignKeyConstraint(
            ["form_id"],
            ["feedback_form.id"],
            ondelete="CASCADE",
            name="feedback_form_question_form_id_fkey",
        ),
        sa.PrimaryKeyConstraint("id", name="feedback_form_question_pkey"),
    )
    op.create_index(
        "idx_feedback_form_question_form", "feedback_form_question", ["form_id"], unique=False
    )

    op.create_table(
        "feedback_result",
        sa.Column("form_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=320), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["form_id"],
            ["feedback_form.id"],
            ondelete="CASCADE",
            name="feedback_result_form_id_fkey",
        ),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["feedback_form_question.id"],
            ondelete="CASCADE",
            name="feedback_result_question_id_fkey",
        ),
        sa.PrimaryKeyConstraint("user_id", "form_id", "question_id", name="feedback_result_pkey"),
    )
    op.create_index("idx_feedback_result_user", "feedback_result", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_feedback_result_user", table_name="feedback_result")
    op.drop_table("feedback_result")
    op.drop_index("idx_feedback_form_question_form", table_name="feedback_form_question")
    op.drop_table("feedback_form_question")
    op.drop_table("feedback_form")
