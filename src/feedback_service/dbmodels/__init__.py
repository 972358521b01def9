"""
Database models for the feedback service (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class FeedbackForm(Base):
    __tablename__ = "feedback_form"
    __table_args__ = (PrimaryKeyConstraint("id", name="feedback_form_pkey"),)

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))

    questions: Mapped[list["FeedbackFormQuestion"]] = relationship(
        "FeedbackFormQuestion", uselist=True, back_populates="form"
    )


class FeedbackFormQuestion(Base):
    __tablename__ = "feedback_form_question"
    __table_args__ = (
        ForeignKeyConstraint(
            ["form_id"],
            ["feedback_form.id"],
            ondelete="CASCADE",
            name="feedback_form_question_form_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="feedback_form_question_pkey"),
        CheckConstraint(
            "type IN ('OpenText', 'SingleAnswer', 'MultipleAnswer')",
            name="question_type",
        ),
        Index("idx_feedback_form_question_form", "form_id"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    form_id: Mapped[int] = mapped_column(Integer, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    options: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))

    form: Mapped["FeedbackForm"] = relationship("FeedbackForm", back_populates="questions")


class FeedbackResult(Base):
    __tablename__ = "feedback_result"
    __table_args__ = (
        ForeignKeyConstraint(
            ["form_id"],
            ["feedback_form.id"],
            ondelete="CASCADE",
            name="feedback_result_form_id_fkey",
        ),
        ForeignKeyConstraint(
            ["question_id"],
            ["feedback_form_question.id"],
            ondelete="CASCADE",
            name="feedback_result_question_id_fkey",
        ),
        PrimaryKeyConstraint("user_id", "form_id", "question_id", name="feedback_result_pkey"),
        Index("idx_feedback_result_user", "user_id"),
    )

    form_id: Mapped[int] = mapped_column(Integer, nullable=False)
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[str] = mapped_column(String(320), nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )


# Expose for Alembic
target_metadata = Base.metadata
