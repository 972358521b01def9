"""
Data access for feedback forms, questions and results.

Resolvers depend on the ``FeedbackRepository`` protocol; the SQLAlchemy
implementation opens one session per call so independent reads can be
awaited concurrently.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_session
from ..dbmodels import FeedbackForm, FeedbackFormQuestion, FeedbackResult
from ..logging import get_logger

logger = get_logger(__name__)


class FeedbackAlreadyAnsweredError(Exception):
    """Raised when stored results already exist for the user and form."""

    def __init__(self, user_id: str, form_id: int):
        super().__init__(f"Form {form_id} already answered by {user_id}")
        self.user_id = user_id
        self.form_id = form_id


@dataclass(frozen=True)
class FeedbackFormRecord:
    id: int
    name: str
    priority: int


@dataclass(frozen=True)
class FeedbackQuestionRecord:
    id: int
    form_id: int
    question: str
    type: str
    priority: int
    options: str


@dataclass(frozen=True)
class FeedbackResultRecord:
    form_id: int
    question_id: int
    user_id: str
    answer: str


class FeedbackRepository(Protocol):
    """Storage operations needed by the feedback resolvers."""

    async def answered_form_ids(self, user_id: str) -> set[int]:
        """Distinct ids of the forms the user has any answer for."""
        ...

    async def first_unanswered_form(self, excluded_ids: Iterable[int]) -> FeedbackFormRecord | None:
        """Highest-priority form not in ``excluded_ids`` (ties: lowest id)."""
        ...

    async def get_form(self, form_id: int) -> FeedbackFormRecord | None: ...

    async def form_questions(self, form_id: int) -> list[FeedbackQuestionRecord]:
        """Questions of a form, priority descending (ties: lowest id)."""
        ...

    async def insert_results(self, results: Sequence[FeedbackResultRecord]) -> None:
        """Insert all rows in one batch; all-or-nothing.

        Raises:
            FeedbackAlreadyAnsweredError: a row for the same user, form and
                question is already stored
        """
        ...

    async def all_results(self) -> list[FeedbackResultRecord]: ...

    async def all_forms(self) -> list[FeedbackFormRecord]: ...

    async def all_questions(self) -> list[FeedbackQuestionRecord]: ...


def _form_record(row: FeedbackForm) -> FeedbackFormRecord:
    return FeedbackFormRecord(id=row.id, name=row.name, priority=row.priority)


def _question_record(row: FeedbackFormQuestion) -> FeedbackQuestionRecord:
    return FeedbackQuestionRecord(
        id=row.id,
        form_id=row.form_id,
        question=row.question,
        type=row.type,
        priority=row.priority,
        options=row.options or "",
    )


def _result_record(row: FeedbackResult) -> FeedbackResultRecord:
    return FeedbackResultRecord(
        form_id=row.form_id,
        question_id=row.question_id,
        user_id=row.user_id,
        answer=row.answer,
    )


SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class SqlFeedbackRepository:
    """``FeedbackRepository`` backed by the relational database."""

    def __init__(self, session_factory: SessionFactory = get_async_session):
        self._session_factory = session_factory

    async def answered_form_ids(self, user_id: str) -> set[int]:
        async with self._session_factory() as session:
            stmt = (
                select(FeedbackResult.form_id)
                .where(FeedbackResult.user_id == user_id)
                .distinct()
            )
            result = await session.execute(stmt)
            return set(result.scalars().all())

    async def first_unanswered_form(self, excluded_ids: Iterable[int]) -> FeedbackFormRecord | None:
        excluded = list(excluded_ids)
        async with self._session_factory() as session:
            stmt = select(FeedbackForm)
            if excluded:
                stmt = stmt.where(FeedbackForm.id.not_in(excluded))
            stmt = stmt.order_by(FeedbackForm.priority.desc(), FeedbackForm.id.asc()).limit(1)

            result = await session.execute(stmt)
            form = result.scalar_one_or_none()
            return _form_record(form) if form else None

    async def get_form(self, form_id: int) -> FeedbackFormRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(FeedbackForm).where(FeedbackForm.id == form_id))
            form = result.scalar_one_or_none()
            return _form_record(form) if form else None

    async def form_questions(self, form_id: int) -> list[FeedbackQuestionRecord]:
        async with self._session_factory() as session:
            stmt = (
                select(FeedbackFormQuestion)
                .where(FeedbackFormQuestion.form_id == form_id)
                .order_by(FeedbackFormQuestion.priority.desc(), FeedbackFormQuestion.id.asc())
            )
            result = await session.execute(stmt)
            return [_question_record(q) for q in result.scalars().all()]

    async def insert_results(self, results: Sequence[FeedbackResultRecord]) -> None:
        if not results:
            return
        try:
            async with self._session_factory() as session:
                await session.execute(
                    insert(FeedbackResult),
                    [
                        {
                            "form_id": r.form_id,
                            "question_id": r.question_id,
                            "user_id": r.user_id,
                            "answer": r.answer,
                        }
                        for r in results
                    ],
                )
        except IntegrityError as e:
            logger.info(
                "Feedback results already stored",
                form_id=results[0].form_id,
                error=str(e.orig),
            )
            raise FeedbackAlreadyAnsweredError(results[0].user_id, results[0].form_id) from e
        logger.info(
            "Feedback results stored",
            form_id=results[0].form_id,
            rows=len(results),
        )

    async def all_results(self) -> list[FeedbackResultRecord]:
        async with self._session_factory() as session:
            stmt = select(FeedbackResult).order_by(
                FeedbackResult.timestamp.asc(),
                FeedbackResult.user_id.asc(),
                FeedbackResult.form_id.asc(),
                FeedbackResult.question_id.asc(),
            )
            result = await session.execute(stmt)
            return [_result_record(r) for r in result.scalars().all()]

    async def all_forms(self) -> list[FeedbackFormRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(FeedbackForm).order_by(FeedbackForm.id.asc()))
            return [_form_record(f) for f in result.scalars().all()]

    async def all_questions(self) -> list[FeedbackQuestionRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(FeedbackFormQuestion).order_by(FeedbackFormQuestion.id.asc())
            )
            return [_question_record(q) for q in result.scalars().all()]
