"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator, Iterable, Sequence
from typing import Any
from unittest.mock import MagicMock

import pytest
import strawberry

from feedback_service.auth.context import AuthContext
from feedback_service.feedback.constants import FeedbackQuestionType
from feedback_service.feedback.repository import (
    FeedbackAlreadyAnsweredError,
    FeedbackFormRecord,
    FeedbackQuestionRecord,
    FeedbackResultRecord,
)


class InMemoryFeedbackRepository:
    """FeedbackRepository kept in lists, in insertion order."""

    def __init__(
        self,
        forms: Iterable[FeedbackFormRecord] = (),
        questions: Iterable[FeedbackQuestionRecord] = (),
        results: Iterable[FeedbackResultRecord] = (),
    ):
        self.forms = list(forms)
        self.questions = list(questions)
        self.results = list(results)
        self.insert_calls = 0

    async def answered_form_ids(self, user_id: str) -> set[int]:
        return {r.form_id for r in self.results if r.user_id == user_id}

    async def first_unanswered_form(self, excluded_ids: Iterable[int]) -> FeedbackFormRecord | None:
        excluded = set(excluded_ids)
        candidates = [f for f in self.forms if f.id not in excluded]
        if not candidates:
            return None
        return sorted(candidates, key=lambda f: (-f.priority, f.id))[0]

    async def get_form(self, form_id: int) -> FeedbackFormRecord | None:
        return next((f for f in self.forms if f.id == form_id), None)

    async def form_questions(self, form_id: int) -> list[FeedbackQuestionRecord]:
        return sorted(
            (q for q in self.questions if q.form_id == form_id),
            key=lambda q: (-q.priority, q.id),
        )

    async def insert_results(self, results: Sequence[FeedbackResultRecord]) -> None:
        keys = {(r.user_id, r.form_id, r.question_id) for r in self.results}
        for r in results:
            if (r.user_id, r.form_id, r.question_id) in keys:
                raise FeedbackAlreadyAnsweredError(r.user_id, r.form_id)
        self.insert_calls += 1
        self.results.extend(results)

    async def all_results(self) -> list[FeedbackResultRecord]:
        return list(self.results)

    async def all_forms(self) -> list[FeedbackFormRecord]:
        return list(self.forms)

    async def all_questions(self) -> list[FeedbackQuestionRecord]:
        return list(self.questions)


@pytest.fixture
def sample_forms() -> list[FeedbackFormRecord]:
    return [
        FeedbackFormRecord(id=1, name="Course planning", priority=5),
        FeedbackFormRecord(id=2, name="Tool usability", priority=10),
    ]


@pytest.fixture
def sample_questions() -> list[FeedbackQuestionRecord]:
    return [
        FeedbackQuestionRecord(
            id=10,
            form_id=1,
            question="Was the plan useful?",
            type=FeedbackQuestionType.SingleAnswer.value,
            priority=1,
            options="1=Yes|2=No",
        ),
        FeedbackQuestionRecord(
            id=20,
            form_id=2,
            question="Any comments?",
            type=FeedbackQuestionType.OpenText.value,
            priority=1,
            options="",
        ),
        FeedbackQuestionRecord(
            id=21,
            form_id=2,
            question="Which views did you use?",
            type=FeedbackQuestionType.MultipleAnswer.value,
            priority=3,
            options="0=Summary|1=Timeline|2=Grades",
        ),
        FeedbackQuestionRecord(
            id=22,
            form_id=2,
            question="How would you rate it?",
            type=FeedbackQuestionType.SingleAnswer.value,
            priority=2,
            options="1=Bad|2=Ok|3=Good",
        ),
    ]


@pytest.fixture
def repository(sample_forms, sample_questions) -> InMemoryFeedbackRepository:
    return InMemoryFeedbackRepository(forms=sample_forms, questions=sample_questions)


@pytest.fixture
def student_context() -> AuthContext:
    return AuthContext(
        email="student@example.com",
        role="student",
        principal={"provider": "none", "subject": "student"},
        token="test-token",
    )


@pytest.fixture
def admin_context() -> AuthContext:
    return AuthContext(
        email="admin@example.com",
        role="admin",
        principal={"provider": "none", "subject": "admin"},
        token="admin-token",
    )


@pytest.fixture
def unauthenticated_context() -> AuthContext:
    return AuthContext(email=None, role=None, principal=None, token=None)


@pytest.fixture
def repository_factory():
    """Build an in-memory repository from explicit rows."""
    return InMemoryFeedbackRepository


@pytest.fixture
def info_factory():
    """Build a mock GraphQL info object around a context dict."""

    def make_info(context: dict[str, Any]) -> MagicMock:
        info = MagicMock(spec=strawberry.Info)
        info.context = context
        return info

    return make_info


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
