"""
Tests for feedback GraphQL resolvers
"""

import asyncio

import pytest

from feedback_service.auth.adapters.base import ForbiddenError, UnauthorizedError
from feedback_service.feedback.constants import NO_ANSWER, FeedbackQuestionType
from feedback_service.feedback.repository import FeedbackResultRecord
from feedback_service.graphql.resolvers.feedback import (
    FeedbackFormResolver,
    answer_feedback_form,
    resolve_feedback_results,
    resolve_unanswered_form,
)
from feedback_service.graphql.types.feedback import (
    FeedbackAnswerInput,
    FeedbackQuestionAnswerInput,
)


def answer_input(form: int, *answers: tuple[int, str]) -> FeedbackAnswerInput:
    return FeedbackAnswerInput(
        form=form,
        questions=[FeedbackQuestionAnswerInput(question=q, answer=a) for q, a in answers],
    )


class TestUnansweredForm:
    @pytest.mark.asyncio
    async def test_returns_highest_priority_form(self, repository, student_context):
        form = await FeedbackFormResolver(repository).unanswered_form(student_context)

        assert form is not None
        assert form.id == 2
        assert form.name == "Tool usability"
        assert [q.id for q in form.questions] == [21, 22, 20]
        assert form.questions[0].type == FeedbackQuestionType.MultipleAnswer
        assert [(o.value, o.text) for o in form.questions[1].options] == [
            (1, "Bad"),
            (2, "Ok"),
            (3, "Good"),
        ]

    @pytest.mark.asyncio
    async def test_skips_answered_forms(self, repository, student_context):
        repository.results.append(
            FeedbackResultRecord(
                form_id=2, question_id=20, user_id=student_context.email, answer="done"
            )
        )

        form = await FeedbackFormResolver(repository).unanswered_form(student_context)

        assert form is not None
        assert form.id == 1

    @pytest.mark.asyncio
    async def test_other_users_answers_do_not_count(self, repository, student_context):
        repository.results.append(
            FeedbackResultRecord(form_id=2, question_id=20, user_id="other@example.com", answer="x")
        )

        form = await FeedbackFormResolver(repository).unanswered_form(student_context)

        assert form is not None
        assert form.id == 2

    @pytest.mark.asyncio
    async def test_returns_none_when_everything_answered(self, repository, student_context):
        resolver = FeedbackFormResolver(repository)
        assert await resolver.answer_feedback_form(student_context, answer_input(1, (10, "1")))
        assert await resolver.answer_feedback_form(student_context, answer_input(2, (20, "ok")))

        assert await resolver.unanswered_form(student_context) is None

    @pytest.mark.asyncio
    async def test_requires_authentication(self, repository, unauthenticated_context, info_factory):
        info = info_factory({"auth": unauthenticated_context, "repository": repository})

        with pytest.raises(UnauthorizedError):
            await resolve_unanswered_form(info)


class TestAnswerFeedbackForm:
    @pytest.mark.asyncio
    async def test_valid_single_answer_is_stored(self, repository, student_context):
        ok = await FeedbackFormResolver(repository).answer_feedback_form(
            student_context, answer_input(1, (10, "1"))
        )

        assert ok is True
        assert repository.results == [
            FeedbackResultRecord(
                form_id=1, question_id=10, user_id="student@example.com", answer="1"
            )
        ]

    @pytest.mark.asyncio
    async def test_invalid_option_is_stored_as_no_answer(self, repository, student_context):
        ok = await FeedbackFormResolver(repository).answer_feedback_form(
            student_context, answer_input(1, (10, "99"))
        )

        assert ok is True
        assert [r.answer for r in repository.results] == [NO_ANSWER]

    @pytest.mark.asyncio
    async def test_every_question_gets_exactly_one_row(self, repository, student_context):
        ok = await FeedbackFormResolver(repository).answer_feedback_form(
            student_context, answer_input(2, (21, "0|2"), (21, "1"))
        )

        assert ok is True
        assert repository.insert_calls == 1
        stored = {r.question_id: r.answer for r in repository.results}
        assert stored == {20: NO_ANSWER, 21: "0|2", 22: NO_ANSWER}
        assert len(repository.results) == 3

    @pytest.mark.asyncio
    async def test_unknown_form_returns_false(self, repository, student_context):
        ok = await FeedbackFormResolver(repository).answer_feedback_form(
            student_context, answer_input(404, (10, "1"))
        )

        assert ok is False
        assert repository.results == []

    @pytest.mark.asyncio
    async def test_form_without_questions_returns_false(
        self, repository_factory, sample_forms, student_context
    ):
        repository = repository_factory(forms=sample_forms)

        ok = await FeedbackFormResolver(repository).answer_feedback_form(
            student_context, answer_input(1, (10, "1"))
        )

        assert ok is False
        assert repository.insert_calls == 0

    @pytest.mark.asyncio
    async def test_second_submission_is_rejected(self, repository, student_context):
        resolver = FeedbackFormResolver(repository)

        assert await resolver.answer_feedback_form(student_context, answer_input(1, (10, "1")))
        assert not await resolver.answer_feedback_form(student_context, answer_input(1, (10, "2")))

        assert [r.answer for r in repository.results] == ["1"]

    @pytest.mark.asyncio
    async def test_concurrent_submissions_store_once(self, repository, student_context):
        resolver = FeedbackFormResolver(repository)

        outcomes = await asyncio.gather(
            resolver.answer_feedback_form(student_context, answer_input(1, (10, "1"))),
            resolver.answer_feedback_form(student_context, answer_input(1, (10, "2"))),
        )

        assert sorted(outcomes) == [False, True]
        assert repository.insert_calls == 1
        assert len(repository.results) == 1

    @pytest.mark.asyncio
    async def test_uses_caller_email_as_user(self, repository, student_context, info_factory):
        info = info_factory({"auth": student_context, "repository": repository})

        assert await answer_feedback_form(info, answer_input(1, (10, "2"))) is True
        assert repository.results[0].user_id == "student@example.com"

    @pytest.mark.asyncio
    async def test_requires_authentication(self, repository, unauthenticated_context, info_factory):
        info = info_factory({"auth": unauthenticated_context, "repository": repository})

        with pytest.raises(UnauthorizedError):
            await answer_feedback_form(info, answer_input(1, (10, "1")))
        assert repository.results == []


class TestFeedbackResults:
    @pytest.mark.asyncio
    async def test_round_trip_through_submission(self, repository, student_context):
        resolver = FeedbackFormResolver(repository)
        await resolver.answer_feedback_form(student_context, answer_input(1, (10, "1")))

        results = await resolver.feedback_results()

        assert len(results) == 1
        assert results[0].user.email == "student@example.com"
        assert results[0].form.id == 1
        assert [(a.question.id, a.answer) for a in results[0].answers] == [(10, "1")]

    @pytest.mark.asyncio
    async def test_sorted_by_form_priority(self, repository, student_context):
        resolver = FeedbackFormResolver(repository)
        await resolver.answer_feedback_form(student_context, answer_input(1, (10, "2")))
        await resolver.answer_feedback_form(student_context, answer_input(2, (22, "3")))

        results = await resolver.feedback_results()

        assert [r.form.priority for r in results] == [10, 5]
        assert [a.question.priority for a in results[0].answers] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_admin_only(self, repository, student_context, info_factory):
        info = info_factory({"auth": student_context, "repository": repository})

        with pytest.raises(ForbiddenError):
            await resolve_feedback_results(info)

    @pytest.mark.asyncio
    async def test_admin_can_read(self, repository, admin_context, info_factory):
        info = info_factory({"auth": admin_context, "repository": repository})

        assert await resolve_feedback_results(info) == []
