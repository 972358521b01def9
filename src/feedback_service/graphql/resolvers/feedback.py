from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import strawberry

from ...feedback.aggregation import aggregate_feedback_results, decode_form
from ...feedback.answers import SubmittedAnswer, build_feedback_results
from ...feedback.repository import (
    FeedbackAlreadyAnsweredError,
    FeedbackRepository,
    SqlFeedbackRepository,
)
from ...logging import get_logger
from ..access_control import require_admin, require_user

if TYPE_CHECKING:
    from ...auth.context import AuthContext
    from ..types.feedback import FeedbackAnswerInput, FeedbackForm, FeedbackResult

logger = get_logger(__name__)


class FeedbackFormResolver:
    """Feedback operations over an injected repository.

    Callers are expected to have passed the access checks already; the
    methods only take the validated auth context.
    """

    def __init__(self, repository: FeedbackRepository):
        self.repository = repository

    async def unanswered_form(self, auth_context: AuthContext) -> FeedbackForm | None:
        """Highest-priority form the user has not answered yet, or None."""
        from ..types.feedback import FeedbackForm as FeedbackFormType

        answered = await self.repository.answered_form_ids(auth_context.email)
        form = await self.repository.first_unanswered_form(answered)

        if form is None:
            logger.debug("No unanswered feedback form", answered=len(answered))
            return None

        questions = await self.repository.form_questions(form.id)
        return FeedbackFormType.from_decoded(decode_form(form, questions))

    async def answer_feedback_form(
        self, auth_context: AuthContext, answer: FeedbackAnswerInput
    ) -> bool:
        """
        Store the user's answers to a form.

        Every question of the form gets exactly one row; questions without a
        valid submitted answer are stored as NO_ANSWER. Returns False without
        writing when the form does not exist, has no questions, or was already
        answered by the user.
        """
        user_id = auth_context.email

        form, questions, answered = await asyncio.gather(
            self.repository.get_form(answer.form),
            self.repository.form_questions(answer.form),
            self.repository.answered_form_ids(user_id),
        )

        if form is None or not questions:
            logger.info("Feedback answer for unknown or empty form", form_id=answer.form)
            return False

        if form.id in answered:
            logger.info("Feedback form already answered", form_id=form.id)
            return False

        submitted = [SubmittedAnswer(question=q.question, answer=q.answer) for q in answer.questions]
        rows = build_feedback_results(form, questions, submitted, user_id)

        try:
            await self.repository.insert_results(rows)
        except FeedbackAlreadyAnsweredError:
            # A concurrent submission for the same user and form stored first
            logger.info("Feedback form answered concurrently", form_id=form.id)
            return False
        return True

    async def feedback_results(self) -> list[FeedbackResult]:
        """Every user's answers grouped by form, most important forms first."""
        from ..types.feedback import FeedbackResult as FeedbackResultType

        results, forms, questions = await asyncio.gather(
            self.repository.all_results(),
            self.repository.all_forms(),
            self.repository.all_questions(),
        )

        reports = aggregate_feedback_results(results, forms, questions)
        logger.info("Feedback results aggregated", reports=len(reports), rows=len(results))
        return [FeedbackResultType.from_report(report) for report in reports]


def get_feedback_resolver(info: strawberry.Info) -> FeedbackFormResolver:
    """Build the resolver from the repository placed in the GraphQL context."""
    repository = info.context.get("repository")
    if repository is None:
        repository = SqlFeedbackRepository()
    return FeedbackFormResolver(repository)


# Query resolvers
async def resolve_unanswered_form(info: strawberry.Info) -> FeedbackForm | None:
    auth_context = await require_user(info)
    return await get_feedback_resolver(info).unanswered_form(auth_context)


async def resolve_feedback_results(info: strawberry.Info) -> list[FeedbackResult]:
    await require_admin(info)
    return await get_feedback_resolver(info).feedback_results()


# Mutation resolvers
async def answer_feedback_form(info: strawberry.Info, answer: FeedbackAnswerInput) -> bool:
    auth_context = await require_user(info)
    return await get_feedback_resolver(info).answer_feedback_form(auth_context, answer)
