"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.feedback import FeedbackAnswerInput


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="answerFeedbackForm")
    async def answer_feedback_form(self, info: strawberry.Info, answer: FeedbackAnswerInput) -> bool:
        """Answer a feedback form as the current user."""
        from ..resolvers.feedback import answer_feedback_form

        return await answer_feedback_form(info, answer)
