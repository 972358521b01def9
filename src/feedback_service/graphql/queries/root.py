"""
Root GraphQL query definitions
"""

import strawberry

from ..types.feedback import FeedbackForm, FeedbackResult
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.auth import resolve_current_user

        return await resolve_current_user(info)

    @strawberry.field
    async def unanswered_form(self, info: strawberry.Info) -> FeedbackForm | None:
        """Get the highest-priority feedback form the current user has not answered."""
        from ..resolvers.feedback import resolve_unanswered_form

        return await resolve_unanswered_form(info)

    @strawberry.field
    async def feedback_results(self, info: strawberry.Info) -> list[FeedbackResult]:
        """Get all users' feedback answers (admin only)."""
        from ..resolvers.feedback import resolve_feedback_results

        return await resolve_feedback_results(info)
