"""Feedback forms: option codec, answer validation, aggregation and storage."""

from .constants import NO_ANSWER, FeedbackQuestionType
from .options import (
    FeedbackQuestionOption,
    join_feedback_question_options,
    split_feedback_question_options,
)
from .repository import FeedbackAlreadyAnsweredError, FeedbackRepository, SqlFeedbackRepository

__all__ = [
    "NO_ANSWER",
    "FeedbackQuestionType",
    "FeedbackQuestionOption",
    "join_feedback_question_options",
    "split_feedback_question_options",
    "FeedbackAlreadyAnsweredError",
    "FeedbackRepository",
    "SqlFeedbackRepository",
]
