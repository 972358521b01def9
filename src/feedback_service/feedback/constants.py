"""
Shared constants for feedback forms
"""

from enum import Enum


class FeedbackQuestionType(str, Enum):
    """Kind of a feedback question, stored verbatim in ``feedback_form_question.type``."""

    OpenText = "OpenText"
    SingleAnswer = "SingleAnswer"
    MultipleAnswer = "MultipleAnswer"


# Stored as the answer of a question that received no valid answer
NO_ANSWER = "NO_ANSWER"

# Option Codec delimiters; multi-select answers are joined with OPTIONS_SPLIT_CHAR too
OPTIONS_SPLIT_CHAR = "|"
OPTIONS_VALUE_SPLIT_CHAR = "="
