"""
Validation of submitted answers against stored questions.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..logging import get_logger
from .constants import NO_ANSWER, OPTIONS_SPLIT_CHAR, FeedbackQuestionType
from .options import split_feedback_question_options, to_integer
from .repository import FeedbackFormRecord, FeedbackQuestionRecord, FeedbackResultRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubmittedAnswer:
    question: int
    answer: str


def is_valid_answer(question: FeedbackQuestionRecord, answer: str) -> bool:
    """Check a raw answer against the question's type and options.

    Open text accepts anything non-empty. Single answers must be one option
    value; multiple answers are option values joined with ``|`` and every one
    of them must be a valid option value.
    """
    if not answer:
        return False

    if question.type == FeedbackQuestionType.OpenText:
        return True

    valid_values = {option.value for option in split_feedback_question_options(question.options)}

    if question.type == FeedbackQuestionType.MultipleAnswer:
        selected = answer.split(OPTIONS_SPLIT_CHAR)
        return all(to_integer(value) in valid_values for value in selected)

    return to_integer(answer) in valid_values


def build_feedback_results(
    form: FeedbackFormRecord,
    questions: Iterable[FeedbackQuestionRecord],
    submitted: Sequence[SubmittedAnswer],
    user_id: str,
) -> list[FeedbackResultRecord]:
    """One result row per question of the form.

    Each question starts at ``NO_ANSWER``; the first submitted answer for the
    question that passes validation replaces it. Answers for questions
    outside the form are ignored.
    """
    rows = []
    for question in questions:
        answer = NO_ANSWER
        for candidate in submitted:
            if candidate.question == question.id and is_valid_answer(question, candidate.answer):
                answer = candidate.answer
                break
        rows.append(
            FeedbackResultRecord(
                form_id=form.id,
                question_id=question.id,
                user_id=user_id,
                answer=answer,
            )
        )

    answered = sum(1 for row in rows if row.answer != NO_ANSWER)
    logger.debug(
        "Feedback answers validated",
        form_id=form.id,
        questions=len(rows),
        answered=answered,
    )
    return rows
