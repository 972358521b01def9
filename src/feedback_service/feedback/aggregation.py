"""
Aggregation of stored feedback answers into a per-user, per-form report.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from ..logging import get_logger
from .options import FeedbackQuestionOption, split_feedback_question_options
from .repository import FeedbackFormRecord, FeedbackQuestionRecord, FeedbackResultRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class DecodedQuestion:
    id: int
    question: str
    type: str
    priority: int
    options: list[FeedbackQuestionOption]


@dataclass(frozen=True)
class DecodedForm:
    id: int
    name: str
    priority: int
    questions: list[DecodedQuestion]


@dataclass(frozen=True)
class ReportAnswer:
    question: DecodedQuestion
    answer: str


@dataclass(frozen=True)
class FeedbackReport:
    form: DecodedForm
    answers: list[ReportAnswer]
    user_email: str


def decode_question(question: FeedbackQuestionRecord) -> DecodedQuestion:
    return DecodedQuestion(
        id=question.id,
        question=question.question,
        type=question.type,
        priority=question.priority,
        options=split_feedback_question_options(question.options),
    )


def decode_form(form: FeedbackFormRecord, questions: Iterable[FeedbackQuestionRecord]) -> DecodedForm:
    """Attach decoded questions to a form, priority descending.

    The sort is stable, so equal priorities keep their input order.
    """
    decoded = [decode_question(q) for q in questions]
    return DecodedForm(
        id=form.id,
        name=form.name,
        priority=form.priority,
        questions=sorted(decoded, key=lambda q: q.priority, reverse=True),
    )


def group_questions_by_form(
    questions: Iterable[FeedbackQuestionRecord],
) -> dict[int, list[FeedbackQuestionRecord]]:
    by_form: dict[int, list[FeedbackQuestionRecord]] = defaultdict(list)
    for question in questions:
        by_form[question.form_id].append(question)
    return by_form


def group_results_by_user_and_form(
    results: Iterable[FeedbackResultRecord],
) -> dict[tuple[str, int], list[FeedbackResultRecord]]:
    """Group answer rows by ``(user_id, form_id)`` in first-seen order."""
    groups: dict[tuple[str, int], list[FeedbackResultRecord]] = {}
    for result in results:
        groups.setdefault((result.user_id, result.form_id), []).append(result)
    return groups


def aggregate_feedback_results(
    results: Iterable[FeedbackResultRecord],
    forms: Iterable[FeedbackFormRecord],
    questions: Iterable[FeedbackQuestionRecord],
) -> list[FeedbackReport]:
    """Build the feedback report.

    One entry per (user, form) pair that has answers, ordered by form
    priority descending; entries with equal priority keep the order in
    which their first answer was scanned. Answers are ordered by question
    priority descending. Answers whose form no longer exists, or whose
    question does not belong to the form, are left out.
    """
    questions_by_form = group_questions_by_form(questions)
    forms_by_id = {
        form.id: decode_form(form, questions_by_form.get(form.id, [])) for form in forms
    }

    reports = []
    for (user_id, form_id), rows in group_results_by_user_and_form(results).items():
        form = forms_by_id.get(form_id)
        if form is None:
            logger.debug("Skipping answers for unknown form", form_id=form_id, rows=len(rows))
            continue

        questions_by_id = {question.id: question for question in form.questions}

        answers = []
        for row in rows:
            question = questions_by_id.get(row.question_id)
            if question is None:
                logger.debug(
                    "Skipping answer for question outside its form",
                    form_id=form_id,
                    question_id=row.question_id,
                )
                continue
            answers.append(ReportAnswer(question=question, answer=row.answer))

        reports.append(
            FeedbackReport(
                form=form,
                answers=sorted(answers, key=lambda a: a.question.priority, reverse=True),
                user_email=user_id,
            )
        )

    return sorted(reports, key=lambda r: r.form.priority, reverse=True)
