"""
Feedback GraphQL type definitions
"""

from __future__ import annotations

import strawberry

from ...feedback.aggregation import DecodedForm, DecodedQuestion, FeedbackReport, ReportAnswer
from ...feedback.constants import FeedbackQuestionType as FeedbackQuestionTypeEnum
from ...feedback.options import FeedbackQuestionOption as OptionRecord
from .user import User

FeedbackQuestionType = strawberry.enum(
    FeedbackQuestionTypeEnum,
    name="FeedbackQuestionType",
    description="How a question is answered",
)


@strawberry.type
class FeedbackQuestionOption:
    """One choice of a single or multiple answer question."""

    value: int
    text: str

    @classmethod
    def from_record(cls, option: OptionRecord) -> FeedbackQuestionOption:
        return cls(value=option.value, text=option.text)


@strawberry.type
class FeedbackQuestion:
    id: int
    question: str
    type: FeedbackQuestionType
    priority: int
    options: list[FeedbackQuestionOption]

    @classmethod
    def from_decoded(cls, question: DecodedQuestion) -> FeedbackQuestion:
        return cls(
            id=question.id,
            question=question.question,
            type=FeedbackQuestionTypeEnum(question.type),
            priority=question.priority,
            options=[FeedbackQuestionOption.from_record(o) for o in question.options],
        )


@strawberry.type
class FeedbackForm:
    """A named questionnaire; higher priority forms are served first."""

    id: int
    name: str
    priority: int
    questions: list[FeedbackQuestion]

    @classmethod
    def from_decoded(cls, form: DecodedForm) -> FeedbackForm:
        return cls(
            id=form.id,
            name=form.name,
            priority=form.priority,
            questions=[FeedbackQuestion.from_decoded(q) for q in form.questions],
        )


@strawberry.type
class FeedbackAnswer:
    question: FeedbackQuestion
    answer: str

    @classmethod
    def from_report(cls, answer: ReportAnswer) -> FeedbackAnswer:
        return cls(question=FeedbackQuestion.from_decoded(answer.question), answer=answer.answer)


@strawberry.type
class FeedbackResult:
    """Answers of one user to one form."""

    form: FeedbackForm
    answers: list[FeedbackAnswer]
    user: User

    @classmethod
    def from_report(cls, report: FeedbackReport) -> FeedbackResult:
        return cls(
            form=FeedbackForm.from_decoded(report.form),
            answers=[FeedbackAnswer.from_report(a) for a in report.answers],
            user=User(email=report.user_email, role=None),
        )


@strawberry.input
class FeedbackQuestionAnswerInput:
    question: int
    answer: str


@strawberry.input
class FeedbackAnswerInput:
    """Answers to a feedback form; multiple answers join option values with '|'."""

    form: int
    questions: list[FeedbackQuestionAnswerInput]
