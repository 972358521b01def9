"""
Option Codec for choice questions.

Options are stored as a single string of ``value=text`` pairs joined by
``|``, e.g. ``"1=Yes|2=No"``. Only the first ``=`` of a pair separates the
value from the text, so texts may contain ``=`` but not ``|``.
"""

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .constants import OPTIONS_SPLIT_CHAR, OPTIONS_VALUE_SPLIT_CHAR

_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class FeedbackQuestionOption:
    value: int
    text: str


def to_integer(value: str | int | float | None) -> int:
    """Best-effort integer conversion.

    Numeric strings are truncated toward zero (``"2.7"`` -> 2). Only plain
    ASCII decimal notation counts as numeric, so ``"1_0"`` or non-Latin
    digits become 0, as does anything that is not a finite number.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    stripped = value.strip()
    if not _NUMERIC_RE.fullmatch(stripped):
        return 0
    if stripped.lstrip("+-").isdigit():
        return int(stripped)
    number = float(stripped)
    return int(number) if math.isfinite(number) else 0


def split_feedback_question_options(options: str) -> list[FeedbackQuestionOption]:
    """Decode an options string into its ordered list of options."""
    if not options:
        return []

    decoded = []
    for option_value in options.split(OPTIONS_SPLIT_CHAR):
        number_value, _, text_value = option_value.partition(OPTIONS_VALUE_SPLIT_CHAR)
        decoded.append(FeedbackQuestionOption(value=to_integer(number_value), text=text_value))
    return decoded


def join_feedback_question_options(options: Iterable[FeedbackQuestionOption]) -> str:
    """Encode options as ``value=text`` pairs joined by ``|``."""
    return OPTIONS_SPLIT_CHAR.join(
        f"{option.value}{OPTIONS_VALUE_SPLIT_CHAR}{option.text}" for option in options
    )
