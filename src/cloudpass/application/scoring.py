"""
Exam scoring and mock exam assembly.

Scores use a fixed linear scale (100-1000, pass at 700). Nothing here adapts
to the learner.
"""

import math
import random
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from cloudpass.domain.constants import (
    EXAM_BLUEPRINT,
    PASSING_SCORE,
    SCALED_SCORE_MAX,
    SCALED_SCORE_MIN,
)
from cloudpass.domain.practice.models import Question


@dataclass(frozen=True)
class AnswerResult:
    domain_id: int
    is_correct: bool


def _round_half_up(x: float) -> int:
    # .5 always rounds up, not to even
    return math.floor(x + 0.5)


def calculate_scaled_score(correct: int, total: int) -> int:
    """
    Map a raw result onto the 100-1000 scaled range.
    """
    if total <= 0:
        return SCALED_SCORE_MIN
    span = SCALED_SCORE_MAX - SCALED_SCORE_MIN
    scaled = _round_half_up(SCALED_SCORE_MIN + (correct / total) * span)
    return min(SCALED_SCORE_MAX, max(SCALED_SCORE_MIN, scaled))


def is_passed(scaled_score: int) -> bool:
    return scaled_score >= PASSING_SCORE


def domain_score(results: Iterable[AnswerResult], domain_id: int) -> int:
    """
    Percentage of correct answers within one domain (0 if none were answered).
    """
    in_domain = [r for r in results if r.domain_id == domain_id]
    if not in_domain:
        return 0
    correct = sum(1 for r in in_domain if r.is_correct)
    return _round_half_up(correct / len(in_domain) * 100)


def calculate_domain_mastery(questions_correct: int, total_in_domain: int) -> int:
    """
    Coverage of a domain as the percentage of its questions answered correctly.
    """
    if total_in_domain <= 0:
        return 0
    return _round_half_up(questions_correct / total_in_domain * 100)


def is_answer_correct(
    user_answer: str | Sequence[str] | None,
    correct_answer: str | Sequence[str],
    is_multi_answer: bool,
) -> bool:
    """
    Check an answer for single and multi-answer questions.

    Multi-answer selections must match exactly, in any order.
    """
    if not is_multi_answer:
        return user_answer == correct_answer

    if isinstance(user_answer, str) or isinstance(correct_answer, str):
        return False
    if user_answer is None or len(user_answer) != len(correct_answer):
        return False
    return sorted(user_answer) == sorted(correct_answer)


def select_exam_questions(
    all_questions: Sequence[Question],
    rng: random.Random,
    blueprint: Mapping[int, int] = EXAM_BLUEPRINT,
) -> list[Question]:
    """
    Sample a mock exam with the blueprint's per-domain question counts.

    Domains with fewer questions than the blueprint asks for contribute all
    of theirs. The combined list is shuffled so domains are interleaved.
    """
    selected: list[Question] = []

    for domain_id, count in blueprint.items():
        domain_qs = [q for q in all_questions if q.domain_id == domain_id]
        selected.extend(rng.sample(domain_qs, min(count, len(domain_qs))))

    rng.shuffle(selected)
    return selected


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS."""
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_duration(seconds: int) -> str:
    """
    Format seconds as a readable duration, e.g. "45 minutes 30 seconds".
    """
    minutes, remaining = divmod(seconds, 60)

    if minutes == 0:
        return _plural(remaining, "second")
    if remaining == 0:
        return _plural(minutes, "minute")
    return f"{_plural(minutes, 'minute')} {_plural(remaining, 'second')}"
