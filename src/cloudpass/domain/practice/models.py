"""
Domain models for adaptive practice.

These are pure data structures with no I/O or external dependencies.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType


@dataclass(frozen=True)
class Question:
    """
    A single exam question from the question bank.

    Attributes:
        id: Stable identifier used to key mastery records.
        domain_id: Exam domain the question belongs to (1-4).
        text: The question stem.
        options: Answer letters mapped to option text ("A" -> "...").
        answer: Correct letter, or a list of letters for multi-answer questions.
        is_multi_answer: True if more than one option must be selected.
    """

    id: str
    domain_id: int
    text: str
    options: dict[str, str] = field(default_factory=dict)
    answer: str | list[str] = ""
    explanation: str = ""
    source: str = ""
    is_multi_answer: bool = False


@dataclass(frozen=True)
class MasteryRecord:
    """
    A user's performance history for one question.

    Owned by the mastery store and written by the grading workflow; the
    selector only ever reads it.

    Attributes:
        question_id: The question this record describes.
        correct_streak: Consecutive correct answers.
        last_was_wrong: True if the most recent attempt was incorrect.
        last_seen_at: Time of the most recent attempt.
        is_mastered: Mastery flag set by the grading workflow.
        in_exclusion_window: True while a recently mastered question cools off.
        weight: Selection mass. None means "backfill only".
    """

    question_id: str
    correct_streak: int = 0
    last_was_wrong: bool = False
    last_seen_at: datetime | None = None
    is_mastered: bool = False
    in_exclusion_window: bool = False
    weight: float | None = None


@dataclass(frozen=True)
class MasteryStats:
    """Counts of the candidate pool per mastery category."""

    new: int = 0
    learning: int = 0
    struggling: int = 0
    mastered: int = 0

    @property
    def total(self) -> int:
        return self.new + self.learning + self.struggling + self.mastered


@dataclass(frozen=True)
class WeightedCandidate:
    question: Question
    weight: float


@dataclass(frozen=True)
class BackfillCandidate:
    question: Question
    last_seen_at: datetime | None


@dataclass
class PoolPartition:
    """
    Result of splitting a domain pool against a mastery snapshot.

    `backfill` is already ordered least-recently-seen first.
    """

    active: list[WeightedCandidate]
    backfill: list[BackfillCandidate]
    stats: MasteryStats


@dataclass
class SelectionRequest:
    candidate_questions: list[Question]
    desired_count: int
    is_authenticated: bool = False


@dataclass
class SelectionResult:
    """Ordered questions for a session plus the informational stats side channel."""

    questions: list[Question]
    stats: MasteryStats | None = None


def build_snapshot(records: Iterable[MasteryRecord]) -> Mapping[str, MasteryRecord]:
    """
    Key mastery records by question id and freeze the result.

    Later records for the same question replace earlier ones.
    """
    return MappingProxyType({record.question_id: record for record in records})
