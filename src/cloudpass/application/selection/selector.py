"""
Adaptive question selector.

Picks the questions for a practice session by:
1. Splitting the domain pool into an active (weighted) pool and a backfill pool
2. Drawing from the active pool by weight, without replacement
3. Filling any remaining slots with the least-recently-seen backfill questions
4. Shuffling the assembled list so backfill items don't cluster at the end

This is a pure computation module with no I/O. The random source is injected.
"""

import logging
import random
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import TypeVar

from cloudpass.domain.constants import LEARNING_STREAK_MAX, NEW_QUESTION_WEIGHT
from cloudpass.domain.practice.models import (
    BackfillCandidate,
    MasteryRecord,
    MasteryStats,
    PoolPartition,
    Question,
    SelectionRequest,
    SelectionResult,
    WeightedCandidate,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NEVER_SEEN = datetime.min.replace(tzinfo=timezone.utc)


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """
    Return a uniformly shuffled copy of `items`.

    Walks from the last index down to 1, swapping each element with a
    uniformly chosen element at an index <= its own.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def weighted_draw(
    candidates: Sequence[WeightedCandidate],
    count: int,
    rng: random.Random,
) -> list[Question]:
    """
    Draw up to `count` questions proportionally to weight, without replacement.
    """
    results: list[Question] = []
    remaining = list(candidates)

    while len(results) < count and remaining:
        total_weight = sum(c.weight for c in remaining)
        rand = rng.random() * total_weight

        # Float drift can leave rand slightly positive after the full walk
        picked = len(remaining) - 1
        for i, candidate in enumerate(remaining):
            rand -= candidate.weight
            if rand <= 0:
                picked = i
                break

        results.append(remaining.pop(picked).question)

    return results


def partition_pool(
    pool: Sequence[Question],
    snapshot: Mapping[str, MasteryRecord],
    new_question_weight: float = NEW_QUESTION_WEIGHT,
) -> PoolPartition:
    """
    Split `pool` into active and backfill candidates and count mastery categories.

    Stats cover the whole pool regardless of what is later selected.
    """
    active: list[WeightedCandidate] = []
    backfill: list[BackfillCandidate] = []
    new = learning = struggling = mastered = 0

    for question in pool:
        record = snapshot.get(question.id)

        if record is None:
            active.append(WeightedCandidate(question, new_question_weight))
            new += 1
            continue

        if record.is_mastered:
            mastered += 1

        if record.weight is None:
            backfill.append(BackfillCandidate(question, record.last_seen_at))
            continue

        if record.last_was_wrong:
            struggling += 1
        elif 1 <= record.correct_streak < LEARNING_STREAK_MAX:
            learning += 1

        active.append(WeightedCandidate(question, record.weight))

    backfill.sort(key=lambda b: _seen_key(b.last_seen_at))

    return PoolPartition(
        active=active,
        backfill=backfill,
        stats=MasteryStats(
            new=new, learning=learning, struggling=struggling, mastered=mastered
        ),
    )


def novelty_priority_holds(
    snapshot: Mapping[str, MasteryRecord],
    new_question_weight: float = NEW_QUESTION_WEIGHT,
) -> bool:
    """
    Check that unseen questions still outweigh every stored weight.

    If the store's weight scale grows past the synthetic new-question weight,
    attempted questions start beating novel ones.
    """
    weights = [r.weight for r in snapshot.values() if r.weight is not None]
    return not weights or max(weights) < new_question_weight


def _seen_key(last_seen_at: datetime | None) -> datetime:
    if last_seen_at is None:
        return _NEVER_SEEN
    if last_seen_at.tzinfo is None:
        return last_seen_at.replace(tzinfo=timezone.utc)
    return last_seen_at


def _unique(pool: Iterable[Question]) -> list[Question]:
    seen: set[str] = set()
    unique: list[Question] = []
    for question in pool:
        if question.id in seen:
            continue
        seen.add(question.id)
        unique.append(question)
    return unique


class AdaptiveSelector:
    """
    Selects practice questions biased toward weak and unseen material.

    Stateless apart from the injected random source; every call is independent.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        new_question_weight: float = NEW_QUESTION_WEIGHT,
    ):
        """
        Args:
            rng: Random source shared by the weighted draw and the shuffles.
                Pass a seeded instance for reproducible sessions.
            new_question_weight: Synthetic weight given to never-attempted questions.
        """
        if new_question_weight <= 0:
            raise ValueError("new_question_weight must be positive")
        self._rng = rng or random.Random()
        self.new_question_weight = new_question_weight

    def select_questions(
        self,
        pool: Sequence[Question],
        count: int,
        snapshot: Mapping[str, MasteryRecord] | None = None,
    ) -> SelectionResult:
        """
        Pick up to `count` questions from `pool`.

        Args:
            pool: Every question of the domain being practiced.
            count: Desired session size.
            snapshot: The user's mastery records keyed by question id, or
                None for an unauthenticated caller.

        Returns:
            SelectionResult with at most min(count, len(pool)) distinct questions.
            `stats` is None for unauthenticated callers.
        """
        candidates = _unique(pool)

        if snapshot is None:
            if count <= 0:
                return SelectionResult(questions=[])
            return SelectionResult(
                questions=fisher_yates_shuffle(candidates, self._rng)[:count]
            )

        partition = partition_pool(candidates, snapshot, self.new_question_weight)

        if not novelty_priority_holds(snapshot, self.new_question_weight):
            logger.warning(
                f"Stored mastery weights reach or exceed the new-question weight "
                f"({self.new_question_weight}); unseen questions lose priority"
            )

        if count <= 0:
            return SelectionResult(questions=[], stats=partition.stats)

        selected = weighted_draw(partition.active, count, self._rng)

        needed = count - len(selected)
        if needed > 0 and partition.backfill:
            filler = [b.question for b in partition.backfill[:needed]]
            logger.debug(f"Backfilled {len(filler)} excluded question(s)")
            selected.extend(filler)

        logger.debug(
            f"Selected {len(selected)}/{count} from {len(partition.active)} active, "
            f"{len(partition.backfill)} backfill"
        )

        return SelectionResult(
            questions=fisher_yates_shuffle(selected, self._rng),
            stats=partition.stats,
        )

    def select(
        self,
        request: SelectionRequest,
        snapshot: Mapping[str, MasteryRecord] | None = None,
    ) -> SelectionResult:
        """Run a selection described by a SelectionRequest."""
        return self.select_questions(
            request.candidate_questions,
            request.desired_count,
            (snapshot or {}) if request.is_authenticated else None,
        )
