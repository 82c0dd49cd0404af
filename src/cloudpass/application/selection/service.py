"""
Practice Session Service — Application layer orchestrator.

Coordinates loading a domain pool, fetching the mastery snapshot once, and
running the adaptive selector over both.
"""

import logging
import random

from cloudpass.application.scoring import select_exam_questions
from cloudpass.domain.practice.models import MasteryStats, Question, SelectionResult
from cloudpass.domain.practice.ports import MasteryStore, MasteryStoreError, QuestionBank

from .selector import AdaptiveSelector, partition_pool

logger = logging.getLogger(__name__)


class PracticeSessionService:
    """
    Application service for starting practice sessions.

    Follows Dependency Inversion: depends on the QuestionBank and MasteryStore
    abstractions, not concrete adapter implementations.
    """

    def __init__(
        self,
        question_bank: QuestionBank,
        mastery_store: MasteryStore,
        selector: AdaptiveSelector | None = None,
        rng: random.Random | None = None,
    ):
        """
        Args:
            question_bank: The port for loading domain questions.
            mastery_store: The port for fetching mastery snapshots.
            selector: Optional custom selector; uses default if not provided.
            rng: Random source for mock exam sampling.
        """
        self._bank = question_bank
        self._store = mastery_store
        self._selector = selector or AdaptiveSelector()
        self._rng = rng or random.Random()

    async def start_session(
        self,
        domain_id: int,
        count: int,
        user_id: str | None = None,
    ) -> SelectionResult:
        """
        Select the questions for a new practice session.

        Guests get a plain random sample. If the mastery snapshot can't be
        fetched, the session degrades to the guest path instead of failing.

        Raises:
            QuestionBankError: If the domain's questions can't be loaded.
        """
        pool = await self._bank.load_domain(domain_id)

        if user_id is None:
            return self._selector.select_questions(pool, count)

        try:
            snapshot = await self._store.fetch_snapshot(user_id)
        except MasteryStoreError as e:
            logger.warning(f"Mastery snapshot unavailable for {user_id}, using random order: {e}")
            return self._selector.select_questions(pool, count)

        return self._selector.select_questions(pool, count, snapshot)

    async def domain_stats(self, domain_id: int, user_id: str) -> MasteryStats:
        """
        Count the user's new/learning/struggling/mastered questions in a domain.
        """
        pool = await self._bank.load_domain(domain_id)
        snapshot = await self._store.fetch_snapshot(user_id)
        return partition_pool(pool, snapshot, self._selector.new_question_weight).stats

    async def mock_exam(self) -> list[Question]:
        """
        Build a full mock exam following the domain blueprint.
        """
        questions = await self._bank.load_all()
        return select_exam_questions(questions, self._rng)
