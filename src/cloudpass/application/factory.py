"""
Collaborator Factory
Centralizes construction of the selector and its adapters from config.
"""

import random

from cloudpass.application.config import AppConfig
from cloudpass.application.selection import AdaptiveSelector, PracticeSessionService
from cloudpass.domain.practice.ports import MasteryStore, QuestionBank
from cloudpass.infrastructure.adapters.file_question_bank import FileQuestionBank
from cloudpass.infrastructure.adapters.json_mastery_store import JsonMasteryStore


def get_rng(config: AppConfig) -> random.Random:
    """
    Returns the random source for a session; seeded when config.seed is set.
    """
    return random.Random(config.seed)


def get_question_bank(config: AppConfig) -> QuestionBank:
    return FileQuestionBank(root=config.question_bank_dir)


def get_mastery_store(config: AppConfig) -> MasteryStore:
    return JsonMasteryStore(path=config.mastery_store_path)


def get_selector(config: AppConfig, rng: random.Random | None = None) -> AdaptiveSelector:
    return AdaptiveSelector(
        rng=rng or get_rng(config),
        new_question_weight=config.new_question_weight,
    )


def get_practice_service(config: AppConfig) -> PracticeSessionService:
    """
    Wires a PracticeSessionService whose selector and exam sampler share one random source.
    """
    rng = get_rng(config)
    return PracticeSessionService(
        question_bank=get_question_bank(config),
        mastery_store=get_mastery_store(config),
        selector=get_selector(config, rng),
        rng=rng,
    )
