# Domain Practice Package
from .models import (
    BackfillCandidate,
    MasteryRecord,
    MasteryStats,
    PoolPartition,
    Question,
    SelectionRequest,
    SelectionResult,
    WeightedCandidate,
    build_snapshot,
)
from .ports import MasteryStore, MasteryStoreError, QuestionBank, QuestionBankError

__all__ = [
    "Question",
    "MasteryRecord",
    "MasteryStats",
    "WeightedCandidate",
    "BackfillCandidate",
    "PoolPartition",
    "SelectionRequest",
    "SelectionResult",
    "QuestionBank",
    "QuestionBankError",
    "MasteryStore",
    "MasteryStoreError",
    "build_snapshot",
]
