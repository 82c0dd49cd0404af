# Application Selection Package
from cloudpass.domain.practice.models import build_snapshot

from .selector import (
    AdaptiveSelector,
    fisher_yates_shuffle,
    novelty_priority_holds,
    partition_pool,
    weighted_draw,
)
from .service import PracticeSessionService

__all__ = [
    "AdaptiveSelector",
    "PracticeSessionService",
    "build_snapshot",
    "fisher_yates_shuffle",
    "novelty_priority_holds",
    "partition_pool",
    "weighted_draw",
]
