"""
JSON Mastery Store — Infrastructure adapter for a file-backed mastery table.

Implements MasteryStore by reading rows of the mastery table from a JSON list.
Rows are written by the grading workflow; this adapter only reads them.
"""

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from cloudpass.domain.practice.models import MasteryRecord, build_snapshot
from cloudpass.domain.practice.ports import MasteryStore, MasteryStoreError

logger = logging.getLogger(__name__)


def record_from_row(row: dict[str, Any]) -> MasteryRecord:
    """
    Build a MasteryRecord from a stored row.

    A row in its exclusion window always reads as backfill-only (weight None).
    """
    last_seen = row.get("last_seen_at")
    weight = row.get("weight")
    in_window = bool(row.get("in_exclusion_window", False))

    if weight is not None:
        weight = float(weight)
        if weight < 0:
            raise ValueError(f"negative weight {weight}")

    return MasteryRecord(
        question_id=str(row["question_id"]),
        correct_streak=int(row.get("correct_streak") or 0),
        last_was_wrong=bool(row.get("last_was_wrong", False)),
        last_seen_at=datetime.fromisoformat(last_seen) if last_seen else None,
        is_mastered=bool(row.get("is_mastered", False)),
        in_exclusion_window=in_window,
        weight=None if in_window else weight,
    )


class JsonMasteryStore(MasteryStore):
    """
    Reads mastery rows from a JSON file.

    A missing file means nobody has answered anything yet.
    """

    def __init__(self, path: Path):
        self.path = path

    def _read_rows(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            rows = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MasteryStoreError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(rows, list):
            raise MasteryStoreError(f"{self.path} must contain a list of mastery rows")
        return rows

    async def fetch_snapshot(self, user_id: str) -> Mapping[str, MasteryRecord]:
        records: list[MasteryRecord] = []

        for row in self._read_rows():
            if not isinstance(row, dict) or row.get("user_id") != user_id:
                continue
            try:
                records.append(record_from_row(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping mastery row {row.get('question_id')!r}: {e}")

        logger.debug(f"Fetched {len(records)} mastery records for {user_id}")
        return build_snapshot(records)
