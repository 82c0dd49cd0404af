"""
File Question Bank — Infrastructure adapter for on-disk question sets.

Implements QuestionBank by reading one file per domain (domain1.json,
domain2.yaml, ...) from a directory.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml  # type: ignore

from cloudpass.domain.constants import DOMAINS
from cloudpass.domain.practice.models import Question
from cloudpass.domain.practice.ports import QuestionBank, QuestionBankError

logger = logging.getLogger(__name__)

SUFFIXES = (".json", ".yaml", ".yml")


def question_from_dict(data: dict[str, Any], domain_id: int | None = None) -> Question:
    """
    Build a Question from a raw record.

    Accepts the camelCase keys produced by the question parser
    (domainId, isMultiAnswer) as well as snake_case.
    """
    raw_domain = data.get("domainId", data.get("domain_id", domain_id))
    if raw_domain is None:
        raise ValueError(f"Question {data.get('id')!r} has no domain")

    answer = data.get("answer", "")
    is_multi = data.get("isMultiAnswer", data.get("is_multi_answer", isinstance(answer, list)))

    return Question(
        id=str(data["id"]),
        domain_id=int(raw_domain),
        text=data.get("question", data.get("text", "")),
        options={str(k): str(v) for k, v in (data.get("options") or {}).items()},
        answer=list(answer) if isinstance(answer, list) else str(answer),
        explanation=data.get("explanation", ""),
        source=data.get("source", ""),
        is_multi_answer=bool(is_multi),
    )


class FileQuestionBank(QuestionBank):
    """
    Loads questions from `root/domain{N}.{json,yaml,yml}`.

    Files are parsed on every call; the bank holds no cache.
    """

    def __init__(self, root: Path, domains: dict[int, str] | None = None):
        self.root = root
        self.domains = domains or DOMAINS

    def _find_file(self, domain_id: int) -> Path | None:
        for suffix in SUFFIXES:
            path = self.root / f"domain{domain_id}{suffix}"
            if path.exists():
                return path
        return None

    async def load_domain(self, domain_id: int) -> list[Question]:
        if domain_id not in self.domains:
            raise QuestionBankError(f"Unknown domain: {domain_id}")

        path = self._find_file(domain_id)
        if path is None:
            raise QuestionBankError(f"No question file for domain {domain_id} in {self.root}")

        try:
            text = path.read_text(encoding="utf-8")
            raw = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise QuestionBankError(f"Failed to read {path.name}: {e}") from e

        if not isinstance(raw, list):
            raise QuestionBankError(f"{path.name} must contain a list of questions")

        questions: list[Question] = []
        for item in raw:
            if not isinstance(item, dict) or "id" not in item:
                logger.warning(f"Skipping malformed question in {path.name}: {item!r:.80}")
                continue
            try:
                questions.append(question_from_dict(item, domain_id))
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping question {item.get('id')!r} in {path.name}: {e}")

        logger.debug(f"Loaded {len(questions)} questions for domain {domain_id}")
        return questions

    async def load_all(self) -> list[Question]:
        questions: list[Question] = []
        for domain_id in self.domains:
            questions.extend(await self.load_domain(domain_id))
        return questions
