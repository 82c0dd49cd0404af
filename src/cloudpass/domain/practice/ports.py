"""
Ports (interfaces) for the practice collaborators.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from .models import MasteryRecord, Question


class QuestionBankError(Exception):
    """Raised when a domain's questions cannot be loaded."""


class MasteryStoreError(Exception):
    """Raised when a user's mastery snapshot cannot be fetched."""


class QuestionBank(ABC):
    """
    Port for the static question collection, partitioned by domain.

    Implementations:
        - FileQuestionBank: Reads domainN.json / domainN.yaml files from a directory.
    """

    @abstractmethod
    async def load_domain(self, domain_id: int) -> list[Question]:
        """
        Load every question belonging to one domain.

        Raises:
            QuestionBankError: If the domain is unknown or unreadable.
        """
        pass

    @abstractmethod
    async def load_all(self) -> list[Question]:
        """Load the questions of every known domain."""
        pass


class MasteryStore(ABC):
    """
    Port for the persistent per-user, per-question mastery table.

    Implementations:
        - JsonMasteryStore: Reads mastery rows from a JSON file.
    """

    @abstractmethod
    async def fetch_snapshot(self, user_id: str) -> Mapping[str, MasteryRecord]:
        """
        Fetch every mastery record belonging to a user, keyed by question id.

        Returns:
            A read-only mapping. Questions without a record are "new".

        Raises:
            MasteryStoreError: If the store cannot be read.
        """
        pass
