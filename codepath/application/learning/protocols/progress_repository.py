from typing import Protocol

from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.learning.entities.progress_record import ProgressRecord


class ProgressRepositoryProtocol(Protocol):
    def find(self, user_id: UserId, language: str) -> ProgressRecord | None: ...

    def save(self, user_id: UserId, record: ProgressRecord) -> ProgressRecord:
        """
        Insert a new record or compare-and-swap an existing one on its version.

        Raises:
            ConcurrentUpdateError: If the stored version moved since the record was read
        """
        ...
