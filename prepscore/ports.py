"""Port definitions for fetching answer history from any source."""

from typing import Optional, Protocol, Sequence

from .models import AttemptRecord


class AttemptRepository(Protocol):
    """Repository interface that adapters can implement for any backend."""

    def fetch_attempts(self, user_id: str, quiz_id: str) -> Sequence[AttemptRecord]:
        """Return every persisted attempt of a user on a quiz."""

    def fetch_bank_size(self, quiz_id: str) -> Optional[int]:
        """Return the number of distinct questions in the quiz bank, if known."""
