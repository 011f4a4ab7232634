"""Exceptions raised at the edges of the readiness engine."""

from typing import Optional


class PrepScoreError(Exception):
    """Base class for all PrepScore errors."""


class HistoryUnavailableError(PrepScoreError):
    """Answer history could not be fetched, so no score was computed."""

    def __init__(self, user_id: Optional[str] = None, quiz_id: Optional[str] = None, reason: str = ""):
        self.user_id = user_id
        self.quiz_id = quiz_id
        self.reason = reason
        message = f"answer history unavailable for user={user_id!r} quiz={quiz_id!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownMetricError(PrepScoreError, KeyError):
    """Raised when the explainer is asked about a metric it does not know."""

    def __str__(self) -> str:
        return Exception.__str__(self)
