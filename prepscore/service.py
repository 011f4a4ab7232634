"""Application service orchestrating repositories and pure scoring."""

import logging
from typing import Dict, Optional

from .assembler import build_score_input
from .errors import HistoryUnavailableError
from .models import ReadinessResult, ScoreInput
from .ports import AttemptRepository
from .scoring import compute_readiness, readiness_level

logger = logging.getLogger(__name__)


class ReadinessService:
    """Facade service that exposes readiness methods independent of web frameworks."""

    def __init__(self, repo: AttemptRepository):
        self.repo = repo

    def get_score_input(self, user_id: str, quiz_id: str) -> ScoreInput:
        try:
            attempts = self.repo.fetch_attempts(user_id, quiz_id)
            bank_size = self.repo.fetch_bank_size(quiz_id)
        except HistoryUnavailableError as exc:
            if exc.user_id == user_id and exc.quiz_id == quiz_id:
                raise
            raise HistoryUnavailableError(user_id, quiz_id, reason=exc.reason) from exc
        except Exception as exc:
            logger.warning("Fetching history failed for user=%s quiz=%s: %s", user_id, quiz_id, exc)
            raise HistoryUnavailableError(user_id, quiz_id, reason=str(exc)) from exc

        score_input = build_score_input(attempts, bank_size)
        logger.debug(
            "Assembled %d answers from %d attempts for user=%s quiz=%s (bank_size=%s)",
            len(score_input.answers),
            len(attempts),
            user_id,
            quiz_id,
            bank_size,
        )
        return score_input

    def get_readiness(self, user_id: str, quiz_id: str, now_ms: Optional[int] = None) -> ReadinessResult:
        return compute_readiness(self.get_score_input(user_id, quiz_id), now_ms=now_ms)

    def get_readiness_report(self, user_id: str, quiz_id: str, now_ms: Optional[int] = None) -> Dict:
        result = self.get_readiness(user_id, quiz_id, now_ms=now_ms)
        report = result.to_dict()
        report.update(readiness_level(result.score).to_dict())
        return report
