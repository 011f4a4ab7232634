"""SQLAlchemy repository adapter for PrepScore."""

import logging
from typing import Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..assembler import parse_datetime
from ..config import Settings
from ..errors import HistoryUnavailableError
from ..models import AttemptRecord

logger = logging.getLogger(__name__)


class SQLAlchemyAttemptRepository:
    """Fetches quiz attempts and bank sizes from relational tables."""

    def __init__(self, db: Session):
        self.db = db

    def fetch_attempts(self, user_id: str, quiz_id: str) -> Sequence[AttemptRecord]:
        try:
            rows = self.db.execute(
                text(
                    """
                    SELECT id, answers, created_at
                    FROM quiz_attempts
                    WHERE user_id = :user_id AND quiz_id = :quiz_id
                    ORDER BY created_at
                    """
                ),
                {"user_id": user_id, "quiz_id": quiz_id},
            ).fetchall()
        except SQLAlchemyError as exc:
            logger.error("quiz_attempts query failed for user=%s quiz=%s: %s", user_id, quiz_id, exc)
            raise HistoryUnavailableError(user_id, quiz_id, reason="quiz_attempts query failed") from exc

        result: list[AttemptRecord] = []
        for row in rows:
            created_at = parse_datetime(row.created_at)
            if created_at is None:
                logger.warning("Skipping attempt %s with unreadable created_at %r", row.id, row.created_at)
                continue
            result.append(
                AttemptRecord(
                    attempt_id=str(row.id),
                    created_at=created_at,
                    answers=row.answers,
                )
            )
        return result

    def fetch_bank_size(self, quiz_id: str) -> Optional[int]:
        try:
            row = self.db.execute(
                text("SELECT total_questions FROM quizzes WHERE id = :quiz_id"),
                {"quiz_id": quiz_id},
            ).first()
        except SQLAlchemyError as exc:
            logger.error("quizzes query failed for quiz=%s: %s", quiz_id, exc)
            raise HistoryUnavailableError(quiz_id=quiz_id, reason="quizzes query failed") from exc

        if row is None or row.total_questions is None:
            return None
        try:
            return int(row.total_questions)
        except (TypeError, ValueError):
            return None


def create_session_factory(settings: Settings) -> sessionmaker:
    engine = create_engine(settings.database_url, echo=settings.echo_sql)
    return sessionmaker(bind=engine)
