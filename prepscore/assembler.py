"""Map persisted attempt records onto strict answer events."""

import json
import logging
from datetime import datetime, timezone
from math import isfinite
from typing import Any, Iterable, List, Optional

from dateutil import parser as dateutil_parser

from .models import AnswerEvent, AttemptRecord, ScoreInput

logger = logging.getLogger(__name__)

QUESTION_ID_KEYS = ("questionId", "question_id", "id")
CORRECTNESS_KEYS = ("isCorrect", "is_correct", "correct")
TIMESTAMP_KEYS = ("timestampMs", "timestamp_ms", "answeredAt", "answered_at", "timestamp")
TRUE_STRINGS = ("true", "t", "1", "yes")
FALSE_STRINGS = ("false", "f", "0", "no", "")


def build_score_input(attempts: Iterable[AttemptRecord], bank_size: Optional[int]) -> ScoreInput:
    """Flatten attempts into a ScoreInput for the engine."""
    return ScoreInput(answers=tuple(flatten_attempts(attempts)), bank_size=bank_size)


def flatten_attempts(attempts: Iterable[AttemptRecord]) -> List[AnswerEvent]:
    """
    Produce one AnswerEvent per usable stored answer, in attempt order.

    Answers without a per-answer timestamp inherit the attempt's timestamp.
    Malformed entries are skipped and counted, never raised.
    """
    events: List[AnswerEvent] = []
    skipped = 0
    for attempt in attempts:
        fallback_ms = to_epoch_ms(attempt.created_at)
        for raw in parse_answer_payload(attempt.answers):
            event = normalize_answer(raw, fallback_ms)
            if event is None:
                skipped += 1
                continue
            events.append(event)

    if skipped:
        logger.info("Skipped %d malformed answer entries", skipped)
    return events


def normalize_answer(raw: Any, fallback_timestamp_ms: int) -> Optional[AnswerEvent]:
    """Return a strict AnswerEvent for one stored answer, or None if it is unusable."""
    if not isinstance(raw, dict):
        logger.debug("Skipping non-object answer entry: %r", raw)
        return None

    question_id = _first_present(raw, QUESTION_ID_KEYS)
    if question_id is None or isinstance(question_id, (dict, list, bool)):
        logger.debug("Skipping answer without usable question id: %r", raw)
        return None
    question_id = str(question_id).strip()
    if not question_id:
        return None

    is_correct = _parse_correctness(_first_present(raw, CORRECTNESS_KEYS))
    if is_correct is None:
        logger.debug("Skipping answer with unreadable correctness: %r", raw)
        return None

    timestamp_ms = _parse_timestamp(_first_present(raw, TIMESTAMP_KEYS))
    if timestamp_ms is None:
        timestamp_ms = fallback_timestamp_ms

    return AnswerEvent(
        question_id=question_id,
        is_correct=is_correct,
        timestamp_ms=timestamp_ms,
    )


def parse_answer_payload(raw_answers: Any) -> list:
    if raw_answers is None:
        return []
    if isinstance(raw_answers, str):
        try:
            raw_answers = json.loads(raw_answers)
        except json.JSONDecodeError:
            logger.warning("Discarding answer payload that is not valid JSON")
            return []
    if isinstance(raw_answers, list):
        return raw_answers
    return []


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return dateutil_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        return None


def _parse_timestamp(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            number = None
        if number is not None:
            return int(number) if isfinite(number) else None
    parsed = parse_datetime(value)
    return to_epoch_ms(parsed) if parsed is not None else None


def _parse_correctness(value: Any) -> Optional[bool]:
    # Missing means unanswered, which counts as wrong.
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return None


def _first_present(raw: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None
