"""Pure readiness scoring over answer events."""

import time
from math import exp, floor
from typing import Dict, Iterable, Optional

from .models import AnswerEvent, ReadinessLevel, ReadinessResult, ScoreInput

MS_PER_DAY = 1000 * 60 * 60 * 24

FALLBACK_BANK_SIZE = 1000
VOLUME_REF_RATIO = 0.6
DECAY_TAU_DAYS = 30
RECENCY_WINDOW_DAYS = 30
WEIGHT_EPSILON = 0.0001

MIN_UNIQUE = 50
MAX_UNIQUE = 300

WEIGHTS: Dict[str, float] = {
    "volume": 0.45,
    "accuracy": 0.30,
    "recency": 0.15,
    "coverage": 0.10,
}

HIGH_READINESS_THRESHOLD = 85
MEDIUM_READINESS_THRESHOLD = 50


def compute_readiness(score_input: ScoreInput, now_ms: Optional[int] = None) -> ReadinessResult:
    """
    Convert a user's answer history into a 0-100 readiness score.

    The result combines volume, recency-weighted accuracy, recency and
    coverage, then gates the composite with a reliability factor that stays
    at zero until enough distinct questions have been attempted.

    Args:
        score_input: Answers plus the size of the exam's question bank.
        now_ms: Reference time in epoch milliseconds. Defaults to the wall clock.
    """
    answers = list(score_input.answers)
    if not answers:
        return empty_readiness_result()

    if now_ms is None:
        now_ms = current_time_ms()

    total_answers = len(answers)
    unique_ids = {answer.question_id for answer in answers}
    unique_correct_ids = {answer.question_id for answer in answers if answer.is_correct}
    unique_questions = len(unique_ids)
    unique_correct = len(unique_correct_ids)

    safe_bank_size = _safe_bank_size(score_input.bank_size)

    volume_score = _volume_score(unique_correct, safe_bank_size)
    accuracy_score = _weighted_accuracy(answers, now_ms)
    recency_score = _recency_score(answers, now_ms)
    coverage_score = _coverage_score(unique_questions, total_answers, safe_bank_size)
    reliability = _reliability(unique_questions)

    base_score = (
        WEIGHTS["volume"] * volume_score
        + WEIGHTS["accuracy"] * accuracy_score
        + WEIGHTS["recency"] * recency_score
        + WEIGHTS["coverage"] * coverage_score
    )
    # Reliability gates the whole composite once, after weighting.
    final_score = clamp(base_score, 0.0, 1.0) * reliability
    score = _round_half_up(100 * clamp(final_score, 0.0, 1.0))

    return ReadinessResult(
        score=score,
        volume_score=volume_score,
        accuracy_score=accuracy_score,
        recency_score=recency_score,
        coverage_score=coverage_score,
        reliability=reliability,
        unique_questions=unique_questions,
        unique_correct=unique_correct,
        total_answers=total_answers,
    )


def empty_readiness_result() -> ReadinessResult:
    """Return the result for a user with no answer history."""
    return ReadinessResult(
        score=0,
        volume_score=0.0,
        accuracy_score=0.0,
        recency_score=0.0,
        coverage_score=0.0,
        reliability=0.0,
        unique_questions=0,
        unique_correct=0,
        total_answers=0,
    )


def readiness_level(score: float) -> ReadinessLevel:
    """Map a readiness score to the badge shown next to it."""
    if score >= HIGH_READINESS_THRESHOLD:
        return ReadinessLevel(level="high", label="Ready")
    if score >= MEDIUM_READINESS_THRESHOLD:
        return ReadinessLevel(level="medium", label="On track")
    return ReadinessLevel(level="low", label="Needs work")


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def current_time_ms() -> int:
    return int(time.time() * 1000)


def _safe_bank_size(bank_size: Optional[int]) -> int:
    if bank_size is None or bank_size <= 0:
        return FALLBACK_BANK_SIZE
    return bank_size


def _volume_score(unique_correct: int, safe_bank_size: int) -> float:
    volume_ref = VOLUME_REF_RATIO * safe_bank_size
    volume_raw = unique_correct / volume_ref
    return clamp(1 - exp(-volume_raw), 0.0, 1.0)


def _weighted_accuracy(answers: Iterable[AnswerEvent], now_ms: int) -> float:
    weighted_total = 0.0
    weighted_correct = 0.0
    for answer in answers:
        age_days = max(0.0, (now_ms - answer.timestamp_ms) / MS_PER_DAY)
        weight = exp(-age_days / DECAY_TAU_DAYS)
        weighted_total += weight
        if answer.is_correct:
            weighted_correct += weight

    if weighted_total <= WEIGHT_EPSILON:
        return 0.0
    return clamp(weighted_correct / weighted_total, 0.0, 1.0)


def _recency_score(answers: Iterable[AnswerEvent], now_ms: int) -> float:
    last_attempt_ms = max(answer.timestamp_ms for answer in answers)
    days_since_last = (now_ms - last_attempt_ms) / MS_PER_DAY
    return 1 - clamp(max(0.0, days_since_last) / RECENCY_WINDOW_DAYS, 0.0, 1.0)


def _coverage_score(unique_questions: int, total_answers: int, safe_bank_size: int) -> float:
    coverage_raw = clamp(unique_questions / safe_bank_size, 0.0, 1.0)
    diversity_raw = clamp(unique_questions / total_answers, 0.0, 1.0) if total_answers > 0 else 0.0
    return 0.5 * coverage_raw + 0.5 * diversity_raw


def _reliability(unique_questions: int) -> float:
    if unique_questions <= MIN_UNIQUE:
        return 0.0
    return clamp((unique_questions - MIN_UNIQUE) / (MAX_UNIQUE - MIN_UNIQUE), 0.0, 1.0)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upwards.
    return int(floor(value + 0.5))
