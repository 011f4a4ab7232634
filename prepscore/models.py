"""Core domain models used by the readiness engine."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from math import isfinite
from typing import Any, Dict, Mapping, Optional, Sequence


@dataclass(frozen=True)
class AnswerEvent:
    """A single historical response to a question."""

    question_id: str
    is_correct: bool
    timestamp_ms: int

    def to_dict(self) -> Dict:
        return {
            "questionId": self.question_id,
            "isCorrect": self.is_correct,
            "timestampMs": self.timestamp_ms,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnswerEvent":
        if not isinstance(data, Mapping):
            raise ValueError("answer must be an object")
        question_id = data.get("questionId")
        if isinstance(question_id, bool) or not isinstance(question_id, (str, int)) or str(question_id) == "":
            raise ValueError("answer needs a string or integer questionId")
        is_correct = data.get("isCorrect", False)
        if not isinstance(is_correct, bool):
            raise ValueError(f"answer {question_id!r} has a non-boolean isCorrect")
        timestamp_ms = data.get("timestampMs")
        if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)) or not isfinite(timestamp_ms):
            raise ValueError(f"answer {question_id!r} has no numeric timestampMs")
        return cls(
            question_id=str(question_id),
            is_correct=is_correct,
            timestamp_ms=int(timestamp_ms),
        )


@dataclass(frozen=True)
class ScoreInput:
    """Everything the engine needs for one computation."""

    answers: Sequence[AnswerEvent] = field(default_factory=tuple)
    bank_size: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            "answers": [answer.to_dict() for answer in self.answers],
            "bankSize": self.bank_size,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScoreInput":
        if not isinstance(data, Mapping):
            raise ValueError("score input must be an object")
        raw_answers = data.get("answers", [])
        if not isinstance(raw_answers, list):
            raise ValueError("answers must be a list")
        bank_size = data.get("bankSize")
        if isinstance(bank_size, bool) or not isinstance(bank_size, (int, float)) or not isfinite(bank_size):
            bank_size = None
        return cls(
            answers=tuple(AnswerEvent.from_dict(raw) for raw in raw_answers),
            bank_size=int(bank_size) if bank_size is not None else None,
        )


@dataclass(frozen=True)
class ReadinessResult:
    """Readiness score together with every sub-metric that produced it."""

    score: int
    volume_score: float
    accuracy_score: float
    recency_score: float
    coverage_score: float
    reliability: float
    unique_questions: int
    unique_correct: int
    total_answers: int

    def to_dict(self) -> Dict:
        return {
            "score": self.score,
            "volumeScore": self.volume_score,
            "accuracyScore": self.accuracy_score,
            "recencyScore": self.recency_score,
            "coverageScore": self.coverage_score,
            "reliability": self.reliability,
            "uniqueQuestions": self.unique_questions,
            "uniqueCorrect": self.unique_correct,
            "totalAnswers": self.total_answers,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReadinessResult":
        return cls(
            score=int(data["score"]),
            volume_score=float(data["volumeScore"]),
            accuracy_score=float(data["accuracyScore"]),
            recency_score=float(data["recencyScore"]),
            coverage_score=float(data["coverageScore"]),
            reliability=float(data["reliability"]),
            unique_questions=int(data["uniqueQuestions"]),
            unique_correct=int(data["uniqueCorrect"]),
            total_answers=int(data["totalAnswers"]),
        )


@dataclass(frozen=True)
class AttemptRecord:
    """A persisted quiz attempt with its raw, loosely shaped answer payload."""

    attempt_id: str
    created_at: datetime
    answers: Any


@dataclass(frozen=True)
class ReadinessLevel:
    """Coarse badge derived from the score for display."""

    level: str
    label: str

    def to_dict(self) -> Dict:
        return asdict(self)
