"""Readiness demo: FastAPI backend over the PrepScore engine."""

from datetime import datetime, timedelta, timezone
from random import Random
from typing import List, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt, StrictStr

from prepscore.adapters import SQLAlchemyAttemptRepository, create_session_factory
from prepscore.config import configure_logging, get_settings
from prepscore.errors import HistoryUnavailableError
from prepscore.explainer import list_metrics
from prepscore.models import AnswerEvent, ScoreInput
from prepscore.scoring import compute_readiness, readiness_level
from prepscore.service import ReadinessService

SETTINGS = get_settings()
configure_logging(SETTINGS)
SessionFactory = create_session_factory(SETTINGS)
RNG = Random(42)

app = FastAPI(title="PrepScore Readiness Demo", version="0.1.0")


class AnswerBody(BaseModel):
    questionId: Union[StrictStr, StrictInt]
    isCorrect: StrictBool
    timestampMs: Union[StrictInt, StrictFloat]


class ReadinessRequest(BaseModel):
    answers: List[AnswerBody] = []
    bankSize: Optional[StrictInt] = None


def _build_demo_input() -> ScoreInput:
    now = datetime.now(timezone.utc)
    answers = []
    for idx in range(900):
        answered_at = now - timedelta(hours=idx * 2)
        question = RNG.randrange(1200)
        # Older answers are wrong more often so recency weighting shows.
        is_correct = RNG.random() < (0.8 if idx < 300 else 0.55)
        answers.append(
            AnswerEvent(
                question_id=f"q-{question}",
                is_correct=is_correct,
                timestamp_ms=int(answered_at.timestamp() * 1000),
            )
        )
    return ScoreInput(answers=tuple(answers), bank_size=1200)


DEMO_INPUT = _build_demo_input()


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "demo": "prepscore-readiness"}


@app.get("/api/metrics")
def metrics() -> list:
    return [detail.to_dict() for detail in list_metrics()]


@app.get("/api/demo")
def demo() -> dict:
    result = compute_readiness(DEMO_INPUT)
    return {**result.to_dict(), **readiness_level(result.score).to_dict()}


@app.post("/api/readiness")
def readiness(request: ReadinessRequest, now_ms: Optional[int] = Query(None, alias="nowMs")) -> dict:
    try:
        score_input = ScoreInput.from_dict(request.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return compute_readiness(score_input, now_ms=now_ms).to_dict()


@app.get("/api/users/{user_id}/quizzes/{quiz_id}/readiness")
def stored_readiness(user_id: str, quiz_id: str) -> dict:
    with SessionFactory() as session:
        service = ReadinessService(SQLAlchemyAttemptRepository(session))
        try:
            return service.get_readiness_report(user_id, quiz_id)
        except HistoryUnavailableError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
