"""PrepScore - readiness scoring for quiz and exam preparation."""

from .assembler import build_score_input, flatten_attempts, normalize_answer
from .errors import HistoryUnavailableError, PrepScoreError, UnknownMetricError
from .explainer import METRIC_NAMES, explain_metric, list_metrics
from .models import AnswerEvent, AttemptRecord, ReadinessLevel, ReadinessResult, ScoreInput
from .scoring import compute_readiness, empty_readiness_result, readiness_level
from .service import ReadinessService

__all__ = [
    "ReadinessService",
    "compute_readiness",
    "empty_readiness_result",
    "readiness_level",
    "build_score_input",
    "flatten_attempts",
    "normalize_answer",
    "explain_metric",
    "list_metrics",
    "METRIC_NAMES",
    "AnswerEvent",
    "AttemptRecord",
    "ReadinessLevel",
    "ReadinessResult",
    "ScoreInput",
    "PrepScoreError",
    "HistoryUnavailableError",
    "UnknownMetricError",
]

__version__ = "0.1.0"
