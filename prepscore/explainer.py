"""Human-readable descriptions of the readiness sub-metrics."""

from dataclasses import asdict, dataclass
from typing import Dict, List

from .errors import UnknownMetricError


@dataclass(frozen=True)
class MetricDetail:
    key: str
    label: str
    weight: str
    description: str
    insight: str
    tip: str

    def to_dict(self) -> Dict:
        return asdict(self)


METRIC_NAMES = ("volume", "accuracy", "recency", "coverage", "reliability")

METRIC_DETAILS: Dict[str, MetricDetail] = {
    "volume": MetricDetail(
        key="volume",
        label="Volume",
        weight="45%",
        description="How many distinct questions of the bank you have answered correctly at least once.",
        insight=(
            "The main factor. Early correct answers count more than later ones, and answering the "
            "same question again does not add volume."
        ),
        tip="Keep going past the first few hundred questions; the estimate firms up as volume grows.",
    ),
    "accuracy": MetricDetail(
        key="accuracy",
        label="Accuracy",
        weight="30%",
        description="Share of correct answers, with recent answers weighing more than old ones.",
        insight=(
            "Answers lose weight as they age, so your current level matters more than how you "
            "performed months ago."
        ),
        tip="Read each question carefully instead of rushing; steady accuracy above 85% is the goal.",
    ),
    "recency": MetricDetail(
        key="recency",
        label="Recency",
        weight="15%",
        description="How recently you last practised.",
        insight="Drops linearly to zero after 30 days without any answer.",
        tip="Fifteen minutes every day beats four hours once a week.",
    ),
    "coverage": MetricDetail(
        key="coverage",
        label="Coverage",
        weight="10%",
        description="How much of the question bank you have explored, and how little you repeat yourself.",
        insight=(
            "Half of it is the share of the bank you have seen, half is distinct questions over "
            "total answers. Grinding the same subset lowers it."
        ),
        tip="Favour questions you have never seen to raise this quickly.",
    ),
    "reliability": MetricDetail(
        key="reliability",
        label="Reliability",
        weight="multiplier",
        description="How confident the system is that your score reflects your real level.",
        insight=(
            "Stays at zero until you have attempted more than 50 distinct questions, then grows "
            "linearly to full confidence at 300. It multiplies the whole score."
        ),
        tip="Until reliability is full, your score is capped; attempt more distinct questions.",
    ),
}


def explain_metric(name: str) -> MetricDetail:
    try:
        return METRIC_DETAILS[name]
    except KeyError:
        raise UnknownMetricError(f"unknown metric {name!r}; expected one of {', '.join(METRIC_NAMES)}") from None


def list_metrics() -> List[MetricDetail]:
    """Return every metric detail in display order."""
    return [METRIC_DETAILS[name] for name in METRIC_NAMES]
