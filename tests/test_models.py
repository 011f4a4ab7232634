import json

import pytest

from prepscore.models import AnswerEvent, ReadinessResult, ScoreInput
from prepscore.scoring import compute_readiness

NOW = 1_767_225_600_000


def test_score_input_from_wire_body():
    body = json.loads(
        '{"answers": [{"questionId": "q1", "isCorrect": true, "timestampMs": 1767225600000},'
        ' {"questionId": 2, "isCorrect": false, "timestampMs": 1767225500000.0}], "bankSize": 900}'
    )

    score_input = ScoreInput.from_dict(body)

    assert score_input.bank_size == 900
    assert score_input.answers == (
        AnswerEvent("q1", True, 1767225600000),
        AnswerEvent("2", False, 1767225500000),
    )


def test_score_input_tolerates_missing_bank_size():
    assert ScoreInput.from_dict({"answers": []}).bank_size is None
    assert ScoreInput.from_dict({"answers": [], "bankSize": "lots"}).bank_size is None


@pytest.mark.parametrize(
    "body",
    [
        [],
        {"answers": "q1"},
        {"answers": [{"isCorrect": True, "timestampMs": 1}]},
        {"answers": [{"questionId": "q1", "timestampMs": "yesterday"}]},
        {"answers": [{"questionId": "q1", "timestampMs": True}]},
        {"answers": [{"questionId": "q1", "isCorrect": "false", "timestampMs": 1}]},
        {"answers": [{"questionId": "q1", "isCorrect": 1, "timestampMs": 1}]},
        {"answers": [{"questionId": {"a": 1}, "isCorrect": True, "timestampMs": 1}]},
        {"answers": [{"questionId": True, "isCorrect": True, "timestampMs": 1}]},
    ],
)
def test_score_input_rejects_malformed_wire_body(body):
    with pytest.raises(ValueError):
        ScoreInput.from_dict(body)


def test_readiness_result_serializes_to_camel_case_json():
    result = compute_readiness(
        ScoreInput(answers=(AnswerEvent("q1", True, NOW),), bank_size=10),
        now_ms=NOW,
    )

    payload = json.loads(json.dumps(result.to_dict()))

    assert sorted(payload) == sorted(
        [
            "score",
            "volumeScore",
            "accuracyScore",
            "recencyScore",
            "coverageScore",
            "reliability",
            "uniqueQuestions",
            "uniqueCorrect",
            "totalAnswers",
        ]
    )
    assert payload["totalAnswers"] == 1
    assert ReadinessResult.from_dict(payload) == result


def test_answer_events_are_immutable():
    event = AnswerEvent("q1", True, NOW)

    with pytest.raises(AttributeError):
        event.is_correct = False
