import json
from datetime import datetime, timezone

from prepscore.assembler import (
    build_score_input,
    flatten_attempts,
    normalize_answer,
    parse_answer_payload,
    parse_datetime,
    to_epoch_ms,
)
from prepscore.models import AnswerEvent, AttemptRecord

ATTEMPT_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)
ATTEMPT_MS = 1_767_225_600_000


def test_normalize_answer_accepts_field_name_variants():
    camel = normalize_answer({"questionId": "a", "isCorrect": True}, ATTEMPT_MS)
    snake = normalize_answer({"question_id": 7, "is_correct": False}, ATTEMPT_MS)
    bare = normalize_answer({"id": "c", "correct": 1}, ATTEMPT_MS)

    assert camel == AnswerEvent("a", True, ATTEMPT_MS)
    assert snake == AnswerEvent("7", False, ATTEMPT_MS)
    assert bare == AnswerEvent("c", True, ATTEMPT_MS)


def test_normalize_answer_prefers_per_answer_timestamp():
    numeric = normalize_answer({"questionId": "a", "timestampMs": 123}, ATTEMPT_MS)
    iso = normalize_answer({"questionId": "a", "answered_at": "2026-01-02T00:00:00Z"}, ATTEMPT_MS)
    numeric_text = normalize_answer({"questionId": "a", "timestamp": "1767225600000"}, ATTEMPT_MS)
    garbage = normalize_answer({"questionId": "a", "answeredAt": "yesterday"}, ATTEMPT_MS)

    assert numeric.timestamp_ms == 123
    assert iso.timestamp_ms == ATTEMPT_MS + 86_400_000
    assert numeric_text.timestamp_ms == ATTEMPT_MS
    assert garbage.timestamp_ms == ATTEMPT_MS


def test_normalize_answer_skips_malformed_entries():
    assert normalize_answer("junk", ATTEMPT_MS) is None
    assert normalize_answer(None, ATTEMPT_MS) is None
    assert normalize_answer({}, ATTEMPT_MS) is None
    assert normalize_answer({"questionId": "  "}, ATTEMPT_MS) is None
    assert normalize_answer({"questionId": {"nested": 1}}, ATTEMPT_MS) is None


def test_missing_correctness_counts_as_wrong():
    assert normalize_answer({"questionId": "a"}, ATTEMPT_MS).is_correct is False


def test_parse_answer_payload_handles_json_and_garbage():
    assert parse_answer_payload(json.dumps([{"questionId": "a"}])) == [{"questionId": "a"}]
    assert parse_answer_payload("{not json") == []
    assert parse_answer_payload({"questionId": "a"}) == []
    assert parse_answer_payload(None) == []


def test_flatten_attempts_keeps_real_repeats_and_skips_bad_entries():
    attempts = [
        AttemptRecord(
            attempt_id="1",
            created_at=ATTEMPT_TIME,
            answers=[{"questionId": "a", "isCorrect": False}, "junk", {"isCorrect": True}],
        ),
        AttemptRecord(
            attempt_id="2",
            created_at=datetime(2026, 1, 3),
            answers=json.dumps([{"question_id": "a", "is_correct": True}]),
        ),
        AttemptRecord(attempt_id="3", created_at=ATTEMPT_TIME, answers=None),
    ]

    events = flatten_attempts(attempts)

    assert events == [
        AnswerEvent("a", False, ATTEMPT_MS),
        AnswerEvent("a", True, ATTEMPT_MS + 2 * 86_400_000),
    ]


def test_build_score_input_passes_bank_size_through():
    attempts = [AttemptRecord("1", ATTEMPT_TIME, [{"questionId": "a", "isCorrect": True}])]

    score_input = build_score_input(attempts, 450)

    assert score_input.bank_size == 450
    assert len(score_input.answers) == 1


def test_to_epoch_ms_treats_naive_datetimes_as_utc():
    assert to_epoch_ms(datetime(2026, 1, 1)) == ATTEMPT_MS
    assert to_epoch_ms(ATTEMPT_TIME) == ATTEMPT_MS


def test_parse_datetime_accepts_five_digit_fractions():
    parsed = parse_datetime("2025-12-30T10:00:00.12345+00:00")

    assert parsed == datetime(2025, 12, 30, 10, 0, 0, 123450, tzinfo=timezone.utc)
    assert normalize_answer(
        {"questionId": "a", "answeredAt": "2026-01-01T00:00:00.50000+00:00"}, 0
    ).timestamp_ms == ATTEMPT_MS + 500


def test_stored_correctness_strings_are_read_explicitly():
    assert normalize_answer({"questionId": "a", "isCorrect": "false"}, ATTEMPT_MS).is_correct is False
    assert normalize_answer({"questionId": "a", "isCorrect": "TRUE"}, ATTEMPT_MS).is_correct is True
    assert normalize_answer({"questionId": "a", "is_correct": "0"}, ATTEMPT_MS).is_correct is False
    assert normalize_answer({"questionId": "a", "correct": 0}, ATTEMPT_MS).is_correct is False
    assert normalize_answer({"questionId": "a", "isCorrect": "maybe"}, ATTEMPT_MS) is None
    assert normalize_answer({"questionId": "a", "isCorrect": [True]}, ATTEMPT_MS) is None
