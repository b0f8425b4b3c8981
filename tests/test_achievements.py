"""Tests for core achievement logic."""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from workjournal.core.achievements import (
    Achievement,
    CorruptCollection,
    ValidationError,
    decode_collection,
    encode_collection,
    format_date,
    format_timestamp,
    group_by_date,
    new_id,
    parse_date,
    validate_task,
)


@pytest.fixture
def moment():
    return datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)


def make(id, day="2024-03-01", task="Did a thing", **kwargs):
    return Achievement(id=id, date=day, task=task, created_at="2024-03-01T09:30:15.123Z", **kwargs)


class TestAchievement:
    def test_to_dict_uses_persisted_field_names(self):
        record = make("1", metric="40%", impact="fewer pages").to_dict()
        assert record == {
            "id": "1",
            "date": "2024-03-01",
            "task": "Did a thing",
            "metric": "40%",
            "impact": "fewer pages",
            "createdAt": "2024-03-01T09:30:15.123Z",
        }

    def test_from_dict_defaults_optional_fields(self):
        achievement = Achievement.from_dict(
            {"id": "1", "date": "2024-03-01", "task": "t", "createdAt": "x"}
        )
        assert achievement.metric == ""
        assert achievement.impact == ""
        assert achievement.created_at == "x"

    def test_from_dict_reads_null_optional_fields_as_empty(self):
        achievement = Achievement.from_dict(
            {"id": "1", "date": "2024-03-01", "task": "t", "metric": None, "impact": None, "createdAt": "x"}
        )
        assert achievement.metric == ""
        assert achievement.impact == ""

    def test_from_dict_requires_task(self):
        with pytest.raises(ValueError, match="task"):
            Achievement.from_dict({"id": "1", "date": "2024-03-01", "createdAt": "x"})

    def test_from_dict_rejects_non_string_fields(self):
        with pytest.raises(ValueError, match="id"):
            Achievement.from_dict({"id": 1, "date": "2024-03-01", "task": "t", "createdAt": "x"})

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            Achievement.from_dict(["not", "a", "record"])


class TestValidation:
    def test_trims_task(self):
        assert validate_task("  Shipped feature X \n") == "Shipped feature X"

    @pytest.mark.parametrize("task", ["", "   ", "\n\t", None])
    def test_rejects_blank_task(self, task):
        with pytest.raises(ValidationError):
            validate_task(task)

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)

    def test_parse_date_accepts_date(self):
        assert parse_date(date(2024, 3, 1)) == "2024-03-01"

    def test_parse_date_normalizes_string(self):
        assert parse_date(" 2024-03-01 ") == "2024-03-01"

    @pytest.mark.parametrize("value", ["2024-13-01", "yesterday", "", 20240301])
    def test_parse_date_rejects_garbage(self, value):
        with pytest.raises(ValidationError):
            parse_date(value)


class TestFormatting:
    def test_format_date_zero_pads(self):
        assert format_date(date(2024, 3, 1)) == "2024-03-01"

    def test_format_timestamp_is_utc_with_milliseconds(self, moment):
        assert format_timestamp(moment) == "2024-03-01T09:30:15.123Z"

    def test_format_timestamp_converts_offsets(self):
        plus_nine = timezone(timedelta(hours=9))
        moment = datetime(2024, 3, 1, 18, 0, tzinfo=plus_nine)
        assert format_timestamp(moment) == "2024-03-01T09:00:00.000Z"


class TestNewId:
    def test_prefixed_with_epoch_millis(self, moment):
        millis = int(moment.timestamp() * 1000)
        assert new_id(moment).startswith(f"{millis}-")

    def test_unique_within_same_millisecond(self, moment):
        ids = {new_id(moment) for _ in range(500)}
        assert len(ids) == 500


class TestCollectionCodec:
    def test_encode_preserves_order(self):
        raw = encode_collection([make("2"), make("1")])
        assert [r["id"] for r in json.loads(raw)] == ["2", "1"]

    def test_encode_keeps_non_ascii_readable(self):
        raw = encode_collection([make("1", task="배포 완료")])
        assert "배포 완료" in raw.decode("utf-8")

    def test_decode(self):
        raw = json.dumps([make("1").to_dict()]).encode()
        assert decode_collection(raw) == [make("1")]

    def test_decode_empty_array(self):
        assert decode_collection(b"[]") == []

    @pytest.mark.parametrize(
        "raw",
        [
            b"{not json",
            b"\xff\xfe\x00",
            b'{"id": "1"}',
            b'"a string"',
            b"null",
            b'[{"id": "1"}]',
            b"[1, 2, 3]",
        ],
    )
    def test_decode_rejects_bad_shapes(self, raw):
        with pytest.raises(CorruptCollection):
            decode_collection(raw)


class TestGroupByDate:
    def test_newest_date_first_and_order_within_section_kept(self):
        achievements = [
            make("4", day="2024-03-02"),
            make("3", day="2024-03-01"),
            make("2", day="2024-03-03"),
            make("1", day="2024-03-01"),
        ]

        sections = group_by_date(achievements)

        assert [d for d, _ in sections] == ["2024-03-03", "2024-03-02", "2024-03-01"]
        assert [a.id for a in sections[2][1]] == ["3", "1"]

    def test_empty(self):
        assert group_by_date([]) == []
