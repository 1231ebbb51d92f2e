"""
Tests for the shared data models and display labels.
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from emogo.labels import EMOTION_LABELS, label_for
from emogo.models import (
    Emotion,
    EmotionLog,
    EmotionRecord,
    format_timestamp,
    generate_record_id,
)


class TestEmotionRecord:
    def test_fields(self):
        record = EmotionRecord(id="42", emotion="calm", timestamp="2025-11-23T09:51:54.123Z")
        assert record.emotion is Emotion.CALM
        assert record.model_dump(mode="json") == {
            "id": "42",
            "emotion": "calm",
            "timestamp": "2025-11-23T09:51:54.123Z",
        }

    def test_frozen(self):
        record = EmotionRecord(id="42", emotion="calm", timestamp="2025-11-23T09:51:54.123Z")
        with pytest.raises(ValidationError):
            record.emotion = Emotion.SAD

    def test_created_at_without_offset_is_utc(self):
        record = EmotionRecord(id="1", emotion="sad", timestamp="2025-11-23T09:51:54")
        assert record.created_at == datetime(2025, 11, 23, 9, 51, 54, tzinfo=UTC)

    @pytest.mark.parametrize("timestamp", ["", "today", "2025-13-01T00:00:00Z"])
    def test_invalid_timestamp(self, timestamp):
        with pytest.raises(ValidationError):
            EmotionRecord(id="1", emotion="sad", timestamp=timestamp)

    def test_empty_id(self):
        with pytest.raises(ValidationError):
            EmotionRecord(id="", emotion="sad", timestamp="2025-11-23T09:51:54Z")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            EmotionRecord.model_validate(
                {"id": "1", "emotion": "sad", "timestamp": "2025-11-23T09:51:54Z", "note": "x"}
            )


class TestEmotionLog:
    def test_appended_returns_new_log(self):
        log = EmotionLog()
        record = EmotionRecord(id="1", emotion="happy", timestamp="2025-11-23T09:51:54Z")

        updated = log.appended(record)

        assert len(log) == 0
        assert list(updated) == [record]
        assert updated.ids() == {"1"}

    def test_duplicate_ids_rejected(self):
        raw = (
            '[{"id":"7","emotion":"happy","timestamp":"2025-11-23T09:51:54Z"},'
            '{"id":"7","emotion":"sad","timestamp":"2025-11-23T09:52:54Z"}]'
        )
        with pytest.raises(ValidationError):
            EmotionLog.model_validate_json(raw)


class TestHelpers:
    def test_format_timestamp_converts_to_utc(self):
        moment = datetime(2025, 11, 23, 17, 51, 54, 123456, tzinfo=timezone(timedelta(hours=8)))
        assert format_timestamp(moment) == "2025-11-23T09:51:54.123Z"

    def test_generate_record_id(self):
        moment = datetime(2025, 11, 23, 9, 51, 54, 123000, tzinfo=UTC)
        base = int(moment.timestamp() * 1000)

        assert generate_record_id(moment) == str(base)
        assert generate_record_id(moment, {str(base), str(base + 1)}) == str(base + 2)


class TestLabels:
    def test_every_emotion_has_a_label(self):
        assert set(EMOTION_LABELS) == set(Emotion)

    def test_label_for(self):
        assert label_for("happy") == "Happy 😀"
        assert label_for(Emotion.ANGRY) == "Angry 😡"

    def test_label_for_unknown_falls_back_to_value(self):
        assert label_for("bored") == "bored"
