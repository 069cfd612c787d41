import json

import pytest
from pydantic import ValidationError

from rider_directory.pubsub.channels import (
    ALL_TOPICS,
    TOPIC_RIDERS,
    RiderEvent,
    RiderEventKind,
    RiderSnapshot,
)
from tests.factories import make_rider


@pytest.mark.unit
class TestTopicConstants:
    def test_riders_topic(self):
        assert TOPIC_RIDERS == "riders"
        assert ALL_TOPICS == ["riders"]

    def test_event_kinds(self):
        assert RiderEventKind.CREATED.value == "rider_created"
        assert RiderEventKind.UPDATED.value == "rider_updated"
        assert len(RiderEventKind) == 2


@pytest.mark.unit
class TestRiderSnapshot:
    def test_snapshot_from_rider(self):
        snapshot = RiderSnapshot.model_validate(make_rider())
        assert snapshot.id == 1
        assert snapshot.phone == "14169671111"
        assert snapshot.pronouns is None

    def test_snapshot_is_frozen(self):
        snapshot = RiderSnapshot.model_validate(make_rider())
        with pytest.raises(ValidationError):
            snapshot.name = "Mallory"

    def test_snapshot_requires_persisted_rider(self):
        with pytest.raises(ValidationError):
            RiderSnapshot.model_validate(make_rider(id=None))


@pytest.mark.unit
class TestRiderEvent:
    def test_from_rider_keeps_entity_and_snapshot(self):
        rider = make_rider()
        event = RiderEvent.from_rider(RiderEventKind.CREATED, rider)

        assert event.rider is rider
        assert event.snapshot.name == "Alice"
        assert event.published_at.tzinfo is not None

    def test_snapshot_unaffected_by_later_changes(self):
        rider = make_rider()
        event = RiderEvent.from_rider(RiderEventKind.UPDATED, rider)

        rider.name = "Changed"

        assert event.snapshot.name == "Alice"

    def test_to_message_is_json_serializable(self):
        event = RiderEvent.from_rider(RiderEventKind.UPDATED, make_rider())
        message = json.loads(json.dumps(event.to_message()))

        assert message["event"] == "rider_updated"
        assert message["rider"]["email"] == "alice@x.com"
        assert "published_at" in message
