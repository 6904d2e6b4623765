"""Unit tests for interest state transitions.

Pure function tests - no mocks needed.
"""

import pytest

from nearby.core.interest import (
    INTERESTED,
    NOT_INTERESTED,
    InterestSnapshot,
    InterestedEvent,
    add_interest,
    clear_interest,
    dismiss,
    load_snapshot,
    parse_interested_event,
)


@pytest.fixture
def record():
    return InterestedEvent(
        catalog_event_id="cat_001",
        interested_at="2025-06-03T12:00:00.000Z",
        notification_scheduled=True,
        notification_id="Q1298393284",
    )


def assert_disjoint(snapshot):
    ids = {r.catalog_event_id for r in snapshot.interested}
    assert not ids & snapshot.not_interested


class TestInterestedEvent:
    """Tests for InterestedEvent serialization."""

    def test_to_dict(self, record):
        assert record.to_dict() == {
            "catalogEventId": "cat_001",
            "interestedAt": "2025-06-03T12:00:00.000Z",
            "notificationScheduled": True,
            "notificationId": "Q1298393284",
        }

    def test_to_dict_without_notification(self):
        record = InterestedEvent("cat_002", "2025-06-03T12:00:00.000Z", False)
        assert "notificationId" not in record.to_dict()

    def test_parse_round_trip(self, record):
        assert parse_interested_event(record.to_dict()) == record

    def test_parse_missing_field(self):
        assert parse_interested_event({"interestedAt": "x"}) is None

    def test_parse_not_a_dict(self):
        assert parse_interested_event("cat_001") is None


class TestTransitions:
    """Tests for add_interest(), dismiss() and clear_interest()."""

    def test_add_interest(self, record):
        snapshot = add_interest(InterestSnapshot(), record)

        assert snapshot.status_of("cat_001") == INTERESTED
        assert snapshot.find("cat_001") == record

    def test_add_interest_is_idempotent(self, record):
        """A second add keeps the original record."""
        once = add_interest(InterestSnapshot(), record)
        later = InterestedEvent("cat_001", "2025-06-04T12:00:00.000Z", False)

        twice = add_interest(once, later)

        assert twice is once
        assert len(twice.interested) == 1

    def test_add_interest_clears_dismissal(self, record):
        snapshot = dismiss(InterestSnapshot(), "cat_001")

        snapshot = add_interest(snapshot, record)

        assert snapshot.status_of("cat_001") == INTERESTED
        assert_disjoint(snapshot)

    def test_dismiss_removes_interest(self, record):
        snapshot = add_interest(InterestSnapshot(), record)

        snapshot = dismiss(snapshot, "cat_001")

        assert snapshot.status_of("cat_001") == NOT_INTERESTED
        assert snapshot.find("cat_001") is None
        assert_disjoint(snapshot)

    def test_clear_returns_to_neutral(self, record):
        snapshot = add_interest(InterestSnapshot(), record)

        assert clear_interest(snapshot, "cat_001").status_of("cat_001") is None

    def test_clear_dismissed(self):
        snapshot = dismiss(InterestSnapshot(), "cat_009")

        assert clear_interest(snapshot, "cat_009").status_of("cat_009") is None

    def test_clear_unknown_is_noop(self, record):
        snapshot = add_interest(InterestSnapshot(), record)

        assert clear_interest(snapshot, "cat_404") == snapshot

    def test_interest_order_preserved(self):
        snapshot = InterestSnapshot()
        for event_id in ["cat_003", "cat_001", "cat_002"]:
            snapshot = add_interest(snapshot, InterestedEvent(event_id, "t", False))

        assert [r.catalog_event_id for r in snapshot.interested] == [
            "cat_003", "cat_001", "cat_002",
        ]

    @pytest.mark.parametrize("ops", [
        ["add", "dismiss", "add"],
        ["dismiss", "add", "dismiss"],
        ["add", "clear", "dismiss", "add"],
        ["dismiss", "dismiss", "clear", "add", "add"],
    ])
    def test_disjoint_after_any_sequence(self, ops):
        snapshot = InterestSnapshot()
        for op in ops:
            if op == "add":
                snapshot = add_interest(snapshot, InterestedEvent("cat_001", "t", False))
            elif op == "dismiss":
                snapshot = dismiss(snapshot, "cat_001")
            else:
                snapshot = clear_interest(snapshot, "cat_001")
            assert_disjoint(snapshot)


class TestLoadSnapshot:
    """Tests for load_snapshot()."""

    def test_empty(self):
        snapshot = load_snapshot(None, None)
        assert snapshot.interested == ()
        assert snapshot.not_interested == frozenset()

    def test_loads_records(self, record):
        snapshot = load_snapshot([record.to_dict()], ["cat_007"])

        assert snapshot.interested == (record,)
        assert snapshot.not_interested == frozenset({"cat_007"})

    def test_skips_malformed(self, record):
        snapshot = load_snapshot([{"bogus": True}, record.to_dict()], None)
        assert snapshot.interested == (record,)

    def test_duplicate_records_keep_first(self, record):
        other = InterestedEvent("cat_001", "2025-07-01T00:00:00.000Z", False)

        snapshot = load_snapshot([record.to_dict(), other.to_dict()], [])

        assert snapshot.interested == (record,)

    def test_overlap_resolves_to_interested(self, record):
        snapshot = load_snapshot([record.to_dict()], ["cat_001", "cat_002"])

        assert snapshot.status_of("cat_001") == INTERESTED
        assert snapshot.not_interested == frozenset({"cat_002"})

    def test_wrong_types_ignored(self):
        snapshot = load_snapshot({"not": "a list"}, "cat_001")
        assert snapshot == InterestSnapshot()

    def test_not_interested_list_sorted(self):
        snapshot = load_snapshot([], ["cat_009", "cat_002"])
        assert snapshot.not_interested_to_list() == ["cat_002", "cat_009"]
