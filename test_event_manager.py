"""Tests for EventManager CRUD over the event store"""

import datetime

import pytest

from models import Event
from utils.error_handling import format_error
from utils.exceptions import (
    EventNotFoundError,
    EmptyTableError,
    InvalidEventError,
    StorageUnavailableError,
)


def test_list_events_empty_table(event_manager):
    assert event_manager.list_events() == []


def test_add_then_list_round_trips_fields(event_manager, store, sample_event):
    result = event_manager.add_event(sample_event)

    assert result["success"] is True
    events = event_manager.list_events()
    assert len(events) == 1
    event = events[0]
    assert event.id == result["id"]
    assert event.start_time == "09:00"
    assert event.end_time == "10:00"
    assert event.title == "Standup"
    assert event.organizer == "A"
    assert event.description == ""
    assert event.color == "#4285F4"
    # Times are stored as plain text cells
    assert store.rows[0][2:4] == ["09:00", "10:00"]


def test_add_event_mints_unique_ids(event_manager, sample_event):
    first = event_manager.add_event(sample_event)["id"]
    second = event_manager.add_event(sample_event)["id"]
    assert first != second


def test_add_event_ignores_supplied_id(event_manager, sample_event):
    result = event_manager.add_event({**sample_event, "id": "chosen"})
    assert result["id"] != "chosen"


def test_add_event_keeps_given_color_and_description(event_manager, sample_event):
    event_manager.add_event({**sample_event, "color": "#FF0000", "description": "daily"})
    event = event_manager.list_events()[0]
    assert event.color == "#FF0000"
    assert event.description == "daily"


def test_add_event_accepts_end_before_start(event_manager, sample_event):
    event_manager.add_event({**sample_event, "startTime": "18:00", "endTime": "08:00"})
    assert event_manager.list_events()[0].end_time == "08:00"


@pytest.mark.parametrize("changes", [
    {"weekday": "Saturday"},
    {"weekday": ""},
    {"startTime": "9:00"},
    {"endTime": "24:00"},
    {"startTime": "09:60"},
    {"title": ""},
])
def test_add_event_rejects_invalid_input(event_manager, store, sample_event, changes):
    with pytest.raises(InvalidEventError):
        event_manager.add_event({**sample_event, **changes})
    assert store.rows == []


def test_list_skips_rows_without_id(store, event_manager):
    store.rows = [
        ["", "Monday", "08:00", "09:00", "ghost", "X", "", ""],
        ["a1", "Tuesday", "10:00", "11:00", "Review", "B", "", ""],
        [],
    ]
    events = event_manager.list_events()
    assert [e.id for e in events] == ["a1"]


def test_list_normalizes_native_time_cells(store, event_manager):
    store.rows = [
        ["a1", "Monday", 0.375, datetime.time(10, 30), "Sync", "A", None, None],
    ]
    event = event_manager.list_events()[0]
    assert event.start_time == "09:00"
    assert event.end_time == "10:30"
    assert event.description == ""
    assert event.color == "#4285F4"


def test_list_pads_short_rows(store, event_manager):
    store.rows = [["a1", "Friday", "13:00", "14:00", "Demo", "C"]]
    event = event_manager.list_events()[0]
    assert event == Event("a1", "Friday", "13:00", "14:00", "Demo", "C")


def test_list_keeps_storage_order(store, event_manager):
    store.rows = [
        ["b", "Friday", "13:00", "14:00", "Late", "C"],
        ["a", "Monday", "08:00", "09:00", "Early", "C"],
    ]
    assert [e.id for e in event_manager.list_events()] == ["b", "a"]


def test_list_wraps_storage_failure(store, event_manager):
    store.fail_with = ConnectionError("quota exceeded")
    with pytest.raises(StorageUnavailableError) as exc_info:
        event_manager.list_events()
    assert "quota exceeded" in str(exc_info.value)


def test_update_replaces_row_and_leaves_others(event_manager, store, sample_event):
    keep_id = event_manager.add_event({**sample_event, "title": "Keep"})["id"]
    target_id = event_manager.add_event(sample_event)["id"]
    untouched = list(store.rows[0])

    result = event_manager.update_event({
        "id": target_id,
        "weekday": "Wednesday",
        "startTime": "15:00",
        "endTime": "16:00",
        "title": "Planning",
        "organizer": "B",
    })

    assert result["success"] is True
    assert store.rows[0] == untouched
    updated = {e.id: e for e in event_manager.list_events()}[target_id]
    assert updated.weekday == "Wednesday"
    assert updated.start_time == "15:00"
    assert updated.title == "Planning"
    # Full-row replace: omitted fields fall back to defaults
    assert updated.color == "#4285F4"
    assert keep_id in {e.id for e in event_manager.list_events()}


def test_update_on_empty_table(event_manager, sample_event):
    with pytest.raises(EmptyTableError):
        event_manager.update_event({**sample_event, "id": "missing"})


def test_update_unknown_id(event_manager, sample_event):
    event_manager.add_event(sample_event)
    with pytest.raises(EventNotFoundError):
        event_manager.update_event({**sample_event, "id": "missing"})


def test_update_requires_id(event_manager, sample_event):
    event_manager.add_event(sample_event)
    with pytest.raises(InvalidEventError):
        event_manager.update_event(sample_event)


def test_delete_removes_exactly_one_row(event_manager, store, sample_event):
    ids = [event_manager.add_event(sample_event)["id"] for _ in range(3)]

    event_manager.delete_event(ids[1])

    assert [e.id for e in event_manager.list_events()] == [ids[0], ids[2]]
    with pytest.raises(EventNotFoundError):
        event_manager.delete_event(ids[1])
    with pytest.raises(EventNotFoundError):
        event_manager.update_event({**sample_event, "id": ids[1]})


def test_delete_relocates_by_id_after_shift(event_manager, sample_event):
    ids = [event_manager.add_event(sample_event)["id"] for _ in range(3)]
    event_manager.delete_event(ids[0])
    event_manager.delete_event(ids[2])
    assert [e.id for e in event_manager.list_events()] == [ids[1]]


def test_delete_on_empty_table(event_manager):
    with pytest.raises(EmptyTableError):
        event_manager.delete_event("anything")


def test_write_failure_is_wrapped(event_manager, store, sample_event):
    event_manager.add_event(sample_event)
    store.fail_with = OSError("sheet offline")
    with pytest.raises(StorageUnavailableError):
        event_manager.add_event(sample_event)


def test_list_keeps_zero_description(store, event_manager):
    store.rows = [["a1", "Monday", "09:00", "10:00", "Sync", "A", 0, ""]]
    event = event_manager.list_events()[0]
    assert event.description == "0"
    assert event.color == "#4285F4"


def test_storage_error_log_line_names_cause(store, event_manager):
    store.fail_with = ConnectionError("quota exceeded")
    with pytest.raises(StorageUnavailableError) as exc_info:
        event_manager.list_events()

    line = format_error(exc_info.value, "Listing events", {"sheet": "Events"})
    assert line.startswith("[Listing events] StorageUnavailableError: ")
    assert line.endswith("| cause=ConnectionError | sheet=Events")
