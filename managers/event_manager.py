"""
Event management for the weekly schedule.

Handles listing, creating, replacing and deleting event rows.
"""

import threading
from typing import List

from models.event import Event, new_event_id
from utils.error_handling import log_error
from utils.exceptions import (
    ScheduleError,
    StorageUnavailableError,
    EventNotFoundError,
    EmptyTableError,
)


class EventManager:
    """CRUD operations over an event store

    The store must provide initialize/append_row/read_all/update_row/
    delete_row (see models.database.EventSheet). Lookups by id are linear
    scans; the sheet holds a single team's weekly schedule.

    Scan-then-write sequences run under one table-level lock, so racing
    updates to the same id resolve as last-writer-wins.
    """

    def __init__(self, store, lock: threading.Lock = None):
        self.store = store
        self._lock = lock or threading.Lock()

    def list_events(self) -> List[Event]:
        """Get all events in sheet order, skipping rows without an id"""
        try:
            rows = self._read_rows()
        except ScheduleError as e:
            log_error(e, "Listing events")
            raise
        return [Event.from_row(row) for row in rows if _row_id(row)]

    def add_event(self, data: dict) -> dict:
        """Create an event with a fresh id

        Returns:
            {"success": True, "id": new_id, "message": ...}
        """
        try:
            event = Event.from_dict(data, event_id=new_event_id())
            with self._lock:
                self._write(self.store.append_row, event.to_row())
        except ScheduleError as e:
            log_error(e, "Adding event", {"title": data.get('title')})
            raise

        print(f"✅ Added event {event.id} ({event.weekday} {event.start_time} {event.title})")
        return {"success": True, "id": event.id, "message": "イベントを追加しました"}

    def update_event(self, data: dict) -> dict:
        """Replace every field of the event whose id matches data['id']"""
        event_id = data.get('id')
        try:
            event = Event.from_dict(data)
            with self._lock:
                row_index = self._find_row_index(event.id)
                self._write(self.store.update_row, row_index, event.to_row())
        except ScheduleError as e:
            log_error(e, "Updating event", {"event_id": event_id})
            raise

        print(f"✏️ Updated event {event.id}")
        return {"success": True, "message": "イベントを更新しました"}

    def delete_event(self, event_id: str) -> dict:
        """Remove the event row whose id matches event_id"""
        try:
            with self._lock:
                row_index = self._find_row_index(event_id)
                self._write(self.store.delete_row, row_index)
        except ScheduleError as e:
            log_error(e, "Deleting event", {"event_id": event_id})
            raise

        print(f"🗑️ Deleted event {event_id}")
        return {"success": True, "message": "イベントを削除しました"}

    def _find_row_index(self, event_id: str) -> int:
        """Scan top to bottom for the first row with this id"""
        rows = self._read_rows()
        if not rows:
            raise EmptyTableError()

        for index, row in enumerate(rows):
            if _row_id(row) == event_id:
                return index
        raise EventNotFoundError(event_id)

    def _read_rows(self) -> list:
        try:
            self.store.initialize()
            return self.store.read_all()
        except Exception as e:
            raise StorageUnavailableError(f"イベントの取得に失敗しました: {e}") from e

    def _write(self, operation, *args):
        try:
            operation(*args)
        except Exception as e:
            raise StorageUnavailableError(f"イベントの保存に失敗しました: {e}") from e


def _row_id(row: list) -> str:
    return str(row[0]).strip() if row and row[0] is not None else ''
