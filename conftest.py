"""
Pytest configuration and shared fixtures.
"""

import pytest

from managers import EventManager, SettingsManager, DiscordPublisher, Managers


class MemoryEventStore:
    """In-memory stand-in for EventSheet with the same row semantics"""

    def __init__(self, rows=None):
        self.rows = [list(r) for r in (rows or [])]
        self.initialized = 0
        self.fail_with = None

    def _check(self):
        if self.fail_with:
            raise self.fail_with

    def initialize(self):
        self._check()
        self.initialized += 1

    def append_row(self, fields):
        self._check()
        self.rows.append(list(fields))

    def read_all(self):
        self._check()
        return [list(r) for r in self.rows]

    def update_row(self, row_index, fields):
        self._check()
        self.rows[row_index] = list(fields)

    def delete_row(self, row_index):
        self._check()
        del self.rows[row_index]


class FakeResponse:
    def __init__(self, status, body=""):
        self.status = status
        self._body = body

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Records webhook POSTs and answers with a fixed status"""

    def __init__(self, status=204, body="", error=None):
        self.status = status
        self.body = body
        self.error = error
        self.requests = []

    def post(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error:
            raise self.error
        return FakeResponse(self.status, self.body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


@pytest.fixture
def store():
    return MemoryEventStore()


@pytest.fixture
def event_manager(store):
    return EventManager(store)


@pytest.fixture
def settings_manager(tmp_path):
    return SettingsManager(str(tmp_path / "settings.json"))


@pytest.fixture
def webhook_session():
    return FakeSession()


@pytest.fixture
def publisher(event_manager, settings_manager, webhook_session):
    return DiscordPublisher(event_manager, settings_manager, session_factory=lambda: webhook_session)


@pytest.fixture
def managers(event_manager, settings_manager, publisher):
    return Managers(events=event_manager, settings=settings_manager, publisher=publisher)


@pytest.fixture
def sample_event():
    """Sample event payload as sent by the web UI"""
    return {
        "weekday": "Monday",
        "startTime": "09:00",
        "endTime": "10:00",
        "title": "Standup",
        "organizer": "A",
    }
