"""
Exception hierarchy for the schedule app.

Every public operation raises a single ScheduleError subclass so callers
(the web API, the scheduled job) can map failures without inspecting
library-specific exceptions.
"""

from typing import Optional


class ScheduleError(Exception):
    """Base class for all schedule app errors"""

    @property
    def message(self) -> str:
        return str(self)


class StorageUnavailableError(ScheduleError):
    """The spreadsheet could not be read or written"""


class EventNotFoundError(ScheduleError):
    """No event row matches the given id"""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"イベントが見つかりません (ID: {event_id})")


class EmptyTableError(ScheduleError):
    """Update/delete attempted while the sheet has no data rows"""

    def __init__(self):
        super().__init__("イベントが登録されていません")


class WebhookNotConfiguredError(ScheduleError):
    """Discord webhook URL has not been saved"""

    def __init__(self):
        super().__init__("Discord Webhook URLが設定されていません")


class WebhookRejectedError(ScheduleError):
    """Discord answered with a non-success status, or could not be reached"""

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"Discordへの送信に失敗しました: {body}")
        else:
            super().__init__(f"Discordへの送信に失敗しました (HTTP {status}): {body}")


class ValidationError(ScheduleError):
    """Input rejected before touching storage or the network"""


class InvalidEventError(ValidationError):
    """Event payload has a bad weekday, time, or missing field"""


class InvalidImageError(ValidationError):
    """Image payload is not valid base64"""
