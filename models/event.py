"""
Event data model - one weekly recurring schedule entry
"""

import re
import uuid
from dataclasses import dataclass, asdict
from typing import List

from config import WEEKDAYS, DEFAULT_EVENT_COLOR, EVENT_HEADERS
from utils.exceptions import InvalidEventError
from utils.formatting import normalize_time_cell

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')

# Wire (camelCase) key -> dataclass field
_WIRE_FIELDS = {
    'id': 'id',
    'weekday': 'weekday',
    'startTime': 'start_time',
    'endTime': 'end_time',
    'title': 'title',
    'organizer': 'organizer',
    'description': 'description',
    'color': 'color',
}

ROW_WIDTH = len(EVENT_HEADERS)


def new_event_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Event:
    """A weekly event row: weekday, HH:MM time range, title and organizer"""
    id: str
    weekday: str
    start_time: str
    end_time: str
    title: str
    organizer: str
    description: str = ""
    color: str = DEFAULT_EVENT_COLOR

    def to_row(self) -> List[str]:
        """Row cells in sheet column order"""
        return [
            self.id,
            self.weekday,
            self.start_time,
            self.end_time,
            self.title,
            self.organizer,
            self.description,
            self.color,
        ]

    @classmethod
    def from_row(cls, row: list) -> "Event":
        """Build an event from raw sheet cells, applying defaults

        Short rows (trailing empty cells trimmed by the API) are padded.
        """
        cells = list(row) + [''] * (ROW_WIDTH - len(row))
        return cls(
            id=str(cells[0]),
            weekday=str(cells[1]),
            start_time=normalize_time_cell(cells[2]),
            end_time=normalize_time_cell(cells[3]),
            title=str(cells[4]),
            organizer=str(cells[5]),
            description=_text_or_default(cells[6], ''),
            color=_text_or_default(cells[7], DEFAULT_EVENT_COLOR),
        )

    def to_dict(self) -> dict:
        """camelCase dict for the operations surface"""
        data = asdict(self)
        return {wire: data[attr] for wire, attr in _WIRE_FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict, event_id: str = None) -> "Event":
        """Validate an input payload and build an event

        Accepts camelCase or snake_case keys.

        Args:
            data: Event payload from the caller
            event_id: Id to use instead of data['id'] (minted on add)

        Raises:
            InvalidEventError: missing field, unknown weekday, or bad time
        """
        def pick(wire: str, default=None):
            attr = _WIRE_FIELDS[wire]
            value = data.get(wire, data.get(attr, default))
            return value.strip() if isinstance(value, str) else value

        event_id = event_id or pick('id')
        if not event_id:
            raise InvalidEventError("イベントIDが指定されていません")

        weekday = pick('weekday')
        if weekday not in WEEKDAYS:
            raise InvalidEventError(f"曜日が不正です: {weekday}")

        start_time = pick('startTime')
        end_time = pick('endTime')
        for label, value in (('開始時刻', start_time), ('終了時刻', end_time)):
            if not isinstance(value, str) or not TIME_PATTERN.match(value):
                raise InvalidEventError(f"{label}はHH:MM形式で指定してください: {value}")

        title = pick('title')
        if not title:
            raise InvalidEventError("タイトルは必須です")

        return cls(
            id=str(event_id),
            weekday=weekday,
            start_time=start_time,
            end_time=end_time,
            title=title,
            organizer=pick('organizer') or '',
            description=pick('description') or '',
            color=pick('color') or DEFAULT_EVENT_COLOR,
        )


def _text_or_default(value, default: str) -> str:
    """Empty cells take the default; any other value (including 0) is kept"""
    if value is None or value == '':
        return default
    return str(value)
