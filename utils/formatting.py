"""
Text formatting utilities for the schedule sheet and Discord messages.

Provides time-cell normalization and the weekly schedule text.
"""

import datetime
from typing import Iterable, List

from config import (
    WEEKDAYS,
    WEEKDAY_LABELS,
    NO_EVENTS_MESSAGE,
    EMBED_DESCRIPTION_LIMIT,
)

MINUTES_PER_DAY = 24 * 60


def normalize_time_cell(value) -> str:
    """Render a raw sheet cell as zero-padded HH:MM text

    Text cells pass through unchanged. Numeric cells are spreadsheet serial
    values, where the fractional part is the time of day.

    Examples:
        normalize_time_cell("09:00") -> "09:00"
        normalize_time_cell(0.375) -> "09:00"
        normalize_time_cell(datetime.time(8, 5)) -> "08:05"
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (datetime.datetime, datetime.time)):
        return value.strftime("%H:%M")
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        minutes = int(round((value % 1) * MINUTES_PER_DAY)) % MINUTES_PER_DAY
        return f"{minutes // 60:02d}:{minutes % 60:02d}"
    return str(value)


def format_event_line(event) -> str:
    """Format one event as `START～END` **TITLE** (ORGANIZER)"""
    return f"`{event.start_time}～{event.end_time}` **{event.title}** ({event.organizer})"


def generate_schedule_text(events: Iterable) -> str:
    """Build the weekly schedule text, Monday to Friday

    Days without events are left out. Within a day, events are sorted by
    start time as text, which is chronological for zero-padded HH:MM.

    Args:
        events: Event objects

    Returns:
        Discord-formatted text, or NO_EVENTS_MESSAGE if nothing is scheduled
    """
    events = list(events)
    sections: List[str] = []

    for weekday in WEEKDAYS:
        day_events = sorted(
            (e for e in events if e.weekday == weekday),
            key=lambda e: e.start_time
        )
        if not day_events:
            continue

        lines = [f"**【{WEEKDAY_LABELS[weekday]}】**"]
        lines.extend(format_event_line(e) for e in day_events)
        sections.append("\n".join(lines))

    if not sections:
        return NO_EVENTS_MESSAGE

    return truncate_text("\n\n".join(sections), EMBED_DESCRIPTION_LIMIT)


def truncate_text(text: str, limit: int) -> str:
    """Clip text to limit characters, marking the cut with an ellipsis"""
    if len(text) <= limit:
        return text
    return text[:limit - 1] + "…"
