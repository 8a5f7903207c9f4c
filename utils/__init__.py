"""Utils package - Utility functions and helpers"""

from .error_handling import log_error, format_error
from .exceptions import (
    ScheduleError,
    StorageUnavailableError,
    EventNotFoundError,
    EmptyTableError,
    WebhookNotConfiguredError,
    WebhookRejectedError,
    ValidationError,
    InvalidEventError,
    InvalidImageError,
)
from .formatting import (
    normalize_time_cell,
    format_event_line,
    generate_schedule_text,
    truncate_text,
)
from .timestamp import now_local, get_last_post_timestamp, save_last_post_timestamp

__all__ = [
    'log_error',
    'format_error',
    'ScheduleError',
    'StorageUnavailableError',
    'EventNotFoundError',
    'EmptyTableError',
    'WebhookNotConfiguredError',
    'WebhookRejectedError',
    'ValidationError',
    'InvalidEventError',
    'InvalidImageError',
    'normalize_time_cell',
    'format_event_line',
    'generate_schedule_text',
    'truncate_text',
    'now_local',
    'get_last_post_timestamp',
    'save_last_post_timestamp',
]
