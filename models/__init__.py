"""Models package - Core data structures and the sheet store"""

from .event import Event, new_event_id
from .database import EventSheet

__all__ = [
    'Event',
    'new_event_id',
    'EventSheet',
]
