"""Managers package - Schedule, settings and Discord managers"""

from dataclasses import dataclass

from config import ScheduleConfig
from models.database import EventSheet
from .event_manager import EventManager
from .settings_manager import Settings, SettingsManager
from .discord_publisher import (
    DiscordPublisher,
    build_schedule_embed,
    build_multipart_body,
    decode_image_data,
)


@dataclass
class Managers:
    events: EventManager
    settings: SettingsManager
    publisher: DiscordPublisher


def create_managers(config: ScheduleConfig) -> Managers:
    """Wire the sheet store, settings file and publisher from one config"""
    events = EventManager(EventSheet(config))
    settings = SettingsManager(
        config.SETTINGS_FILE,
        default_webhook_url=config.DISCORD_WEBHOOK_URL
    )
    publisher = DiscordPublisher(events, settings)
    return Managers(events=events, settings=settings, publisher=publisher)


__all__ = [
    'EventManager',
    'Settings',
    'SettingsManager',
    'DiscordPublisher',
    'build_schedule_embed',
    'build_multipart_body',
    'decode_image_data',
    'Managers',
    'create_managers',
]
