"""
Discord webhook publishing for the weekly schedule.

Two delivery paths share the webhook precondition:
- post_weekly_schedule: schedule text as an embed (JSON body)
- post_image: a rendered schedule image (multipart/form-data body)
"""

import re
import asyncio
import base64
import binascii
import uuid
from typing import Callable, Dict, List, Optional, Tuple

import aiohttp
import discord

from config import (
    SCHEDULE_EMBED_TITLE,
    SCHEDULE_EMBED_COLOR,
    SCHEDULE_EMBED_FOOTER,
    IMAGE_FILENAME,
    IMAGE_CONTENT_TYPE,
    WEBHOOK_SUCCESS_CODES,
)
from utils.error_handling import log_error
from utils.exceptions import (
    ScheduleError,
    WebhookNotConfiguredError,
    WebhookRejectedError,
    InvalidImageError,
)
from utils.formatting import generate_schedule_text
from utils.timestamp import now_local

DATA_URI_PREFIX = re.compile(r'^data:[^,]*;base64,', re.IGNORECASE)

# (field name, filename, content type, payload)
FilePart = Tuple[str, str, str, bytes]


def build_schedule_embed(schedule_text: str) -> discord.Embed:
    """Wrap schedule text in the weekly embed"""
    embed = discord.Embed(
        title=SCHEDULE_EMBED_TITLE,
        description=schedule_text,
        color=SCHEDULE_EMBED_COLOR,
        timestamp=now_local()
    )
    embed.set_footer(text=SCHEDULE_EMBED_FOOTER)
    return embed


def decode_image_data(data_uri: str) -> bytes:
    """Decode a base64 image, with or without a data:...;base64, prefix

    Raises:
        InvalidImageError: empty or undecodable payload
    """
    if not data_uri or not isinstance(data_uri, str):
        raise InvalidImageError("画像データが空です")

    encoded = DATA_URI_PREFIX.sub('', data_uri.strip(), count=1)
    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"画像データをデコードできません: {e}") from e

    if not image_bytes:
        raise InvalidImageError("画像データが空です")
    return image_bytes


def build_multipart_body(fields: Dict[str, str], files: List[FilePart],
                         boundary: str) -> bytes:
    """Assemble a multipart/form-data body

    Each part is `--boundary` CRLF, headers, blank line, body, CRLF; the
    body ends with `--boundary--` CRLF.
    """
    delimiter = f"--{boundary}\r\n".encode('utf-8')
    body = bytearray()

    for name, value in fields.items():
        body += delimiter
        body += f'Content-Disposition: form-data; name="{name}"\r\n\r\n'.encode('utf-8')
        body += value.encode('utf-8')
        body += b"\r\n"

    for name, filename, content_type, payload in files:
        body += delimiter
        body += (
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
            f'Content-Type: {content_type}\r\n\r\n'
        ).encode('utf-8')
        body += payload
        body += b"\r\n"

    body += f"--{boundary}--\r\n".encode('utf-8')
    return bytes(body)


def new_boundary() -> str:
    return f"----ScheduleBoundary{uuid.uuid4().hex}"


class DiscordPublisher:
    """Posts the schedule to the configured Discord webhook

    Args:
        event_manager: source of events (EventManager)
        settings_manager: source of webhook URL and post message
        session_factory: callable returning an aiohttp.ClientSession-like
            async context manager
    """

    def __init__(self, event_manager, settings_manager,
                 session_factory: Optional[Callable[[], aiohttp.ClientSession]] = None):
        self.event_manager = event_manager
        self.settings_manager = settings_manager
        self.session_factory = session_factory or aiohttp.ClientSession

    async def _require_settings(self):
        settings = await asyncio.to_thread(self.settings_manager.get_settings)
        if not settings.is_webhook_configured:
            raise WebhookNotConfiguredError()
        return settings

    async def post_weekly_schedule(self) -> dict:
        """Post this week's schedule as an embed"""
        try:
            settings = await self._require_settings()
            events = await asyncio.to_thread(self.event_manager.list_events)
            schedule_text = generate_schedule_text(events)
            embed = build_schedule_embed(schedule_text)
            payload = {
                "content": settings.post_message,
                "embeds": [embed.to_dict()],
            }
            await self._send(settings.webhook_url, json=payload)
        except ScheduleError as e:
            log_error(e, "Posting weekly schedule")
            raise

        print(f"📤 Weekly schedule posted ({len(events)} events)")
        return {"success": True, "message": "Discordに投稿しました"}

    async def post_image(self, data_uri: str) -> dict:
        """Post a base64-encoded PNG with the configured message"""
        try:
            settings = await self._require_settings()
            image_bytes = decode_image_data(data_uri)
            boundary = new_boundary()
            body = build_multipart_body(
                {"content": settings.post_message},
                [("file", IMAGE_FILENAME, IMAGE_CONTENT_TYPE, image_bytes)],
                boundary
            )
            headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
            await self._send(settings.webhook_url, data=body, headers=headers)
        except ScheduleError as e:
            log_error(e, "Posting schedule image")
            raise

        print(f"🖼️ Schedule image posted ({len(image_bytes)} bytes)")
        return {"success": True}

    async def _send(self, url: str, **kwargs):
        """POST once; 200/204 succeed, anything else raises"""
        try:
            async with self.session_factory() as session:
                async with session.post(url, **kwargs) as response:
                    status = response.status
                    if status in WEBHOOK_SUCCESS_CODES:
                        return
                    body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WebhookRejectedError(None, str(e) or type(e).__name__) from e

        raise WebhookRejectedError(status, body)
