"""
Settings management for Discord posting.

Keeps the webhook URL and post message in a JSON file, separate from the
event sheet.
"""

import os
import json
import threading
from dataclasses import dataclass

from config import DEFAULT_POST_MESSAGE
from utils.error_handling import log_error
from utils.exceptions import StorageUnavailableError

WEBHOOK_URL_KEY = 'DISCORD_WEBHOOK_URL'
POST_MESSAGE_KEY = 'DISCORD_POST_MESSAGE'

# Operations-surface key -> persisted key
_INPUT_KEYS = {
    'webhookUrl': WEBHOOK_URL_KEY,
    'postMessage': POST_MESSAGE_KEY,
    WEBHOOK_URL_KEY: WEBHOOK_URL_KEY,
    POST_MESSAGE_KEY: POST_MESSAGE_KEY,
}


@dataclass
class Settings:
    webhook_url: str = ''
    post_message: str = DEFAULT_POST_MESSAGE

    @property
    def is_webhook_configured(self) -> bool:
        return bool(self.webhook_url)

    def to_dict(self) -> dict:
        return {"webhookUrl": self.webhook_url, "postMessage": self.post_message}


class SettingsManager:
    """Reads and partially updates the two posting settings"""

    def __init__(self, settings_file: str, default_webhook_url: str = '',
                 default_post_message: str = DEFAULT_POST_MESSAGE):
        self.settings_file = settings_file
        self.default_webhook_url = default_webhook_url
        self.default_post_message = default_post_message
        self._lock = threading.Lock()

    def _load(self) -> dict:
        if not os.path.exists(self.settings_file):
            return {}
        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            error = StorageUnavailableError(f"設定の読み込みに失敗しました: {e}")
            log_error(error, "Loading settings", {"file": self.settings_file})
            raise error from e

    def get_settings(self) -> Settings:
        """Get settings with defaults applied"""
        stored = self._load()
        return Settings(
            webhook_url=stored.get(WEBHOOK_URL_KEY) or self.default_webhook_url or '',
            post_message=stored.get(POST_MESSAGE_KEY) or self.default_post_message,
        )

    def save_settings(self, partial: dict) -> dict:
        """Overwrite only the settings present and non-empty in partial

        An empty value cannot clear a saved setting.
        """
        updates = {}
        for key, value in (partial or {}).items():
            stored_key = _INPUT_KEYS.get(key)
            if stored_key and isinstance(value, str) and value.strip():
                updates[stored_key] = value.strip()

        with self._lock:
            stored = self._load()
            stored.update(updates)
            try:
                with open(self.settings_file, 'w', encoding='utf-8') as f:
                    json.dump(stored, f, indent=2, ensure_ascii=False)
            except OSError as e:
                error = StorageUnavailableError(f"設定の保存に失敗しました: {e}")
                log_error(error, "Saving settings", {"file": self.settings_file})
                raise error from e

        if updates:
            print(f"⚙️ Saved settings: {', '.join(sorted(updates))}")
        return {"success": True}
