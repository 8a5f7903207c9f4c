"""Tests for SettingsManager partial saves and defaults"""

import json

import pytest

from config import DEFAULT_POST_MESSAGE
from managers import SettingsManager
from utils.exceptions import StorageUnavailableError


def test_defaults_when_nothing_saved(settings_manager):
    settings = settings_manager.get_settings()
    assert settings.webhook_url == ""
    assert settings.post_message == DEFAULT_POST_MESSAGE
    assert settings.is_webhook_configured is False
    assert settings.to_dict() == {"webhookUrl": "", "postMessage": DEFAULT_POST_MESSAGE}


def test_save_persists_under_property_keys(settings_manager):
    assert settings_manager.save_settings({"webhookUrl": "https://hook", "postMessage": "Hello"}) == {"success": True}

    with open(settings_manager.settings_file, encoding="utf-8") as f:
        stored = json.load(f)
    assert stored == {"DISCORD_WEBHOOK_URL": "https://hook", "DISCORD_POST_MESSAGE": "Hello"}


def test_partial_save_leaves_other_key(settings_manager):
    settings_manager.save_settings({"webhookUrl": "https://hook", "postMessage": "Hello"})
    settings_manager.save_settings({"postMessage": "Updated"})

    settings = settings_manager.get_settings()
    assert settings.webhook_url == "https://hook"
    assert settings.post_message == "Updated"


def test_empty_values_do_not_clear(settings_manager):
    settings_manager.save_settings({"webhookUrl": "https://hook"})
    settings_manager.save_settings({"webhookUrl": "", "postMessage": "   "})

    settings = settings_manager.get_settings()
    assert settings.webhook_url == "https://hook"
    assert settings.post_message == DEFAULT_POST_MESSAGE


def test_unknown_keys_are_ignored(settings_manager):
    settings_manager.save_settings({"token": "secret"})
    with open(settings_manager.settings_file, encoding="utf-8") as f:
        assert json.load(f) == {}


def test_env_webhook_is_fallback(tmp_path):
    manager = SettingsManager(str(tmp_path / "s.json"), default_webhook_url="https://env-hook")
    assert manager.get_settings().webhook_url == "https://env-hook"

    manager.save_settings({"DISCORD_WEBHOOK_URL": "https://saved"})
    assert manager.get_settings().webhook_url == "https://saved"


def test_corrupt_file_is_storage_error(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageUnavailableError):
        SettingsManager(str(path)).get_settings()
