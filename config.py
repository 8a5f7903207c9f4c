"""
Configuration module for the Weekly Schedule Poster

This module centralizes all configuration constants, environment variables,
and file paths used throughout the app.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

# ============================================================================
# ENVIRONMENT SETUP
# ============================================================================

# Load environment variables from .env file (use absolute path for hosting)
SCRIPT_DIR = os.path.dirname(os.path.realpath(__file__))
_ENV_FILE = os.path.join(SCRIPT_DIR, '.env')

load_dotenv(_ENV_FILE)

# ============================================================================
# FILE PATHS
# ============================================================================

SETTINGS_FILE_PATH = os.path.join(SCRIPT_DIR, "settings.json")
LAST_POST_FILE_PATH = os.path.join(SCRIPT_DIR, "last_post.json")

# Error logging
LOGS_DIR = os.path.join(SCRIPT_DIR, "logs")
os.makedirs(LOGS_DIR, exist_ok=True)

# ============================================================================
# EVENT SHEET
# ============================================================================

EVENTS_SHEET_NAME = 'Events'

EVENT_HEADERS = [
    'ID', '曜日(Weekday)', '開始時刻(Start)', '終了時刻(End)',
    'タイトル(Title)', '担当者(Organizer)', '説明(Description)', '色(Color)'
]

WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']

WEEKDAY_LABELS = {
    'Monday': '月曜日',
    'Tuesday': '火曜日',
    'Wednesday': '水曜日',
    'Thursday': '木曜日',
    'Friday': '金曜日',
}

DEFAULT_EVENT_COLOR = '#4285F4'

# ============================================================================
# DISCORD POSTING
# ============================================================================

DEFAULT_POST_MESSAGE = '📅 今週のスケジュールをお知らせします！'
NO_EVENTS_MESSAGE = '今週の予定はありません。'

SCHEDULE_EMBED_TITLE = '📅 今週のスケジュール'
SCHEDULE_EMBED_COLOR = 0x5865F2
SCHEDULE_EMBED_FOOTER = 'Weekly Schedule Bot'
EMBED_DESCRIPTION_LIMIT = 4096

IMAGE_FILENAME = 'schedule.png'
IMAGE_CONTENT_TYPE = 'image/png'

# Webhook status codes treated as delivered
WEBHOOK_SUCCESS_CODES = (200, 204)

# ============================================================================
# APP CONFIGURATION
# ============================================================================

@dataclass
class ScheduleConfig:
    """App configuration constants"""
    SERVICE_ACCOUNT_FILE: str = 'credentials.json'
    GOOGLE_SHEET_ID: str = None
    EVENTS_SHEET_NAME: str = EVENTS_SHEET_NAME
    SETTINGS_FILE: str = SETTINGS_FILE_PATH
    LAST_POST_FILE: str = LAST_POST_FILE_PATH
    DISCORD_WEBHOOK_URL: str = ''
    TIMEZONE: str = 'Asia/Tokyo'
    POST_WEEKDAY: str = 'Monday'
    POST_HOUR_UTC: int = 0  # 09:00 JST
    WEB_HOST: str = '127.0.0.1'
    WEB_PORT: int = 8080

    def __post_init__(self):
        # Load from environment variables for security
        self.SERVICE_ACCOUNT_FILE = os.getenv('SERVICE_ACCOUNT_FILE', self.SERVICE_ACCOUNT_FILE)
        self.GOOGLE_SHEET_ID = os.getenv('GOOGLE_SHEET_ID', '')  # Must be set in .env
        self.EVENTS_SHEET_NAME = os.getenv('EVENTS_SHEET_NAME', self.EVENTS_SHEET_NAME)
        self.SETTINGS_FILE = os.getenv('SETTINGS_FILE', self.SETTINGS_FILE)
        self.LAST_POST_FILE = os.getenv('LAST_POST_FILE', self.LAST_POST_FILE)
        self.DISCORD_WEBHOOK_URL = os.getenv('DISCORD_WEBHOOK_URL', '')
        self.TIMEZONE = os.getenv('TIMEZONE', self.TIMEZONE)

        post_weekday = os.getenv('POST_WEEKDAY', self.POST_WEEKDAY).strip().capitalize()
        if post_weekday not in WEEKDAYS:
            print(f"⚠️ POST_WEEKDAY '{post_weekday}' is not a weekday, using Monday")
            post_weekday = 'Monday'
        self.POST_WEEKDAY = post_weekday

        self.POST_HOUR_UTC = parse_int('POST_HOUR_UTC', self.POST_HOUR_UTC) % 24
        self.WEB_HOST = os.getenv('WEB_HOST', self.WEB_HOST)
        self.WEB_PORT = parse_int('WEB_PORT', self.WEB_PORT)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def parse_int(env_var: str, default: int) -> int:
    """Parse an integer from environment variable, falling back on bad input"""
    value = os.getenv(env_var, "")
    if not value:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


config = ScheduleConfig()
