"""
Timestamp utilities for the fixed app locale and last-post tracking.
"""

import os
import json
import datetime
from typing import Optional

import pytz

from config import config


def now_local(timezone: str = None) -> datetime.datetime:
    """Current time as an aware datetime in the app timezone"""
    tz = pytz.timezone(timezone or config.TIMEZONE)
    return datetime.datetime.now(tz)


def get_last_post_timestamp(path: str = None) -> Optional[str]:
    """Get the ISO timestamp of the last successful weekly post

    Args:
        path: JSON file to read (defaults to config.LAST_POST_FILE)

    Returns:
        ISO 8601 string, or None if nothing has been posted yet
    """
    path = path or config.LAST_POST_FILE
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
                return data.get("last_post_timestamp")
    except (OSError, ValueError) as e:
        print(f"Error reading {os.path.basename(path)}: {e}")
    return None


def save_last_post_timestamp(path: str = None) -> str:
    """Save current time as the last successful weekly post"""
    path = path or config.LAST_POST_FILE
    timestamp = now_local().isoformat()
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"last_post_timestamp": timestamp}, f)
    print(f"🕒 Saved last post timestamp {timestamp}")
    return timestamp
