#!/usr/bin/env python
"""
Weekly schedule posting entry points.

Usage:
    python scheduled_post.py post     # post once (for cron / external schedulers)
    python scheduled_post.py loop     # run the built-in weekly task
    python scheduled_post.py serve    # run the web API
"""

import sys
import asyncio
import argparse
from datetime import time as dt_time

import pytz
from discord.ext import tasks

from config import config, ScheduleConfig
from managers import Managers, create_managers
from utils.exceptions import ScheduleError
from utils.timestamp import now_local, save_last_post_timestamp


async def run_weekly_post(managers: Managers = None, cfg: ScheduleConfig = None) -> dict:
    """Post this week's schedule to Discord

    Zero-argument entry point for time-based triggers; failures are
    reported in the result instead of raised.

    Returns:
        {"success": bool, "message": str}
    """
    cfg = cfg or config
    managers = managers or create_managers(cfg)
    try:
        result = await managers.publisher.post_weekly_schedule()
    except ScheduleError as e:
        return {"success": False, "message": e.message}

    save_last_post_timestamp(cfg.LAST_POST_FILE)
    return result


def build_weekly_task(cfg: ScheduleConfig, managers: Managers) -> tasks.Loop:
    """Daily loop at POST_HOUR_UTC that only posts on POST_WEEKDAY"""

    @tasks.loop(time=dt_time(hour=cfg.POST_HOUR_UTC, minute=0, tzinfo=pytz.UTC))
    async def weekly_post_task():
        today = now_local(cfg.TIMEZONE).strftime('%A')
        if today != cfg.POST_WEEKDAY:
            return

        result = await run_weekly_post(managers, cfg)
        status = "✅" if result["success"] else "❌"
        print(f"{status} Weekly post: {result['message']}")

    return weekly_post_task


async def run_loop(cfg: ScheduleConfig):
    managers = create_managers(cfg)
    weekly_post_task = build_weekly_task(cfg, managers)
    print(f"⏰ Weekly post task ready ({cfg.POST_WEEKDAY} {cfg.POST_HOUR_UTC:02d}:00 UTC)")
    await weekly_post_task.start()


def serve(cfg: ScheduleConfig):
    from aiohttp import web
    from web_api import create_app

    app = create_app(create_managers(cfg), cfg)
    web.run_app(app, host=cfg.WEB_HOST, port=cfg.WEB_PORT)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Weekly schedule Discord poster")
    parser.add_argument("command", choices=["post", "loop", "serve"], nargs="?", default="post")
    args = parser.parse_args(argv)

    if args.command == "loop":
        asyncio.run(run_loop(config))
        return 0
    if args.command == "serve":
        serve(config)
        return 0

    result = asyncio.run(run_weekly_post())
    print(("✅ " if result["success"] else "❌ ") + result["message"])
    return 0 if result["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
