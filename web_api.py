"""
JSON operations surface for the schedule web UI.

Routes:
    GET    /api/events            list events
    POST   /api/events            add event
    PUT    /api/events/{id}       replace event
    DELETE /api/events/{id}       delete event
    GET    /api/settings          read posting settings
    POST   /api/settings          save posting settings (partial)
    POST   /api/post-image        post a schedule image to Discord
    POST   /api/post-schedule     post the weekly schedule now
    GET    /api/health            status + last weekly post time
"""

import asyncio

from aiohttp import web

from config import config, ScheduleConfig
from managers import Managers
from utils.error_handling import log_error
from utils.exceptions import (
    ScheduleError,
    ValidationError,
    EventNotFoundError,
    EmptyTableError,
    WebhookNotConfiguredError,
    WebhookRejectedError,
    StorageUnavailableError,
)
from utils.timestamp import get_last_post_timestamp

MANAGERS_KEY = web.AppKey('managers', Managers)
CONFIG_KEY = web.AppKey('config', ScheduleConfig)

ERROR_STATUS = [
    (ValidationError, 400),
    (WebhookNotConfiguredError, 400),
    (EventNotFoundError, 404),
    (EmptyTableError, 404),
    (WebhookRejectedError, 502),
    (StorageUnavailableError, 503),
]

routes = web.RouteTableDef()


def error_status(error: ScheduleError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Turn schedule errors into {success: false, message} responses"""
    try:
        return await handler(request)
    except ScheduleError as e:
        return web.json_response(
            {"success": False, "message": e.message},
            status=error_status(e)
        )
    except web.HTTPException:
        raise
    except Exception as e:
        log_error(e, "Web request", {"path": request.path, "method": request.method})
        return web.json_response(
            {"success": False, "message": "内部エラーが発生しました"},
            status=500
        )


async def read_json(request: web.Request) -> dict:
    try:
        data = await request.json()
    except ValueError:
        raise web.HTTPBadRequest(
            text='{"success": false, "message": "JSONの形式が不正です"}',
            content_type='application/json'
        )
    if not isinstance(data, dict):
        raise web.HTTPBadRequest(
            text='{"success": false, "message": "JSONオブジェクトを送信してください"}',
            content_type='application/json'
        )
    return data


# ============================================================================
# EVENTS
# ============================================================================

@routes.get('/api/events')
async def list_events(request: web.Request):
    events = request.app[MANAGERS_KEY].events
    result = await asyncio.to_thread(events.list_events)
    return web.json_response([e.to_dict() for e in result])


@routes.post('/api/events')
async def add_event(request: web.Request):
    data = await read_json(request)
    events = request.app[MANAGERS_KEY].events
    result = await asyncio.to_thread(events.add_event, data)
    return web.json_response(result, status=201)


@routes.put('/api/events/{event_id}')
async def update_event(request: web.Request):
    data = await read_json(request)
    data['id'] = request.match_info['event_id']
    events = request.app[MANAGERS_KEY].events
    result = await asyncio.to_thread(events.update_event, data)
    return web.json_response(result)


@routes.delete('/api/events/{event_id}')
async def delete_event(request: web.Request):
    events = request.app[MANAGERS_KEY].events
    result = await asyncio.to_thread(events.delete_event, request.match_info['event_id'])
    return web.json_response(result)


# ============================================================================
# SETTINGS & POSTING
# ============================================================================

@routes.get('/api/settings')
async def get_settings(request: web.Request):
    settings = await asyncio.to_thread(request.app[MANAGERS_KEY].settings.get_settings)
    return web.json_response(settings.to_dict())


@routes.post('/api/settings')
async def save_settings(request: web.Request):
    data = await read_json(request)
    result = await asyncio.to_thread(request.app[MANAGERS_KEY].settings.save_settings, data)
    return web.json_response(result)


@routes.post('/api/post-image')
async def post_image(request: web.Request):
    data = await read_json(request)
    publisher = request.app[MANAGERS_KEY].publisher
    result = await publisher.post_image(data.get('image', ''))
    return web.json_response(result)


@routes.post('/api/post-schedule')
async def post_schedule(request: web.Request):
    publisher = request.app[MANAGERS_KEY].publisher
    result = await publisher.post_weekly_schedule()
    return web.json_response(result)


@routes.get('/api/health')
async def health_check(request: web.Request):
    last_post_file = request.app[CONFIG_KEY].LAST_POST_FILE
    last_posted_at = await asyncio.to_thread(get_last_post_timestamp, last_post_file)
    return web.json_response({
        "status": "healthy",
        "lastPostedAt": last_posted_at,
    })


def create_app(managers: Managers, cfg: ScheduleConfig = None) -> web.Application:
    """Build the aiohttp application around a set of managers"""
    app = web.Application(middlewares=[error_middleware])
    app[MANAGERS_KEY] = managers
    app[CONFIG_KEY] = cfg or config
    app.add_routes(routes)
    return app
