"""Setup check route (the only HTTP surface of the trigger).

The check lives at the single webhook path ``/webhook/{webhook_name}``.
A bare ``GET /webhook`` is shorthand for the ``setup`` check, the name the
host registers.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from discord_trigger.description import SETUP_WEBHOOK, WEBHOOK_PATH

setup_router = APIRouter(prefix=f"/{WEBHOOK_PATH}", tags=["Setup"])


@setup_router.get("", response_class=PlainTextResponse)
async def setup_check(request: Request):
    return request.app.state.trigger.webhook(SETUP_WEBHOOK)


@setup_router.get("/{webhook_name}", response_class=PlainTextResponse)
async def named_webhook(webhook_name: str, request: Request):
    return request.app.state.trigger.webhook(webhook_name)
