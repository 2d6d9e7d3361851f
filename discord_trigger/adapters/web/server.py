"""FastAPI application hosting the setup check and the trigger lifecycle."""

import sys
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI

from discord_trigger.adapters.web.setup_routes import setup_router
from discord_trigger.trigger import ActiveTrigger, DiscordTrigger

Activation = Callable[[], Awaitable[ActiveTrigger]]


def _log(msg: str):
    print(msg, file=sys.stderr)


def create_app(trigger: DiscordTrigger, activation: Optional[Activation] = None) -> FastAPI:
    """Build the app; when given, activation runs at startup and is undone at shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        handle: Optional[ActiveTrigger] = None
        if activation is not None:
            handle = await activation()
        app.state.active_trigger = handle
        try:
            yield
        finally:
            if handle is not None:
                await handle.manual_trigger_function()
            _log(f"[{trigger.name}] server stopped")

    app = FastAPI(title=trigger.name, lifespan=lifespan)
    app.state.trigger = trigger
    app.state.active_trigger = None
    app.include_router(setup_router)
    return app
