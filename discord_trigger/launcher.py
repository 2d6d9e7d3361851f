"""Standalone host for the Discord trigger.

    python -m discord_trigger.launcher            # listen and forward events
    python -m discord_trigger.launcher channels   # print the channel picker options
"""

import argparse
import asyncio
import sys
from typing import Optional

import uvicorn

from discord_trigger.adapters.credentials import EnvCredentialSource
from discord_trigger.adapters.sink import create_sink
from discord_trigger.adapters.web.server import create_app
from discord_trigger.config import AppConfig
from discord_trigger.domain.errors import TriggerError
from discord_trigger.trigger import DiscordTrigger


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_app(config: Optional[AppConfig] = None, trigger: Optional[DiscordTrigger] = None):
    config = config or AppConfig.from_env()
    trigger = trigger or DiscordTrigger()
    credentials = EnvCredentialSource()
    sink = create_sink(config.workflow_webhook_url)
    if config.workflow_webhook_url:
        _log(f"[{trigger.name}] forwarding events to workflow webhook")
    else:
        _log(f"[{trigger.name}] WORKFLOW_WEBHOOK_URL not set — logging events to stderr")

    async def activation():
        return await trigger.activate(credentials, config.trigger.as_parameters(), sink.emit)

    return create_app(trigger, activation=activation)


async def print_channels(trigger: Optional[DiscordTrigger] = None) -> int:
    trigger = trigger or DiscordTrigger()
    try:
        channels = await trigger.get_channels(EnvCredentialSource())
    except TriggerError as e:
        _log(f"[{trigger.name}] channel listing failed: {e}")
        return 1
    for label, channel_id in channels.items():
        print(f"{channel_id}\t{label}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="discord-trigger", description="Forward Discord messages to a workflow")
    parser.add_argument("command", nargs="?", default="run", choices=("run", "channels"))
    args = parser.parse_args(argv)

    if args.command == "channels":
        return asyncio.run(print_channels())

    config = AppConfig.from_env()
    app = build_app(config)
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level="info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
