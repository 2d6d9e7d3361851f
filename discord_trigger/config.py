"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from typing import Dict

from dotenv import load_dotenv

from discord_trigger.domain.models import TRUTHY

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

SUPPORTED_EVENTS = ("messageCreated",)
TRIGGER_EVENT = os.getenv("DISCORD_TRIGGER_EVENT", "messageCreated").strip()
if TRIGGER_EVENT not in SUPPORTED_EVENTS:
    _stderr_print(f"Unsupported DISCORD_TRIGGER_EVENT={TRIGGER_EVENT!r}, falling back to 'messageCreated'")
    TRIGGER_EVENT = "messageCreated"

CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "3000")),
    # Credential (never logged)
    "discord_bot_token": os.getenv("DISCORD_BOT_TOKEN", ""),
    # Trigger parameters
    "event": TRIGGER_EVENT,
    "channel_id": os.getenv("DISCORD_CHANNEL_ID", "").strip(),
    "only_bot": os.getenv("DISCORD_ONLY_BOT", "false").strip().lower() in TRUTHY,
    "bot_id": os.getenv("DISCORD_BOT_ID", "").strip(),
    # Emission sink; records are logged to stderr when unset
    "workflow_webhook_url": os.getenv("WORKFLOW_WEBHOOK_URL", "").strip(),
}


# ── Typed config ────────────────────────────────────────────


@dataclass
class TriggerParametersConfig:
    event: str = "messageCreated"
    channel_id: str = ""
    only_bot: bool = False
    bot_id: str = ""

    def as_parameters(self) -> Dict[str, object]:
        """Render as the host-style parameter mapping the trigger consumes."""
        return {
            "event": self.event,
            "channelId": self.channel_id,
            "onlyBot": self.only_bot,
            "botId": self.bot_id,
        }


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class AppConfig:
    """Typed configuration assembled from the environment."""

    server: ServerConfig = field(default_factory=ServerConfig)
    trigger: TriggerParametersConfig = field(default_factory=TriggerParametersConfig)
    workflow_webhook_url: str = ""

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            server=ServerConfig(host=CONFIG["host"], port=CONFIG["port"]),
            trigger=TriggerParametersConfig(
                event=CONFIG["event"],
                channel_id=CONFIG["channel_id"],
                only_bot=CONFIG["only_bot"],
                bot_id=CONFIG["bot_id"],
            ),
            workflow_webhook_url=CONFIG["workflow_webhook_url"],
        )
