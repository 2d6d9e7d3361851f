"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple

from discord_trigger.domain.errors import ConfigurationError

TRUTHY = ("1", "true", "yes", "on")
FALSY = ("0", "false", "no", "off", "")


def parse_flag(value: Any) -> bool:
    """Read a boolean parameter; hosts may hand flags over as strings."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUTHY:
            return True
        if text in FALSY:
            return False
        raise ConfigurationError(f"Not a boolean: {value!r}")
    if isinstance(value, int):
        return bool(value)
    raise ConfigurationError(f"Not a boolean: {value!r}")


class EventKind(str, Enum):
    MESSAGE_CREATED = "messageCreated"


@dataclass(frozen=True)
class Credential:
    """Bearer token for the bot account. Kept out of repr."""

    token: str = field(repr=False)


@dataclass(frozen=True)
class TriggerConfiguration:
    """Immutable filter settings chosen when the trigger is registered."""

    channel_id: str
    event_kind: EventKind = EventKind.MESSAGE_CREATED
    only_from_designated_author: bool = False
    designated_author_id: str = ""

    def __post_init__(self):
        if not self.channel_id:
            raise ConfigurationError("channelId is required")
        try:
            object.__setattr__(self, "event_kind", EventKind(self.event_kind))
        except ValueError:
            raise ConfigurationError(f"Unsupported event: {self.event_kind!r}") from None

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any]) -> "TriggerConfiguration":
        """Build from host parameters (event, channelId, onlyBot, botId)."""
        return cls(
            channel_id=str(parameters.get("channelId") or "").strip(),
            event_kind=parameters.get("event", EventKind.MESSAGE_CREATED.value),
            only_from_designated_author=parse_flag(parameters.get("onlyBot", False)),
            designated_author_id=str(parameters.get("botId") or "").strip(),
        )


@dataclass(frozen=True)
class OutputAuthor:
    id: str
    username: str
    is_bot: bool


@dataclass(frozen=True)
class OutputAttachment:
    id: str
    url: str
    name: str
    content_type: Optional[str]
    size: int


@dataclass(frozen=True)
class OutputRecord:
    """Projected shape handed to the workflow, one per accepted event."""

    message_id: str
    content: str
    author: OutputAuthor
    channel_id: str
    guild_id: Optional[str]
    created_at_epoch_ms: int
    attachments: Tuple[OutputAttachment, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messageId": self.message_id,
            "content": self.content,
            "author": {
                "id": self.author.id,
                "username": self.author.username,
                "isBot": self.author.is_bot,
            },
            "channelId": self.channel_id,
            "guildId": self.guild_id,
            "createdAtEpochMs": self.created_at_epoch_ms,
            "attachments": [
                {
                    "id": a.id,
                    "url": a.url,
                    "name": a.name,
                    "contentType": a.content_type,
                    "size": a.size,
                }
                for a in self.attachments
            ],
        }


@dataclass(frozen=True)
class ChannelOption:
    display_label: str
    channel_id: str


EventCallback = Callable[[Any], Awaitable[None]]


class Subscription:
    """One callback bound to one event kind, with an explicit unsubscribe."""

    def __init__(
        self,
        event_kind: EventKind,
        callback: EventCallback,
        on_unsubscribe: Optional[Callable[["Subscription"], None]] = None,
    ):
        self.event_kind = event_kind
        self._callback = callback
        self._on_unsubscribe = on_unsubscribe
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    async def deliver(self, event: Any) -> None:
        if not self._active:
            return
        await self._callback(event)

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._on_unsubscribe:
            self._on_unsubscribe(self)
