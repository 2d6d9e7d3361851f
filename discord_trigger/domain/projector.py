"""Event projector — filters raw messages and shapes accepted ones.

Pure functions plus a small handler object; the gateway adapter converts
discord.Message into RawMessage before anything here sees it.
"""

from typing import Awaitable, Callable, Sequence

from discord_trigger.domain.models import (
    OutputAttachment,
    OutputAuthor,
    OutputRecord,
    Subscription,
    TriggerConfiguration,
)
from discord_trigger.ports.inbound import RawMessage

Emit = Callable[[Sequence[OutputRecord]], Awaitable[None]]


def accepts(configuration: TriggerConfiguration, event: RawMessage) -> bool:
    """Return True if the event passes the channel and author filters."""
    if event.channel_id != configuration.channel_id:
        return False
    if configuration.only_from_designated_author:
        if not event.author.bot:
            return False
        # Empty id means any bot author is accepted
        if configuration.designated_author_id and event.author.id != configuration.designated_author_id:
            return False
    return True


def project(event: RawMessage) -> OutputRecord:
    """Map a raw message onto the emitted record shape."""
    return OutputRecord(
        message_id=event.message_id,
        content=event.content,
        author=OutputAuthor(
            id=event.author.id,
            username=event.author.username,
            is_bot=event.author.bot,
        ),
        channel_id=event.channel_id,
        guild_id=event.guild_id,
        created_at_epoch_ms=event.created_at_ms,
        attachments=tuple(
            OutputAttachment(
                id=a.id,
                url=a.url,
                name=a.name,
                content_type=a.content_type,
                size=a.size,
            )
            for a in event.attachments
        ),
    )


class EventProjector:
    """Handler bound to one configuration and one emission sink."""

    def __init__(self, configuration: TriggerConfiguration, emit: Emit):
        self.configuration = configuration
        self._emit = emit

    async def handle(self, event: RawMessage) -> None:
        if not accepts(self.configuration, event):
            return
        # Sink failures propagate to the caller untouched
        await self._emit([project(event)])


def subscribe(session, configuration: TriggerConfiguration, emit: Emit) -> Subscription:
    """Register a projector for the configured event kind on a live session."""
    projector = EventProjector(configuration, emit)
    return session.subscribe(configuration.event_kind, projector.handle)
