"""Discord gateway session — one discord.Client per active trigger.

GatewaySession owns the client and its subscriptions. SessionManager is the
entry point used by the trigger: connect, disconnect, and the short-lived
channel listing used to populate the channel picker.
"""

import asyncio
import sys
from typing import List, Optional

import aiohttp
import discord

from discord_trigger.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    GatewayConnectionError,
)
from discord_trigger.domain.models import (
    ChannelOption,
    Credential,
    EventCallback,
    EventKind,
    Subscription,
)
from discord_trigger.ports.inbound import RawAttachment, RawAuthor, RawMessage


def _log(msg: str):
    print(msg, file=sys.stderr)


def listening_intents() -> discord.Intents:
    """Guild membership, message metadata and message content only."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


def listing_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    return intents


def to_raw_message(message: discord.Message) -> RawMessage:
    """Convert a discord.Message into the platform-agnostic RawMessage."""
    return RawMessage(
        message_id=str(message.id),
        content=message.content,
        channel_id=str(message.channel.id),
        guild_id=str(message.guild.id) if message.guild else None,
        author=RawAuthor(
            id=str(message.author.id),
            username=message.author.name,
            bot=message.author.bot,
        ),
        created_at_ms=int(message.created_at.timestamp() * 1000),
        attachments=[
            RawAttachment(
                id=str(a.id),
                url=a.url,
                name=a.filename,
                content_type=a.content_type,
                size=a.size,
            )
            for a in message.attachments
        ],
    )


def _translate_error(exc: BaseException) -> Exception:
    """Map discord.py / transport failures onto the trigger taxonomy."""
    if isinstance(exc, (discord.LoginFailure, discord.PrivilegedIntentsRequired)):
        return AuthenticationError(f"Discord rejected the bot credential: {exc}")
    if isinstance(exc, discord.Forbidden):
        return AuthenticationError(f"Discord refused access: {exc}")
    return GatewayConnectionError(f"Discord gateway connection failed: {exc}")


_TRANSPORT_ERRORS = (discord.DiscordException, aiohttp.ClientError, OSError)


class GatewayClient(discord.Client):
    """discord.Client that forwards message-created events to its session."""

    def __init__(self, session: "GatewaySession", intents: discord.Intents, **discord_kwargs):
        super().__init__(intents=intents, **discord_kwargs)
        self._session = session

    async def on_ready(self):
        _log(f"[Discord Trigger] logged in as {self.user}")

    async def on_message(self, message: discord.Message):
        await self._session.dispatch(EventKind.MESSAGE_CREATED, message)


class GatewaySession:
    """Owned handle around one live gateway connection."""

    def __init__(self, intents: Optional[discord.Intents] = None):
        self._client = GatewayClient(self, intents or listening_intents())
        self._subscriptions: List[Subscription] = []
        self._runner: Optional[asyncio.Task] = None
        self._teardown: Optional[asyncio.Future] = None
        self._closed = False

    @property
    def client(self) -> GatewayClient:
        return self._client

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscriptions(self) -> List[Subscription]:
        return list(self._subscriptions)

    async def login(self, credential: Credential) -> None:
        try:
            await self._client.login(credential.token)
        except _TRANSPORT_ERRORS as e:
            await self.close()
            raise _translate_error(e) from e
        except asyncio.CancelledError:
            await self.close()
            raise

    async def open(self, credential: Credential) -> None:
        """Log in, start the gateway and wait until it reports ready."""
        await self.login(credential)
        self._runner = asyncio.create_task(self._client.connect(reconnect=False))
        ready = asyncio.create_task(self._client.wait_until_ready())
        try:
            done, _ = await asyncio.wait(
                {self._runner, ready}, return_when=asyncio.FIRST_COMPLETED,
            )
        except BaseException:
            # Cancelled while connecting: nothing may outlive the caller
            ready.cancel()
            await self.close()
            raise
        if ready in done and ready.exception() is None:
            self._runner.add_done_callback(self._on_runner_done)
            return

        ready.cancel()
        exc = None
        if self._runner.done() and not self._runner.cancelled():
            exc = self._runner.exception()
        elif ready.done() and not ready.cancelled():
            exc = ready.exception()
        await self.close()
        if exc is None:
            raise GatewayConnectionError("Discord gateway closed before it became ready")
        raise _translate_error(exc) from exc

    def _on_runner_done(self, task: asyncio.Task) -> None:
        if task.cancelled() or self._closed:
            return
        exc = task.exception()
        _log(f"[Discord Trigger] gateway connection ended: {exc or 'closed by Discord'}")
        # No reconnect: the session is over, release the client
        self._closed = True
        self.unsubscribe_all()
        self._teardown = asyncio.ensure_future(self._client.close())

    def subscribe(self, event_kind: EventKind, callback: EventCallback) -> Subscription:
        if self._closed:
            raise GatewayConnectionError("session is closed")
        if event_kind != EventKind.MESSAGE_CREATED:
            raise ConfigurationError(f"Unsupported event: {event_kind!r}")
        subscription = Subscription(EventKind.MESSAGE_CREATED, callback, self._forget)
        self._subscriptions.append(subscription)
        return subscription

    def _forget(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def unsubscribe_all(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()
        self._subscriptions.clear()

    async def dispatch(self, event_kind: EventKind, message: discord.Message) -> None:
        targets = [s for s in self._subscriptions if s.event_kind is event_kind]
        if not targets:
            return
        event = to_raw_message(message)
        for subscription in targets:
            await subscription.deliver(event)

    async def close(self) -> None:
        """Drop every subscription, then terminate the connection. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.unsubscribe_all()
        await self._client.close()
        if self._runner and not self._runner.done():
            self._runner.cancel()
            try:
                await self._runner
            except (asyncio.CancelledError, *_TRANSPORT_ERRORS):
                pass


class SessionManager:
    """Opens and closes gateway sessions for trigger instances."""

    async def connect(self, credential: Credential) -> GatewaySession:
        session = GatewaySession(listening_intents())
        await session.open(credential)
        return session

    async def disconnect(self, session: GatewaySession) -> None:
        await session.close()

    async def list_channels(self, credential: Credential) -> List[ChannelOption]:
        """List every named text-capable channel of every guild the bot is in."""
        session = GatewaySession(listing_intents())
        await session.login(credential)
        client = session.client
        options: List[ChannelOption] = []
        try:
            async for guild in client.fetch_guilds(limit=None):
                try:
                    channels = await guild.fetch_channels()
                except discord.Forbidden as e:
                    _log(f"[Discord Trigger] skipping guild {guild.name}: {e}")
                    continue
                for channel in channels:
                    if isinstance(channel, discord.abc.Messageable) and channel.name:
                        options.append(ChannelOption(
                            display_label=f"{guild.name} / {channel.name}",
                            channel_id=str(channel.id),
                        ))
        except _TRANSPORT_ERRORS as e:
            raise _translate_error(e) from e
        finally:
            await session.close()
        return options
