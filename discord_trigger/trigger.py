"""Trigger lifecycle: Inactive -> Connecting -> Listening -> Inactive.

Activation hands back an ActiveTrigger that owns the gateway session; the
host calls its manual_trigger_function (or DiscordTrigger.deactivate) to
stop listening. Nothing is stashed in process-wide state.
"""

import sys
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from discord_trigger.adapters.discord.session import SessionManager
from discord_trigger.description import (
    CREDENTIAL_NAME,
    DISPLAY_NAME,
    SETUP_WEBHOOK,
    resolve_parameters,
)
from discord_trigger.domain.errors import TriggerError
from discord_trigger.domain.models import Subscription, TriggerConfiguration
from discord_trigger.domain.projector import Emit, subscribe
from discord_trigger.ports.outbound import CredentialSource, GatewaySessionPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class TriggerState(str, Enum):
    INACTIVE = "inactive"
    CONNECTING = "connecting"
    LISTENING = "listening"


class ActiveTrigger:
    """Handle returned by activation; owns the session until closed."""

    def __init__(
        self,
        trigger: "DiscordTrigger",
        session: GatewaySessionPort,
        subscription: Subscription,
        configuration: TriggerConfiguration,
    ):
        self._trigger = trigger
        self.session = session
        self.subscription = subscription
        self.configuration = configuration
        self._stopped = False

    @property
    def closed(self) -> bool:
        """True once stopped, or once the gateway dropped the session."""
        return self._stopped or self.session.closed

    async def close(self) -> None:
        """Remove the subscription and close the session. Safe to repeat."""
        if self._stopped:
            return
        self._stopped = True
        self.subscription.unsubscribe()
        try:
            await self._trigger.session_manager.disconnect(self.session)
        finally:
            self._trigger._release(self)
        _log(f"[{self._trigger.name}] stopped listening on channel {self.configuration.channel_id}")

    async def manual_trigger_function(self) -> None:
        await self.close()


class DiscordTrigger:
    """One trigger instance: at most one live session at a time."""

    def __init__(self, session_manager: Optional[SessionManager] = None, name: str = DISPLAY_NAME):
        self.session_manager = session_manager or SessionManager()
        self.name = name
        self._state = TriggerState.INACTIVE
        self._handle: Optional[ActiveTrigger] = None

    @property
    def state(self) -> TriggerState:
        if self._state is TriggerState.LISTENING and self._handle is not None and self._handle.closed:
            return TriggerState.INACTIVE
        return self._state

    def _release(self, handle: ActiveTrigger) -> None:
        # A stale handle must not reset a newer activation
        if self._handle is handle:
            self._handle = None
            self._state = TriggerState.INACTIVE

    async def activate(
        self,
        credentials: CredentialSource,
        parameters: Mapping[str, Any],
        emit: Emit,
    ) -> ActiveTrigger:
        state = self.state
        if state is not TriggerState.INACTIVE:
            raise TriggerError(f"{self.name} is already {state.value}")

        configuration = TriggerConfiguration.from_parameters(resolve_parameters(parameters))
        credential = credentials.get_credential(CREDENTIAL_NAME)

        self._handle = None
        self._state = TriggerState.CONNECTING
        try:
            session = await self.session_manager.connect(credential)
        except BaseException:
            # Includes cancellation while waiting for the gateway
            self._state = TriggerState.INACTIVE
            raise

        try:
            subscription = subscribe(session, configuration, emit)
        except BaseException:
            await self.session_manager.disconnect(session)
            self._state = TriggerState.INACTIVE
            raise
        self._handle = ActiveTrigger(self, session, subscription, configuration)
        self._state = TriggerState.LISTENING
        _log(f"[{self.name}] listening for {configuration.event_kind.value} on channel {configuration.channel_id}")
        return self._handle

    async def deactivate(self, handle: ActiveTrigger) -> None:
        await handle.close()

    def webhook(self, webhook_name: str) -> str:
        """Answer the host's setup check."""
        if webhook_name == SETUP_WEBHOOK:
            return f"{self.name} setup successful!"
        return "Unknown webhook"

    async def get_channels(self, credentials: CredentialSource) -> Dict[str, str]:
        """Channel picker options as {"<guild> / <channel>": channel_id}."""
        credential = credentials.get_credential(CREDENTIAL_NAME)
        options = await self.session_manager.list_channels(credential)
        return {o.display_label: o.channel_id for o in options}
