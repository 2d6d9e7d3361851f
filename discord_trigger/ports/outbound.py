"""Outbound ports — interfaces for host and gateway adapters."""

from typing import Protocol, Sequence, runtime_checkable

from discord_trigger.domain.models import Credential, EventCallback, EventKind, OutputRecord, Subscription


@runtime_checkable
class CredentialSource(Protocol):
    """Host-provided credential lookup."""

    def get_credential(self, name: str) -> Credential: ...


@runtime_checkable
class EmissionSink(Protocol):
    """Host-provided workflow sink; called with one record per accepted event."""

    async def emit(self, records: Sequence[OutputRecord]) -> None: ...


@runtime_checkable
class GatewaySessionPort(Protocol):
    """A live gateway connection that events can be subscribed on."""

    @property
    def closed(self) -> bool: ...

    def subscribe(self, event_kind: EventKind, callback: EventCallback) -> Subscription: ...

    def unsubscribe_all(self) -> None: ...

    async def close(self) -> None: ...
