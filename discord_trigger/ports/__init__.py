"""Port interfaces (Hexagonal Architecture)."""

from discord_trigger.ports.inbound import RawAttachment, RawAuthor, RawMessage
from discord_trigger.ports.outbound import CredentialSource, EmissionSink, GatewaySessionPort

__all__ = [
    "RawAttachment",
    "RawAuthor",
    "RawMessage",
    "CredentialSource",
    "EmissionSink",
    "GatewaySessionPort",
]
