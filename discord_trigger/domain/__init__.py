"""Domain layer — pure Python, no framework dependencies."""

from discord_trigger.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    ConsumerError,
    GatewayConnectionError,
    TriggerError,
)
from discord_trigger.domain.models import (
    ChannelOption,
    Credential,
    EventKind,
    OutputAttachment,
    OutputAuthor,
    OutputRecord,
    Subscription,
    TriggerConfiguration,
)
from discord_trigger.domain.projector import EventProjector, accepts, project, subscribe

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ConsumerError",
    "GatewayConnectionError",
    "TriggerError",
    "ChannelOption",
    "Credential",
    "EventKind",
    "OutputAttachment",
    "OutputAuthor",
    "OutputRecord",
    "Subscription",
    "TriggerConfiguration",
    "EventProjector",
    "accepts",
    "project",
    "subscribe",
]
