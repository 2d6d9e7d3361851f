"""Inbound port — platform-agnostic view of a delivered message."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RawAuthor:
    id: str
    username: str
    bot: bool


@dataclass
class RawAttachment:
    id: str
    url: str
    name: str
    content_type: Optional[str]
    size: int


@dataclass
class RawMessage:
    """Gateway-agnostic "message created" event, transient per handler call."""

    message_id: str
    content: str
    channel_id: str
    guild_id: Optional[str]
    author: RawAuthor
    created_at_ms: int
    attachments: List[RawAttachment] = field(default_factory=list)
