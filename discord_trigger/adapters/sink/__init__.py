"""Emission sinks for accepted events."""

from discord_trigger.adapters.sink.log_sink import LogSink
from discord_trigger.adapters.sink.webhook_sink import WorkflowWebhookSink


def create_sink(url: str = ""):
    """Webhook sink when a URL is configured, stderr otherwise."""
    if url:
        return WorkflowWebhookSink(url)
    return LogSink()


__all__ = ["LogSink", "WorkflowWebhookSink", "create_sink"]
