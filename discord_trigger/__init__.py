"""Discord Trigger — forwards Discord gateway events into a workflow engine."""

from discord_trigger.config import __version__

__all__ = ["__version__"]
