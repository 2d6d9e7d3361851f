"""Discord gateway adapter."""

from discord_trigger.adapters.discord.session import GatewayClient, GatewaySession, SessionManager, to_raw_message

__all__ = ["GatewayClient", "GatewaySession", "SessionManager", "to_raw_message"]
