"""Trigger error taxonomy."""


class TriggerError(Exception):
    """Base class for all trigger failures"""
    pass


class ConfigurationError(TriggerError):
    """Raised when trigger parameters are missing or invalid"""
    pass


class AuthenticationError(TriggerError):
    """Raised when Discord rejects the bot token or its intents"""
    pass


class GatewayConnectionError(TriggerError, ConnectionError):
    """Raised on transport failure while opening the gateway connection"""
    pass


class ConsumerError(TriggerError):
    """Raised by emission sinks when the workflow side refuses a record"""
    pass
