"""Environment-backed credential source — implements CredentialSource."""

from discord_trigger.config import CONFIG
from discord_trigger.description import CREDENTIAL_NAME
from discord_trigger.domain.errors import ConfigurationError
from discord_trigger.domain.models import Credential


class EnvCredentialSource:
    """Resolves the bot credential from DISCORD_BOT_TOKEN."""

    def __init__(self, token: str = ""):
        self._token = token

    @property
    def is_configured(self) -> bool:
        return bool(self._token or CONFIG["discord_bot_token"])

    def get_credential(self, name: str) -> Credential:
        if name != CREDENTIAL_NAME:
            raise ConfigurationError(f"Unknown credential: {name!r}")
        token = self._token or CONFIG["discord_bot_token"]
        if not token:
            raise ConfigurationError("DISCORD_BOT_TOKEN is not set")
        return Credential(token=token)
