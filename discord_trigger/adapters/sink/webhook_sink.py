"""Workflow webhook sink using aiohttp — implements EmissionSink."""

from typing import Sequence

import aiohttp

from discord_trigger.domain.errors import ConsumerError
from discord_trigger.domain.models import OutputRecord


class WorkflowWebhookSink:
    """POSTs each emitted batch as a JSON array to the workflow's webhook."""

    def __init__(self, url: str):
        self.url = url

    async def emit(self, records: Sequence[OutputRecord]) -> None:
        payload = [r.to_dict() for r in records]
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.url, json=payload) as resp:
                    if resp.status >= 300:
                        body = await resp.text()
                        raise ConsumerError(f"Workflow webhook returned {resp.status}: {body[:200]}")
        except aiohttp.ClientError as e:
            raise ConsumerError(f"Workflow webhook unreachable: {e}") from e
