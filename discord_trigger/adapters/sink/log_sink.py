"""Fallback sink: one JSON line per record on stderr."""

import json
import sys
from typing import Sequence

from discord_trigger.domain.models import OutputRecord


class LogSink:
    async def emit(self, records: Sequence[OutputRecord]) -> None:
        for record in records:
            print(json.dumps(record.to_dict(), ensure_ascii=False), file=sys.stderr)
