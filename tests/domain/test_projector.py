"""Tests for the event projector — filtering and record shaping."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_trigger.domain.errors import ConsumerError
from discord_trigger.domain.models import EventKind, TriggerConfiguration
from discord_trigger.domain.projector import EventProjector, accepts, project, subscribe
from discord_trigger.ports.inbound import RawAttachment, RawAuthor, RawMessage


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _event(channel_id="C1", author_id="U1", bot=False, content="hi", attachments=None) -> RawMessage:
    return RawMessage(
        message_id="M1",
        content=content,
        channel_id=channel_id,
        guild_id="G1",
        author=RawAuthor(id=author_id, username="someone", bot=bot),
        created_at_ms=1700000000123,
        attachments=attachments or [],
    )


def _config(channel_id="C1", only_bot=False, bot_id="") -> TriggerConfiguration:
    return TriggerConfiguration(
        channel_id=channel_id,
        only_from_designated_author=only_bot,
        designated_author_id=bot_id,
    )


# ---------------------------------------------------------------------------
# accepts()
# ---------------------------------------------------------------------------

class TestChannelFilter:
    @pytest.mark.parametrize("only_bot,bot_id", [(False, ""), (True, ""), (True, "B1")])
    def test_other_channel_never_accepted(self, only_bot, bot_id):
        event = _event(channel_id="C2", author_id="B1", bot=True)
        assert accepts(_config(only_bot=only_bot, bot_id=bot_id), event) is False

    def test_channel_match_alone_decides_without_author_filter(self):
        config = _config()
        assert accepts(config, _event(bot=False)) is True
        assert accepts(config, _event(bot=True, author_id="B9")) is True

    def test_bot_id_ignored_when_author_filter_off(self):
        config = _config(only_bot=False, bot_id="B1")
        assert accepts(config, _event(author_id="U7", bot=False)) is True


class TestDesignatedAuthorFilter:
    def test_any_bot_when_id_empty(self):
        config = _config(only_bot=True, bot_id="")
        assert accepts(config, _event(author_id="B1", bot=True)) is True
        assert accepts(config, _event(author_id="B2", bot=True)) is True

    def test_human_rejected_when_id_empty(self):
        config = _config(only_bot=True, bot_id="")
        assert accepts(config, _event(author_id="U1", bot=False)) is False

    def test_matching_bot_accepted(self):
        config = _config(only_bot=True, bot_id="B1")
        assert accepts(config, _event(author_id="B1", bot=True)) is True

    def test_other_bot_rejected(self):
        config = _config(only_bot=True, bot_id="B1")
        assert accepts(config, _event(author_id="B2", bot=True)) is False

    def test_human_with_designated_id_rejected(self):
        """A non-bot account whose id equals the designated id is still rejected."""
        config = _config(only_bot=True, bot_id="B1")
        assert accepts(config, _event(author_id="B1", bot=False)) is False


# ---------------------------------------------------------------------------
# project()
# ---------------------------------------------------------------------------

class TestProject:
    def test_fields(self):
        record = project(_event(content="hello", author_id="U1"))
        assert record.message_id == "M1"
        assert record.content == "hello"
        assert record.author.id == "U1"
        assert record.author.username == "someone"
        assert record.author.is_bot is False
        assert record.channel_id == "C1"
        assert record.guild_id == "G1"
        assert record.created_at_epoch_ms == 1700000000123

    def test_attachments_keep_order_and_fields(self):
        attachments = [
            RawAttachment(id="a1", url="https://cdn/1.png", name="1.png", content_type="image/png", size=1),
            RawAttachment(id="a2", url="https://cdn/2.txt", name="2.txt", content_type=None, size=2),
            RawAttachment(id="a3", url="https://cdn/3.pdf", name="3.pdf", content_type="application/pdf", size=3),
        ]
        record = project(_event(attachments=attachments))
        assert [a.id for a in record.attachments] == ["a1", "a2", "a3"]
        second = record.attachments[1]
        assert (second.url, second.name, second.content_type, second.size) == (
            "https://cdn/2.txt", "2.txt", None, 2,
        )

    def test_zero_attachments(self):
        record = project(_event())
        assert record.attachments == ()
        assert record.to_dict()["attachments"] == []


# ---------------------------------------------------------------------------
# EventProjector / subscribe()
# ---------------------------------------------------------------------------

class TestEventProjector:
    @pytest.mark.asyncio
    async def test_plain_message_scenario(self):
        emit = AsyncMock()
        projector = EventProjector(_config(channel_id="C1", only_bot=False), emit)

        await projector.handle(_event(channel_id="C1", author_id="U1", bot=False, content="hi"))

        emit.assert_awaited_once()
        records = emit.call_args[0][0]
        assert len(records) == 1
        assert records[0].content == "hi"
        assert records[0].to_dict()["attachments"] == []

    @pytest.mark.asyncio
    async def test_bot_id_mismatch_scenario(self):
        emit = AsyncMock()
        projector = EventProjector(_config(channel_id="C1", only_bot=True, bot_id="B1"), emit)

        await projector.handle(_event(channel_id="C1", author_id="B2", bot=True))

        emit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_emit_failure_propagates(self):
        emit = AsyncMock(side_effect=ConsumerError("workflow down"))
        projector = EventProjector(_config(), emit)

        with pytest.raises(ConsumerError):
            await projector.handle(_event())
        assert emit.await_count == 1

    def test_subscribe_registers_message_created(self):
        session = MagicMock()
        subscribe(session, _config(), AsyncMock())
        session.subscribe.assert_called_once()
        assert session.subscribe.call_args[0][0] is EventKind.MESSAGE_CREATED
