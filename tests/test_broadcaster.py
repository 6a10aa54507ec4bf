"""Broadcaster 테스트"""

from __future__ import annotations

from types import SimpleNamespace

import discord
import pytest

from src.models.schema import PriceSnapshot
from src.notification.broadcaster import Broadcaster
from src.notification.messages import build_price_update, build_range_alert
from tests.fakes import CHANNEL_NAME, make_channel, make_guild


@pytest.fixture
def broadcaster(guild_source: SimpleNamespace) -> Broadcaster:
    return Broadcaster(guild_source, CHANNEL_NAME)


class TestFindTargetChannel:
    def test_matches_name_and_text_type(self, broadcaster: Broadcaster) -> None:
        target = make_channel()
        guild = make_guild(
            9,
            "Mixed",
            channels=[
                make_channel(name="general"),
                make_channel(channel_type=discord.ChannelType.voice),
                target,
            ],
        )
        assert broadcaster.find_target_channel(guild) is target

    def test_voice_channel_with_same_name_ignored(self, broadcaster: Broadcaster) -> None:
        guild = make_guild(
            9,
            "VoiceOnly",
            channels=[make_channel(channel_type=discord.ChannelType.voice)],
        )
        assert broadcaster.find_target_channel(guild) is None

    def test_destinations_read_live(self, guild_source: SimpleNamespace) -> None:
        broadcaster = Broadcaster(guild_source, CHANNEL_NAME)
        new_guild = make_guild(3, "Guild C")
        guild_source.guilds.append(new_guild)
        assert new_guild in broadcaster.destinations()


class TestNotifyAll:
    @pytest.mark.asyncio
    async def test_sends_to_every_guild(
        self,
        broadcaster: Broadcaster,
        guild_a: SimpleNamespace,
        guild_b: SimpleNamespace,
        snapshot: PriceSnapshot,
    ) -> None:
        notification = build_price_update(snapshot)

        delivered = await broadcaster.notify_all(notification)

        assert delivered == 2
        for guild in (guild_a, guild_b):
            guild.channels[0].send.assert_awaited_once_with(content=notification.text)

    @pytest.mark.asyncio
    async def test_missing_channel_does_not_block_others(
        self,
        guild_b: SimpleNamespace,
        snapshot: PriceSnapshot,
    ) -> None:
        """채널이 없는 길드가 있어도 다른 길드는 수신"""
        guild_without_channel = make_guild(1, "Guild A", channels=[make_channel(name="off-topic")])
        source = SimpleNamespace(guilds=[guild_without_channel, guild_b])
        broadcaster = Broadcaster(source, CHANNEL_NAME)

        delivered = await broadcaster.notify_all(build_price_update(snapshot))

        assert delivered == 1
        guild_without_channel.channels[0].send.assert_not_awaited()
        guild_b.channels[0].send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delivery_failure_is_isolated(
        self,
        broadcaster: Broadcaster,
        guild_a: SimpleNamespace,
        guild_b: SimpleNamespace,
        snapshot: PriceSnapshot,
    ) -> None:
        guild_a.channels[0].send.side_effect = discord.DiscordException("Missing Access")

        delivered = await broadcaster.notify_all(build_price_update(snapshot))

        assert delivered == 1
        guild_b.channels[0].send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_guilds(self, snapshot: PriceSnapshot) -> None:
        broadcaster = Broadcaster(SimpleNamespace(guilds=[]), CHANNEL_NAME)
        assert await broadcaster.notify_all(build_price_update(snapshot)) == 0


class TestNotifyDestination:
    @pytest.mark.asyncio
    async def test_embed_converted(
        self,
        broadcaster: Broadcaster,
        guild_a: SimpleNamespace,
        snapshot: PriceSnapshot,
    ) -> None:
        notification = build_range_alert(snapshot)

        assert await broadcaster.notify_destination(guild_a, notification) is True

        kwargs = guild_a.channels[0].send.await_args.kwargs
        assert kwargs["content"] == notification.text
        embed = kwargs["embed"]
        assert isinstance(embed, discord.Embed)
        assert embed.title == "¡El precio del WoW Token está dentro del rango!"
        assert embed.color is not None and embed.color.value == 0xFFD700
        assert embed.footer.text == "Battle.net API"
        assert embed.timestamp is not None

    @pytest.mark.asyncio
    async def test_missing_channel_returns_false(
        self,
        broadcaster: Broadcaster,
        snapshot: PriceSnapshot,
    ) -> None:
        guild = make_guild(5, "Empty", channels=[])
        assert await broadcaster.notify_destination(guild, build_price_update(snapshot)) is False
