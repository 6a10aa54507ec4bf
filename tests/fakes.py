"""테스트용 가짜 Discord 길드/채널"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord

CHANNEL_NAME = "precios"


def make_channel(
    name: str = CHANNEL_NAME,
    channel_type: discord.ChannelType = discord.ChannelType.text,
) -> SimpleNamespace:
    """send()가 AsyncMock인 가짜 채널"""
    return SimpleNamespace(name=name, type=channel_type, send=AsyncMock())


def make_guild(guild_id: int, name: str, channels: list | None = None) -> SimpleNamespace:
    """가짜 길드 (channels 미지정 시 대상 텍스트 채널 1개)"""
    if channels is None:
        channels = [make_channel()]
    return SimpleNamespace(id=guild_id, name=name, channels=channels)


def make_message(content: str, *, bot: bool = False) -> SimpleNamespace:
    """가짜 수신 메시지"""
    return SimpleNamespace(
        content=content,
        author=SimpleNamespace(bot=bot, name="tester"),
        channel=SimpleNamespace(send=AsyncMock()),
    )
