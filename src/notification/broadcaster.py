"""
Discord 브로드캐스트 모듈

연결된 모든 길드(서버)에서 설정된 이름의 텍스트 채널을 찾아
메시지를 전송합니다. 한 길드의 실패가 다른 길드 전송을 막지 않습니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

import discord

from src.models.schema import Notification
from src.utils.logger import get_logger

logger = get_logger(__name__)


class GuildSource(Protocol):
    """현재 연결된 길드 목록을 제공하는 객체 (discord.Client)"""

    @property
    def guilds(self) -> Iterable[Any]: ...


class Broadcaster:
    """길드별 대상 채널 전송기"""

    def __init__(self, source: GuildSource, channel_name: str) -> None:
        """
        Args:
            source: 연결된 길드 목록 제공자 (보통 discord.Client)
            channel_name: 메시지를 보낼 텍스트 채널 이름
        """
        self._source = source
        self.channel_name = channel_name

    def destinations(self) -> list[Any]:
        """현재 연결된 길드 목록 (캐시하지 않음)"""
        return list(self._source.guilds)

    def find_target_channel(self, guild: Any) -> Any | None:
        """길드에서 이름이 일치하는 텍스트 채널을 찾습니다."""
        for channel in guild.channels:
            if channel.name == self.channel_name and channel.type == discord.ChannelType.text:
                return channel
        return None

    async def notify_destination(self, guild: Any, notification: Notification) -> bool:
        """
        한 길드의 대상 채널로 메시지를 전송합니다.

        Returns:
            전송 성공 여부
        """
        channel = self.find_target_channel(guild)
        if channel is None:
            logger.warning(
                "채널 '%s'을(를) 찾을 수 없습니다: 길드=%s",
                self.channel_name,
                guild.name,
            )
            return False

        kwargs: dict[str, Any] = {"content": notification.text}
        if notification.embed is not None:
            kwargs["embed"] = discord.Embed.from_dict(notification.embed)

        try:
            await channel.send(**kwargs)
        except discord.DiscordException as e:
            logger.error(
                "메시지 전송 실패: 길드=%s, 종류=%s, 오류=%s",
                guild.name,
                notification.kind.value,
                e,
            )
            return False
        return True

    async def notify_all(self, notification: Notification) -> int:
        """
        연결된 모든 길드로 메시지를 전송합니다.

        Returns:
            전송에 성공한 길드 수
        """
        delivered = 0
        for guild in self.destinations():
            if await self.notify_destination(guild, notification):
                delivered += 1
        logger.info(
            "브로드캐스트 완료: 종류=%s, 성공=%d",
            notification.kind.value,
            delivered,
        )
        return delivered
