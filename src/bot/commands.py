"""
채팅 명령 처리

``!precio`` 명령에 현재 WoW Token 시세로 응답합니다.
인자가 붙거나 봇이 보낸 메시지는 무시합니다.
"""

from __future__ import annotations

from typing import Any

import discord

from src.notification.messages import APOLOGY_MESSAGE, format_price_update
from src.scheduler.price_alert_scheduler import PriceSource
from src.utils.logger import get_logger

logger = get_logger(__name__)

PRICE_COMMAND = "!precio"


class PriceCommand:
    """!precio 명령 응답기"""

    def __init__(self, price_source: PriceSource) -> None:
        self._price_source = price_source

    @staticmethod
    def matches(message: Any) -> bool:
        if message.author.bot:
            return False
        return message.content.strip() == PRICE_COMMAND

    async def handle(self, message: Any) -> bool:
        """
        메시지가 명령이면 같은 채널로 응답합니다.

        Returns:
            응답했으면 True
        """
        if not self.matches(message):
            return False

        snapshot = await self._price_source.get_wow_token_price()
        if snapshot is None:
            logger.warning("!precio 응답: 시세 조회 실패 (사용자=%s)", message.author)
            reply = APOLOGY_MESSAGE
        else:
            reply = format_price_update(snapshot)

        try:
            await message.channel.send(reply)
        except discord.DiscordException as e:
            logger.error("!precio 응답 전송 실패: %s", e)
        return True
