"""
Discord 게이트웨이 클라이언트

길드/메시지 이벤트를 받아 명령 응답기와 시세 스케줄러로 전달합니다.
"""

from __future__ import annotations

import discord

from src.bot.commands import PriceCommand
from src.scheduler.price_alert_scheduler import PriceAlertScheduler
from src.utils.logger import get_logger

logger = get_logger(__name__)


def build_intents() -> discord.Intents:
    """길드, 길드 메시지, 메시지 본문 인텐트"""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class WowTokenBot(discord.Client):
    """WoW Token 시세 봇"""

    def __init__(
        self,
        command: PriceCommand,
        scheduler: PriceAlertScheduler | None = None,
        *,
        intents: discord.Intents | None = None,
    ) -> None:
        super().__init__(intents=intents or build_intents())
        self.command = command
        self.price_scheduler = scheduler

    def attach_scheduler(self, scheduler: PriceAlertScheduler) -> None:
        self.price_scheduler = scheduler

    async def on_ready(self) -> None:
        logger.info("봇 연결 완료: %s (길드 %d개)", self.user, len(self.guilds))
        # 재연결 시 on_ready가 다시 호출되어도 스케줄러는 한 번만 시작
        if self.price_scheduler is not None and not self.price_scheduler.is_running:
            self.price_scheduler.start()

    async def on_guild_remove(self, guild: discord.Guild) -> None:
        logger.info("길드에서 제거됨: %s", guild.name)
        if self.price_scheduler is not None:
            self.price_scheduler.forget(guild.id)

    async def on_message(self, message: discord.Message) -> None:
        await self.command.handle(message)

    async def close(self) -> None:
        if self.price_scheduler is not None:
            self.price_scheduler.shutdown()
        await super().close()
