"""
애플리케이션 엔트리포인트

Discord 봇과 헬스체크 HTTP 서버를 하나의 이벤트 루프에서 함께 실행합니다.
"""

from __future__ import annotations

import asyncio

import uvicorn
from fastapi import FastAPI

from config.settings import Settings, settings
from src.api.health import router as health_router
from src.battlenet.client import BattleNetClient
from src.bot.client import WowTokenBot
from src.bot.commands import PriceCommand
from src.notification.broadcaster import Broadcaster
from src.scheduler.price_alert_scheduler import PriceAlertScheduler
from src.utils.logger import get_logger, setup_library_logging

logger = get_logger(__name__)

VERSION = "1.0.0"


def create_app(scheduler: PriceAlertScheduler | None = None) -> FastAPI:
    """헬스체크 FastAPI 앱 생성"""
    app = FastAPI(
        title="WoW Token Bot",
        description="WoW Token 시세 Discord 봇 헬스체크",
        version=VERSION,
    )
    app.state.price_scheduler = scheduler
    app.include_router(health_router)
    return app


def build_bot(config: Settings, bnet: BattleNetClient) -> WowTokenBot:
    """봇, 브로드캐스터, 스케줄러를 조립합니다."""
    bot = WowTokenBot(PriceCommand(bnet))
    broadcaster = Broadcaster(bot, config.channel_name)
    bot.attach_scheduler(
        PriceAlertScheduler(
            bnet,
            broadcaster,
            min_price=config.min_price,
            max_price=config.max_price,
            check_interval=config.check_interval,
            alert_interval=config.alert_interval,
        )
    )
    return bot


async def run(config: Settings = settings) -> None:
    """봇과 HTTP 서버 실행 (로그인 실패 등 치명적 오류는 그대로 전파)"""
    setup_library_logging()
    logger.info("🚀 WoW Token Bot 시작 (환경: %s)", config.app_env)

    async with BattleNetClient(config.client_id, config.client_secret) as bnet:
        bot = build_bot(config, bnet)
        app = create_app(bot.price_scheduler)
        server = uvicorn.Server(
            uvicorn.Config(app, host="0.0.0.0", port=config.port, log_level="info")
        )
        logger.info("HTTP 서버 포트: %d", config.port)

        async with bot:
            await asyncio.gather(server.serve(), bot.start(config.discord_token))

    logger.info("👋 WoW Token Bot 종료")


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
