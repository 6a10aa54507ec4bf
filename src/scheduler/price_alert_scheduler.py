"""
WoW Token 시세 스케줄러: 주기적 시세 알림 + 범위 진입 반복 알림

매 체크 주기마다:
1. 시세를 조회하고 (실패 시 이번 주기는 건너뜀)
2. 모든 길드로 시세를 브로드캐스트한 뒤
3. 길드별로 범위 진입/이탈을 판정하여 반복 알림 타이머를 시작/중지합니다.

길드별 상태는 IDLE / ALERTING 두 가지이며,
ALERTING 여부는 AlertTimerRegistry에 타이머가 등록되어 있는지로 결정됩니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.models.schema import PriceSnapshot
from src.notification.broadcaster import Broadcaster
from src.notification.messages import build_price_update, build_range_alert
from src.scheduler.alert_timers import AlertTimerRegistry
from src.utils.logger import get_logger

logger = get_logger(__name__)

CHECK_JOB_ID = "price_check"


class PriceSource(Protocol):
    async def get_wow_token_price(self) -> PriceSnapshot | None: ...


class AlertState(str, Enum):
    """길드별 알림 상태"""

    IDLE = "idle"
    ALERTING = "alerting"


class PriceAlertScheduler:
    """시세 체크 스케줄러"""

    def __init__(
        self,
        price_source: PriceSource,
        broadcaster: Broadcaster,
        *,
        min_price: int,
        max_price: int,
        check_interval: int,
        alert_interval: int,
        event_loop: Any | None = None,
    ) -> None:
        """스케줄러 초기화

        Parameters
        ----------
        price_source:
            시세 조회 객체 (BattleNetClient)
        broadcaster:
            길드별 메시지 전송기
        min_price, max_price:
            반복 알림을 시작할 가격 범위 (골드, 양 끝 포함)
        check_interval, alert_interval:
            시세 체크 / 반복 알림 주기 (초)
        event_loop:
            APScheduler가 붙을 asyncio 이벤트 루프. None 이면 start() 시점의
            실행 중인 루프를 사용합니다.
        """
        self._price_source = price_source
        self._broadcaster = broadcaster
        self.min_price = min_price
        self.max_price = max_price
        self.check_interval = check_interval
        self.alert_interval = alert_interval

        kwargs: dict[str, Any] = {}
        if event_loop is not None:
            kwargs["event_loop"] = event_loop
        self._scheduler = AsyncIOScheduler(**kwargs)
        self.alert_timers = AlertTimerRegistry(self._scheduler)
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    # ───────────────── 시작 / 중지 ─────────────────

    def start(self) -> None:
        """스케줄러 시작"""
        if self._is_running:
            logger.warning("스케줄러가 이미 실행 중입니다")
            return

        self._scheduler.add_job(
            self.run_check,
            trigger=IntervalTrigger(seconds=self.check_interval),
            id=CHECK_JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        self._is_running = True
        logger.info(
            "시세 스케줄러 시작: 체크 %d초, 알림 %d초 간격, 범위=[%d, %d]",
            self.check_interval,
            self.alert_interval,
            self.min_price,
            self.max_price,
        )

    def shutdown(self) -> None:
        """스케줄러 중지. 진행 중인 알림 타이머는 함께 폐기됩니다."""
        if not self._is_running:
            return

        self._scheduler.shutdown(wait=False)
        self.alert_timers.clear()
        self._is_running = False
        logger.info("시세 스케줄러 중지")

    # ───────────────── 체크 주기 ─────────────────

    def is_in_range(self, price: int) -> bool:
        return self.min_price <= price <= self.max_price

    def state_of(self, destination_id: int) -> AlertState:
        if destination_id in self.alert_timers:
            return AlertState.ALERTING
        return AlertState.IDLE

    async def run_check(self) -> PriceSnapshot | None:
        """한 번의 체크 주기 실행

        Returns:
            조회된 시세 (실패 시 None, 이 경우 전송/상태 변경 없음)
        """
        snapshot = await self._price_source.get_wow_token_price()
        if snapshot is None:
            logger.info("시세 조회 실패, 이번 주기 건너뜀")
            return None

        # 브로드캐스트가 범위 판정보다 먼저
        await self._broadcaster.notify_all(build_price_update(snapshot))

        guilds = self._broadcaster.destinations()
        for guild in guilds:
            self.evaluate(guild, snapshot)

        # 더 이상 참여하지 않는 길드의 타이머 정리
        for destination_id in self.alert_timers.prune(guild.id for guild in guilds):
            logger.info("퇴장한 길드의 알림 타이머 정리: 길드=%s", destination_id)
        return snapshot

    def forget(self, destination_id: int) -> bool:
        """길드 퇴장 시 해당 길드의 알림 타이머 중지"""
        return self.alert_timers.stop(destination_id)

    def evaluate(self, guild: Any, snapshot: PriceSnapshot) -> AlertState:
        """길드 하나에 대해 IDLE/ALERTING 전이를 판정합니다."""
        if self.is_in_range(snapshot.price):
            if self.alert_timers.start(
                guild.id,
                self._send_range_alert,
                self.alert_interval,
                args=(guild, snapshot),
            ):
                logger.info(
                    "범위 진입: 길드=%s, 가격=%d 골드",
                    guild.name,
                    snapshot.price,
                )
        elif self.alert_timers.stop(guild.id):
            logger.info(
                "범위 이탈: 길드=%s, 가격=%d 골드",
                guild.name,
                snapshot.price,
            )
        return self.state_of(guild.id)

    async def _send_range_alert(self, guild: Any, snapshot: PriceSnapshot) -> None:
        # 범위 진입 시점의 스냅샷을 그대로 재사용 (재조회하지 않음)
        await self._broadcaster.notify_destination(guild, build_range_alert(snapshot))
