"""
길드별 반복 알림 타이머 레지스트리

APScheduler의 interval job을 길드 ID로 관리합니다.
길드당 활성 타이머는 최대 1개입니다.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.utils.logger import get_logger

logger = get_logger(__name__)

JOB_ID_PREFIX = "range_alert"


class AlertTimerRegistry:
    """길드 ID → 반복 알림 job 매핑"""

    def __init__(self, scheduler: AsyncIOScheduler) -> None:
        self._scheduler = scheduler
        self._timers: dict[int, Job] = {}

    def __contains__(self, destination_id: int) -> bool:
        return destination_id in self._timers

    def __len__(self) -> int:
        return len(self._timers)

    def active_ids(self) -> list[int]:
        return list(self._timers)

    def start(
        self,
        destination_id: int,
        func: Callable[..., Awaitable[Any]],
        interval_seconds: int,
        args: tuple[Any, ...] = (),
    ) -> bool:
        """
        반복 타이머 시작. 이미 등록되어 있으면 아무것도 하지 않습니다.

        Returns:
            새로 시작했으면 True
        """
        if destination_id in self._timers:
            return False

        job = self._scheduler.add_job(
            func,
            trigger=IntervalTrigger(seconds=interval_seconds),
            args=args,
            id=f"{JOB_ID_PREFIX}:{destination_id}",
            replace_existing=True,
        )
        self._timers[destination_id] = job
        logger.info("알림 타이머 시작: 길드=%s, %d초 간격", destination_id, interval_seconds)
        return True

    def stop(self, destination_id: int) -> bool:
        """
        반복 타이머 중지 및 등록 해제.

        Returns:
            중지한 타이머가 있었으면 True
        """
        job = self._timers.pop(destination_id, None)
        if job is None:
            return False

        self._scheduler.remove_job(job.id)
        logger.info("알림 타이머 중지: 길드=%s", destination_id)
        return True

    def prune(self, keep_ids: Iterable[int]) -> list[int]:
        """keep_ids에 없는 길드의 타이머를 모두 중지

        Returns:
            중지된 길드 ID 목록
        """
        keep = set(keep_ids)
        stale = [destination_id for destination_id in self._timers if destination_id not in keep]
        for destination_id in stale:
            self.stop(destination_id)
        return stale

    def clear(self) -> None:
        """등록만 해제 (스케줄러 종료 시 job은 함께 폐기됨)"""
        self._timers.clear()
