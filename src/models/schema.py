"""
도메인 모델

토큰 캐시, 시세 스냅샷, Discord 전송 페이로드를 정의합니다.
모두 메모리에만 존재하며 재시작 시 사라집니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    """UTC 기준 현재 시각을 반환합니다."""
    return datetime.now(UTC)


@dataclass
class Credential:
    """Battle.net 접근 토큰과 만료 시각"""

    token: str
    expires_at: datetime

    def is_valid(self, now: datetime | None = None) -> bool:
        return (now or _utcnow()) < self.expires_at


class PriceSnapshot(BaseModel):
    """한 번의 조회로 얻은 WoW Token 시세 (골드 단위)"""

    price: int = Field(..., ge=0)
    observed_at: str

    model_config = ConfigDict(frozen=True)


class NotificationKind(str, Enum):
    """전송 메시지 종류"""

    PRICE_UPDATE = "price_update"  # 정기 시세 알림
    RANGE_ALERT = "range_alert"  # 범위 진입 반복 알림


class Notification(BaseModel):
    """Discord 채널로 보낼 메시지 + 선택적 Embed"""

    kind: NotificationKind
    text: str
    embed: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)
