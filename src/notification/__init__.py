"""
알림 패키지

Discord 메시지 포맷팅과 길드별 브로드캐스트 기능을 제공합니다.
"""

from __future__ import annotations

__all__ = [
    "Broadcaster",
    "build_price_update",
    "build_range_alert",
]

from src.notification.broadcaster import Broadcaster
from src.notification.messages import build_price_update, build_range_alert
