"""
Discord 메시지 포맷팅

사용자에게 보이는 문구는 서버 사용자 언어(스페인어)를 따릅니다.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.models.schema import Notification, NotificationKind, PriceSnapshot

APOLOGY_MESSAGE = "⚠️ No se pudo obtener el precio. Inténtalo más tarde."

ALERT_EMBED_TITLE = "¡El precio del WoW Token está dentro del rango!"
ALERT_EMBED_COLOR = 0xFFD700  # 골드
ALERT_EMBED_FOOTER = "Battle.net API"


def format_price_update(snapshot: PriceSnapshot) -> str:
    """정기 시세 알림 / !precio 응답 문구"""
    return (
        f"💰 **Precio Actual del WoW Token (US):** {snapshot.price} oro\n"
        f"⏱ **Última Actualización:** {snapshot.observed_at}"
    )


def build_price_update(snapshot: PriceSnapshot) -> Notification:
    return Notification(
        kind=NotificationKind.PRICE_UPDATE,
        text=format_price_update(snapshot),
    )


def build_range_alert(
    snapshot: PriceSnapshot,
    sent_at: datetime | None = None,
) -> Notification:
    """범위 진입 알림 (문구 + Embed)

    Args:
        snapshot: 범위 진입 시점에 캡처된 시세
        sent_at: Embed 타임스탬프 (None이면 현재 시각)
    """
    text = (
        "🎉🎉 **¡ALERTA!** 🎉🎉\n"
        "💰 **El precio del WoW Token está en el rango establecido:**\n"
        f"**Precio:** {snapshot.price} oro\n"
        f"⏱ **Última Actualización:** {snapshot.observed_at}"
    )
    return Notification(
        kind=NotificationKind.RANGE_ALERT,
        text=text,
        embed=_build_alert_embed(snapshot, sent_at or datetime.now(UTC)),
    )


def _build_alert_embed(snapshot: PriceSnapshot, sent_at: datetime) -> dict[str, Any]:
    """알림 Embed 생성"""
    return {
        "title": ALERT_EMBED_TITLE,
        "description": f"El precio actual es **{snapshot.price} oro**.",
        "color": ALERT_EMBED_COLOR,
        "timestamp": sent_at.isoformat(),
        "footer": {"text": ALERT_EMBED_FOOTER},
    }
