"""
헬스체크 엔드포인트

호스팅 플랫폼의 keep-alive 핑에 응답합니다.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from config.settings import settings

router = APIRouter(tags=["System"])

ALIVE_MESSAGE = "El bot está activo y funcionando."


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(..., description="서비스 상태", examples=["ok"])
    env: str = Field(..., description="실행 환경", examples=["development"])
    scheduler_running: bool = Field(..., description="시세 스케줄러 실행 여부")
    active_alerts: int = Field(..., description="반복 알림 중인 길드 수")


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="생존 확인",
    description="봇 프로세스가 살아 있으면 고정 문구를 반환합니다.",
)
async def alive() -> str:
    return ALIVE_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="헬스 체크",
    description="실행 환경과 시세 스케줄러 상태를 반환합니다.",
)
async def health_check(request: Request) -> HealthResponse:
    """헬스 체크 엔드포인트"""
    scheduler = getattr(request.app.state, "price_scheduler", None)
    return HealthResponse(
        status="ok",
        env=settings.app_env,
        scheduler_running=bool(scheduler and scheduler.is_running),
        active_alerts=len(scheduler.alert_timers) if scheduler else 0,
    )
