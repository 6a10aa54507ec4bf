"""
커스텀 예외 클래스

모든 비즈니스 예외는 AppError를 상속합니다.
외부 API 호출 실패는 내부에서 이 예외들로 변환된 뒤,
공개 메서드에서 로그를 남기고 None을 반환하는 방식으로 흡수됩니다.
"""

from __future__ import annotations

from typing import Any


# ───────────────────────── Base ─────────────────────────


class AppError(Exception):
    """애플리케이션 최상위 예외"""

    code: str = "INTERNAL_ERROR"
    message: str = "내부 오류가 발생했습니다."

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.detail = detail
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} {self.detail}"
        return self.message


# ───────────────────── Concrete Errors ──────────────────


class BattleNetError(AppError):
    """Battle.net API 관련 오류"""

    code = "BATTLENET_ERROR"
    message = "Battle.net API 요청에 실패했습니다."


class BattleNetAuthError(BattleNetError):
    """접근 토큰 발급 실패"""

    code = "BATTLENET_AUTH_ERROR"
    message = "Battle.net 접근 토큰 발급에 실패했습니다."


class PriceFetchError(BattleNetError):
    """WoW Token 시세 조회 실패"""

    code = "PRICE_FETCH_ERROR"
    message = "WoW Token 시세 조회에 실패했습니다."
