"""
애플리케이션 설정 관리

pydantic-settings를 사용하여 환경변수 기반 설정을 관리합니다.
필수 값이 빠져 있으면 시작 시점에 ValidationError로 종료됩니다.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # Battle.net API 설정
    client_id: str
    client_secret: str

    # Discord 봇 설정
    discord_token: str
    channel_name: str

    # 알림 가격 범위 (골드, 양 끝 포함)
    min_price: int
    max_price: int

    # 주기 (초)
    check_interval: int = Field(gt=0)
    alert_interval: int = Field(gt=0)

    # 헬스체크 HTTP 서버
    port: int = 3000

    # 앱 설정
    app_env: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _check_price_range(self) -> Settings:
        if self.min_price > self.max_price:
            raise ValueError(
                f"min_price({self.min_price})가 max_price({self.max_price})보다 큽니다."
            )
        return self


# 전역 설정 인스턴스
settings = Settings()  # type: ignore[call-arg]
