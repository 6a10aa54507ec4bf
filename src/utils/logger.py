"""
로깅 설정

애플리케이션 로거와 라이브러리 로거(discord, apscheduler)가 같은 stdout 핸들러
포맷을 공유합니다. APP_ENV=production이면 JSON 한 줄, 그 외에는 사람이 읽는 포맷.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import UTC, datetime

from config.settings import settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 게이트웨이/잡 실행기 로그를 애플리케이션 포맷으로 출력할 라이브러리 로거
LIBRARY_LOGGERS = ("discord", "apscheduler")


class JSONFormatter(logging.Formatter):
    """레코드 하나를 JSON 한 줄로 직렬화"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def resolve_level(level_name: str) -> int:
    """LOG_LEVEL 문자열을 logging 레벨로 변환 (알 수 없으면 INFO)"""
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def build_handler(app_env: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if app_env == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    return handler


def _configure(logger: logging.Logger) -> logging.Logger:
    # 핸들러 중복 부착 방지
    if logger.handlers:
        return logger

    level = resolve_level(settings.log_level)
    logger.setLevel(level)
    logger.addHandler(build_handler(settings.app_env, level))
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    모듈 로거 반환

    Args:
        name: 로거 이름 (보통 __name__ 사용)

    Returns:
        stdout 핸들러가 붙은 로거
    """
    return _configure(logging.getLogger(name))


def setup_library_logging(names: Iterable[str] = LIBRARY_LOGGERS) -> list[logging.Logger]:
    """discord.py, APScheduler 로거에 애플리케이션 핸들러 부착"""
    return [_configure(logging.getLogger(name)) for name in names]
