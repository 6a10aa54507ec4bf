"""
설정 패키지

환경변수 기반 설정을 구조화하여 관리합니다.
- settings: Battle.net / Discord / 알림 임계값 설정
"""

from __future__ import annotations

from config.settings import settings

__all__ = ["settings"]
