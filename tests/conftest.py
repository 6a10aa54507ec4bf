"""
테스트 공통 Fixture 정의

pytest conftest.py - 모든 테스트에서 공유하는 fixture들을 정의합니다.
config.settings는 import 시점에 필수 환경변수를 읽으므로
다른 모듈을 import하기 전에 테스트용 값을 채워 둡니다.
"""

import os

TEST_ENV = {
    "CLIENT_ID": "test_client_id",
    "CLIENT_SECRET": "test_client_secret",
    "DISCORD_TOKEN": "test_discord_token",
    "CHANNEL_NAME": "precios",
    "MIN_PRICE": "250000",
    "MAX_PRICE": "300000",
    "CHECK_INTERVAL": "300",
    "ALERT_INTERVAL": "60",
}
for _key, _value in TEST_ENV.items():
    os.environ.setdefault(_key, _value)

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402

from src.models.schema import PriceSnapshot  # noqa: E402
from tests.fakes import make_guild  # noqa: E402


@pytest.fixture
def snapshot() -> PriceSnapshot:
    """범위 안의 샘플 시세"""
    return PriceSnapshot(price=275000, observed_at="15 de marzo de 2025, 2:30 p. m.")


@pytest.fixture
def guild_a() -> SimpleNamespace:
    return make_guild(1, "Guild A")


@pytest.fixture
def guild_b() -> SimpleNamespace:
    return make_guild(2, "Guild B")


@pytest.fixture
def guild_source(guild_a: SimpleNamespace, guild_b: SimpleNamespace) -> SimpleNamespace:
    """discord.Client 대신 쓰는 길드 목록 제공자"""
    return SimpleNamespace(guilds=[guild_a, guild_b])
