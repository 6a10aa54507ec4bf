"""
Battle.net API 클라이언트

Battle.net REST API를 사용하여:
- 접근 토큰 발급/캐시 (client_credentials)
- WoW Token 시세 조회 (US 리전)

모든 오류는 내부적으로 BattleNetError 계열 예외로 변환된 뒤
공개 메서드에서 로그를 남기고 None을 반환합니다. 재시도는 하지 않습니다.

References:
    - https://develop.battle.net/documentation/guides/using-oauth
    - https://develop.battle.net/documentation/world-of-warcraft/game-data-apis
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import httpx

from src.exceptions import BattleNetAuthError, BattleNetError, PriceFetchError
from src.models.schema import Credential, PriceSnapshot
from src.utils.logger import get_logger

logger = get_logger(__name__)

# ───────────────────── Constants ─────────────────────

OAUTH_TOKEN_URL = "https://oauth.battle.net/token"
WOW_TOKEN_URL = "https://us.api.blizzard.com/data/wow/token/index"

WOW_TOKEN_PARAMS = {"namespace": "dynamic-us", "locale": "en_US"}

# 1 골드 = 10000 코퍼
COPPER_PER_GOLD = 10000

DISPLAY_TZ = ZoneInfo("America/Caracas")

_SPANISH_MONTHS = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def copper_to_gold(copper: int) -> int:
    """코퍼 단위 가격을 골드로 변환 (내림)"""
    return copper // COPPER_PER_GOLD


def format_observed_at(epoch_ms: int) -> str:
    """epoch(ms) 타임스탬프를 카라카스 시간 기준 스페인어 날짜로 포맷팅

    es-VE 로케일의 long date + short time 형식을 따릅니다.
    예: ``15 de marzo de 2025, 2:30 p. m.`` (오전/오후 표기의 "p."와 "m." 사이는 U+00A0)
    """
    dt = datetime.fromtimestamp(epoch_ms / 1000, tz=UTC).astimezone(DISPLAY_TZ)
    hour = dt.hour % 12 or 12
    meridiem = "a.\u00a0m." if dt.hour < 12 else "p.\u00a0m."
    month = _SPANISH_MONTHS[dt.month - 1]
    return f"{dt.day} de {month} de {dt.year}, {hour}:{dt.minute:02d} {meridiem}"


class BattleNetClient:
    """Battle.net API 클라이언트

    httpx 기반 비동기 HTTP 클라이언트로 Battle.net API를 호출합니다.
    접근 토큰은 만료 전까지 메모리에 캐시되며, 만료되면 다음 호출 시
    자동으로 재발급됩니다.

    Usage::

        async with BattleNetClient(client_id="...", client_secret="...") as bnet:
            snapshot = await bnet.get_wow_token_price()
            if snapshot:
                print(snapshot.price)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret

        # 토큰 캐시
        self._credential: Credential | None = None

        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        """HTTP 클라이언트 종료"""
        await self._client.aclose()

    async def __aenter__(self) -> BattleNetClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    @property
    def credential(self) -> Credential | None:
        return self._credential

    # ───────────────────── Authentication ─────────────────────

    async def get_access_token(self) -> str | None:
        """유효한 접근 토큰 반환. 만료되었거나 없으면 재발급.

        Returns:
            접근 토큰 (발급 실패 시 None)
        """
        if self._credential is not None and self._credential.is_valid():
            return self._credential.token

        try:
            self._credential = await self._issue_token()
        except BattleNetError as e:
            logger.error("접근 토큰 발급 실패: %s", e)
            return None
        return self._credential.token

    async def _issue_token(self) -> Credential:
        """POST /token 으로 접근 토큰 발급"""
        logger.info("접근 토큰 발급 요청 중...")
        try:
            resp = await self._client.post(
                OAUTH_TOKEN_URL,
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
            )
            resp.raise_for_status()
            data = resp.json()
            token = data["access_token"]
            expires_in = int(data["expires_in"])
        except httpx.HTTPStatusError as e:
            raise BattleNetAuthError(
                "토큰 발급 실패",
                detail={"status": e.response.status_code, "body": e.response.text},
            ) from e
        except httpx.RequestError as e:
            raise BattleNetAuthError(
                "토큰 발급 중 네트워크 오류",
                detail={"error": str(e)},
            ) from e
        except (ValueError, KeyError, TypeError) as e:
            raise BattleNetAuthError(
                "토큰 응답 형식 오류",
                detail={"error": str(e)},
            ) from e

        expires_at = datetime.now(UTC) + timedelta(seconds=expires_in)
        logger.info("접근 토큰 발급 완료 (만료: %s)", expires_at.isoformat())
        return Credential(token=token, expires_at=expires_at)

    # ───────────────────── Market Data ─────────────────────

    async def get_wow_token_price(self) -> PriceSnapshot | None:
        """WoW Token 현재 시세 조회 (US 리전)

        Returns:
            PriceSnapshot (토큰 발급 또는 조회 실패 시 None)
        """
        token = await self.get_access_token()
        if not token:
            return None

        try:
            return await self._fetch_price(token)
        except BattleNetError as e:
            logger.error("WoW Token 시세 조회 실패: %s", e)
            return None

    async def _fetch_price(self, token: str) -> PriceSnapshot:
        """GET /data/wow/token/index"""
        try:
            resp = await self._client.get(
                WOW_TOKEN_URL,
                headers={"Authorization": f"Bearer {token}"},
                params=WOW_TOKEN_PARAMS,
            )
            resp.raise_for_status()
            data = resp.json()
            snapshot = PriceSnapshot(
                price=copper_to_gold(int(data["price"])),
                observed_at=format_observed_at(int(data["last_updated_timestamp"])),
            )
        except httpx.HTTPStatusError as e:
            raise PriceFetchError(
                "시세 조회 실패",
                detail={"status": e.response.status_code, "body": e.response.text},
            ) from e
        except httpx.RequestError as e:
            raise PriceFetchError(
                "시세 조회 중 네트워크 오류",
                detail={"error": str(e)},
            ) from e
        except (ValueError, KeyError, TypeError, OverflowError, OSError) as e:
            # pydantic.ValidationError는 ValueError 하위 클래스
            raise PriceFetchError(
                "시세 응답 형식 오류",
                detail={"error": str(e)},
            ) from e

        logger.debug("WoW Token 시세: %d 골드 (%s)", snapshot.price, snapshot.observed_at)
        return snapshot
