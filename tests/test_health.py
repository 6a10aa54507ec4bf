"""
헬스 체크 엔드포인트 테스트
"""

from types import SimpleNamespace

from fastapi.testclient import TestClient

from src.api.health import ALIVE_MESSAGE
from src.main import create_app


def test_alive_plain_text():
    """GET / 는 고정 문구를 평문으로 반환"""
    client = TestClient(create_app())
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == ALIVE_MESSAGE == "El bot está activo y funcionando."
    assert response.headers["content-type"].startswith("text/plain")


def test_health_without_scheduler():
    client = TestClient(create_app())
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["scheduler_running"] is False
    assert data["active_alerts"] == 0


def test_health_reports_scheduler_state():
    scheduler = SimpleNamespace(is_running=True, alert_timers=[101, 202])
    client = TestClient(create_app(scheduler))

    data = client.get("/health").json()

    assert data["scheduler_running"] is True
    assert data["active_alerts"] == 2


def test_openapi_schema_available():
    client = TestClient(create_app())
    schema = client.get("/openapi.json").json()
    assert schema["info"]["title"] == "WoW Token Bot"
