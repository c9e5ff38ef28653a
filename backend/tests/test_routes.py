import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import make_client
from seastyle.api.deps import get_client
from seastyle.core.errors import MSG_UPSTREAM_EXHAUSTED
from seastyle.main import app

DAY_PATH = "/api/Reserve/GetClubBoatEmptyList"
MARINA_PATH = "/api/Reserve/GetMarinaList"


@pytest.fixture
def api():
    def _api(routes=None):
        client, _ = make_client(routes)
        app.dependency_overrides[get_client] = lambda: client
        return TestClient(app)

    yield _api
    app.dependency_overrides.clear()


def test_health(api):
    response = api().get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_day_availability(api, boats_payload):
    response = api({("POST", DAY_PATH): httpx.Response(200, json=boats_payload)}).get(
        "/availability/3802/2025-06-01"
    )
    assert response.status_code == 200
    body = response.json()
    assert body["marinaCd"] == "3802"
    assert body["date"] == "2025-06-01"
    assert body["summary"]["total"] == 3
    assert body["debug"]["strategy"] == "json:iso"
    assert body["debug"]["rawPayload"] == boats_payload


def test_day_availability_bad_date(api):
    response = api().get("/availability/3802/2025-13-40")
    assert response.status_code == 400
    assert "YYYY-MM-DD" in response.json()["detail"]


def test_day_availability_upstream_exhausted(api):
    response = api().get("/availability/3802/2025-06-01")
    assert response.status_code == 502
    assert response.json()["detail"] == MSG_UPSTREAM_EXHAUSTED


def test_month_availability(api):
    def handler(url, body):
        if body["targetDate"].endswith("-02"):
            return httpx.Response(503, text="busy")
        return httpx.Response(200, json=[{"time": "10:00", "status": "◯"}])

    response = api({("POST", DAY_PATH): handler}).get("/availability/3802/month/2025-02")
    assert response.status_code == 200
    body = response.json()
    assert body["month"] == "2025-02"
    assert len(body["days"]) == 28
    assert body["failed"] == 0
    assert body["days"][0]["summary"]["statuses"]["vacant"] == 1


def test_month_availability_bad_month(api):
    response = api().get("/availability/3802/month/2025-13")
    assert response.status_code == 400


def test_marinas_fallback_when_upstream_fails(api):
    response = api().get("/marinas", params={"q": "かちどき"})
    assert response.status_code == 200
    body = response.json()
    assert body["usedFallback"] is True
    assert body["error"]
    assert [m["code"] for m in body["marinas"]] == ["3802"]
    assert body["suggestions"][0]["name"] == "勝どきマリーナ"
    assert body["selected"]["code"] == "3802"


def test_marinas_from_upstream(api):
    marinas = {
        "prefectures": [
            {
                "prefecture": "神奈川県",
                "marinas": [
                    {"marinaCd": "1401", "marinaName": "横浜ベイサイドマリーナ"},
                    {"marinaCd": "1402", "marinaName": "逗子マリーナ"},
                ],
            }
        ]
    }
    response = api({("POST", MARINA_PATH): httpx.Response(200, json=marinas)}).get(
        "/marinas", params={"code": "1402"}
    )
    body = response.json()
    assert body["usedFallback"] is False
    assert body["error"] is None
    assert {m["code"] for m in body["marinas"]} == {"1401", "1402"}
    assert body["marinas"][0]["prefecture"] == "神奈川県"
    assert body["selected"]["name"] == "逗子マリーナ"
    assert "suggestions" not in body


def test_marinas_default_selection(api):
    marinas = [
        {"marinaCd": "1401", "marinaName": "横浜ベイサイドマリーナ"},
        {"marinaCd": "3802", "marinaName": "勝どきマリーナ"},
    ]
    body = api({("POST", MARINA_PATH): httpx.Response(200, json=marinas)}).get("/marinas").json()
    assert body["selected"]["code"] == "3802"

    others = [{"marinaCd": "1401", "marinaName": "横浜ベイサイドマリーナ"}]
    body = api({("POST", MARINA_PATH): httpx.Response(200, json=others)}).get("/marinas").json()
    assert body["selected"] is None
