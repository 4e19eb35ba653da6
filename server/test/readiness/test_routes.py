import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from server.src.readiness.config import load_readiness_config
from server.src.readiness.routes import build_readiness_router
from sinar.ids import business_requirement_id

BASE = "/api/readiness"
HALAL = business_requirement_id("warung", "Halal Certificate")


def build_client(env) -> TestClient:
    app = FastAPI()
    app.include_router(build_readiness_router(config=load_readiness_config(env)))
    return TestClient(app)


def test_readiness_flow(readiness_env, warung_payload):
    client = build_client(readiness_env)

    put_response = client.put(f"{BASE}/businesses/warung", json=warung_payload)
    assert put_response.status_code == 200
    assert put_response.json()["classification"] == "F&B"

    comparison = client.get(f"{BASE}/businesses/warung/legal-comparison")
    assert comparison.status_code == 200
    data = comparison.json()
    assert [req["type"] for req in data["required"]][:2] == ["Business License", "Halal Certificate"]
    assert data["required"][0]["has_legal"] is True
    assert data["required"][0]["steps"] == []
    assert data["required"][1]["requirement_id"] == HALAL
    assert data["products"][0]["product_name"] == "Sambal Roa"
    assert data["missing_count"] == len(
        [req for req in data["required"] if not req["has_legal"]]
    ) + data["products"][0]["missing_count"]

    readiness = client.get(f"{BASE}/businesses/warung/readiness")
    assert readiness.status_code == 200
    assert readiness.json()["value"] == 90
    assert readiness.json()["stage"] == "Investment Ready"

    history = client.get(f"{BASE}/businesses/warung/valuation-history")
    assert history.status_code == 200
    assert [point["period"] for point in history.json()] == ["2023-06", "2024-06"]
    assert [point["value"] for point in history.json()] == [100_000_000, 1_000_000_000]

    valuation = client.get(f"{BASE}/businesses/warung/valuation")
    assert valuation.json()["current"] == 1_000_000_000
    assert valuation.json()["multiplier"] == 2.0


def test_remediation_endpoints(readiness_env, warung_payload):
    client = build_client(readiness_env)
    client.put(f"{BASE}/businesses/warung", json=warung_payload)
    client.get(f"{BASE}/businesses/warung/legal-comparison")

    locked = client.get(f"{BASE}/remediation/{HALAL}/steps/2/accessible")
    assert locked.status_code == 200
    assert locked.json() == {"requirement_id": HALAL, "step_number": 2, "accessible": False, "redirect_url": None}

    toggled = client.post(f"{BASE}/remediation/{HALAL}/steps/1/toggle")
    assert toggled.status_code == 200
    assert toggled.json()["completed"] == [1]

    opened = client.get(f"{BASE}/remediation/{HALAL}/steps/2/accessible")
    assert opened.json()["accessible"] is True
    assert opened.json()["redirect_url"]

    progress = client.get(f"{BASE}/remediation/{HALAL}")
    assert progress.json()["total_steps"] == 3
    assert not progress.json()["complete"]

    out_of_range = client.post(f"{BASE}/remediation/{HALAL}/steps/9/toggle")
    assert out_of_range.status_code == 422

    missing = client.get(f"{BASE}/remediation/business:warung:nothing")
    assert missing.status_code == 404


def test_strict_remediation_returns_conflict(readiness_env, warung_payload):
    client = build_client({**readiness_env, "READINESS_STRICT_REMEDIATION": "true"})
    client.put(f"{BASE}/businesses/warung", json=warung_payload)
    client.get(f"{BASE}/businesses/warung/legal-comparison")

    response = client.post(f"{BASE}/remediation/{HALAL}/steps/3/toggle")
    assert response.status_code == 409


def test_refresh_picks_up_new_documents(warung_payload):
    client = build_client({"READINESS_CACHE_BACKEND": "memory"})
    client.put(f"{BASE}/businesses/warung", json=warung_payload)
    before = client.get(f"{BASE}/businesses/warung/legal-comparison").json()

    warung_payload["legal_documents"] = warung_payload["legal_documents"] + [{"type": "Halal Certificate"}]
    client.put(f"{BASE}/businesses/warung", json=warung_payload)
    after = client.get(f"{BASE}/businesses/warung/legal-comparison", params={"refresh": "true"}).json()

    assert after["missing_count"] == before["missing_count"] - 1
    assert client.get(f"{BASE}/remediation/{HALAL}").status_code == 404


def test_unknown_business_is_404(readiness_env):
    client = build_client(readiness_env)
    for suffix in ("legal-comparison", "readiness", "valuation-history", "valuation"):
        assert client.get(f"{BASE}/businesses/ghost/{suffix}").status_code == 404


def test_undated_snapshot_history_is_422(readiness_env, warung_payload):
    client = build_client(readiness_env)
    warung_payload["financial_history"] = [{"id": "undated", "revenue": 1, "ebitda": 1}]
    client.put(f"{BASE}/businesses/warung", json=warung_payload)
    assert client.get(f"{BASE}/businesses/warung/valuation-history").status_code == 422
    assert client.get(f"{BASE}/businesses/warung/valuation").json()["current"] == 1


def test_app_health():
    from server.index import create_app

    client = TestClient(create_app())
    assert client.get("/health").json() == {"status": "ok"}


def test_investment_capacity_endpoint(readiness_env, warung_payload):
    client = build_client(readiness_env)
    client.put(f"{BASE}/businesses/warung", json=warung_payload)

    response = client.get(f"{BASE}/businesses/warung/investment-capacity", params={"existing": 250_000_000})
    assert response.status_code == 200
    body = response.json()
    assert body["maximum"] == 1_000_000_000
    assert body["remaining"] == 750_000_000
    assert body["minimum"] == pytest.approx(750_000)

    exhausted = client.get(f"{BASE}/businesses/warung/investment-capacity", params={"existing": 5_000_000_000})
    assert exhausted.json()["remaining"] == 0
    assert exhausted.json()["minimum"] == 0

    negative = client.get(f"{BASE}/businesses/warung/investment-capacity", params={"existing": -1})
    assert negative.status_code == 422


def test_duplicate_product_names_are_422(readiness_env, warung_payload):
    client = build_client(readiness_env)
    warung_payload["products"] = [
        {"name": "Sambal Roa", "category": "Food"},
        {"name": "Sambal Roa", "category": "Food"},
    ]
    client.put(f"{BASE}/businesses/warung", json=warung_payload)
    response = client.get(f"{BASE}/businesses/warung/legal-comparison")
    assert response.status_code == 422
