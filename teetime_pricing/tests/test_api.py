"""
Tests: HTTP routes via FastAPI's TestClient.

Run with:
    pytest teetime_pricing/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from teetime_pricing.api import create_app
from teetime_pricing.api.routes import get_quote_service
from teetime_pricing.engine.rules_config import PricingRules
from teetime_pricing.services.quote_service import QuoteService

STARTS_AT = "2026-05-01T12:00:00Z"
CLOCK_80_MIN = "2026-05-01T10:40:00Z"
CLOCK_25_MIN = "2026-05-01T11:35:00Z"


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[get_quote_service] = lambda: QuoteService(PricingRules())
    with TestClient(app) as c:
        yield c


def _slot(slot_id=42, base_price=100000):
    return {"id": slot_id, "starts_at": STARTS_AT, "base_price": base_price}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["app"]
        assert "timestamp" in body


class TestQuote:
    def test_quote_single_slot(self, client):
        response = client.post(
            "/api/pricing/quote",
            json={"slot": _slot(), "clock": CLOCK_80_MIN},
        )
        assert response.status_code == 200
        body = response.json()
        assert len(body["fingerprint"]) == 64
        assert body["weather"] == "Unknown"
        result = body["result"]
        assert result["final_price"] == 80000
        assert result["discount_rate"] == 0.2
        assert result["factors"][0]["code"] == "TIME_STEP"
        assert result["step_status"]["current_step"] == 2

    def test_quote_blocked(self, client):
        response = client.post(
            "/api/pricing/quote",
            json={"slot": _slot(), "clock": CLOCK_80_MIN, "weather": {"rainfall_mm": 25}},
        )
        body = response.json()
        assert body["weather"] == "Rain"
        assert body["result"]["is_blocked"] is True
        assert body["result"]["block_reason"] == "WEATHER_STORM"

    def test_quote_without_clock_uses_now(self, client):
        response = client.post(
            "/api/pricing/quote",
            json={"slot": {"id": 1, "starts_at": "2099-01-01T00:00:00Z", "base_price": 50000}},
        )
        assert response.status_code == 200
        assert response.json()["result"]["final_price"] == 50000

    def test_start_without_offset_is_read_as_utc(self, client):
        response = client.post(
            "/api/pricing/quote",
            json={"slot": {"id": 42, "starts_at": "2026-05-01T12:00:00", "base_price": 100000}},
        )
        assert response.status_code == 200

    def test_start_without_offset_with_clock(self, client):
        response = client.post(
            "/api/pricing/quote",
            json={
                "slot": {"id": 42, "starts_at": "2026-05-01T12:00:00", "base_price": 100000},
                "clock": CLOCK_80_MIN,
            },
        )
        assert response.status_code == 200
        assert response.json()["result"]["final_price"] == 80000

    def test_listing_and_confirm_accept_naive_start(self, client):
        naive_slot = {"id": 42, "starts_at": "2026-05-01T12:00:00", "base_price": 100000}
        listing = client.post("/api/pricing/quotes", json={"slots": [naive_slot]})
        assert listing.status_code == 200
        confirm = client.post(
            "/api/pricing/confirm",
            json={"context": {"slot": naive_slot, "clock": CLOCK_80_MIN}, "quoted_price": 80000},
        )
        assert confirm.status_code == 200

    def test_invalid_body(self, client):
        response = client.post("/api/pricing/quote", json={"slot": {"id": "x"}})
        assert response.status_code == 422

    def test_unknown_segment_rejected(self, client):
        response = client.post(
            "/api/pricing/quote",
            json={"slot": _slot(), "customer": {"loyalty_segment": "GOLD"}},
        )
        assert response.status_code == 422


class TestListing:
    def test_listing_with_panic_notifications(self, client):
        response = client.post(
            "/api/pricing/quotes",
            json={
                "slots": [_slot(slot_id=42), _slot(slot_id=20)],
                "forecasts": [{"target_hour": 12, "precipitation_probability_pct": 10}],
                "clock": CLOCK_25_MIN,
                "club_name": "Seaside CC",
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert [q["slot_id"] for q in body["quotes"]] == [42, 20]
        assert all(q["weather"] == "Sunny" for q in body["quotes"])
        assert all(q["result"]["final_price"] == 70000 for q in body["quotes"])
        notifications = body["panic_notifications"]
        assert [n["slot_id"] for n in notifications] == [20]
        assert notifications[0]["type"] == "PANIC_DEAL"
        assert notifications[0]["title"] == "Flash deal 30% off! 25 min left"

    def test_listing_without_club_name_skips_notifications(self, client):
        response = client.post(
            "/api/pricing/quotes",
            json={"slots": [_slot(slot_id=20)], "clock": CLOCK_25_MIN},
        )
        body = response.json()
        assert body["panic_notifications"] == []
        assert body["quotes"][0]["result"]["panic_mode"]["active"] is True


class TestConfirm:
    def test_confirm_matching_price(self, client):
        response = client.post(
            "/api/pricing/confirm",
            json={"context": {"slot": _slot(), "clock": CLOCK_80_MIN}, "quoted_price": 80000},
        )
        assert response.status_code == 200
        assert response.json()["final_price"] == 80000

    def test_confirm_stale_quote(self, client):
        response = client.post(
            "/api/pricing/confirm",
            json={"context": {"slot": _slot(), "clock": CLOCK_80_MIN}, "quoted_price": 90000},
        )
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["quoted_price"] == 90000
        assert detail["current_price"] == 80000

    def test_confirm_blocked_slot(self, client):
        response = client.post(
            "/api/pricing/confirm",
            json={
                "context": {
                    "slot": _slot(),
                    "clock": CLOCK_80_MIN,
                    "weather": {"rainfall_mm": 30},
                },
                "quoted_price": 100000,
            },
        )
        assert response.status_code == 409
        assert "blocked" in response.json()["detail"]
