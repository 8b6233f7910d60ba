"""Integration tests for the scheduled trigger endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from collabhunts.config import Settings, get_settings
from collabhunts.infrastructure.models import BookingModel
from collabhunts.interfaces.api.routes import functions as functions_module
from collabhunts.main import create_app


@pytest.fixture()
def app(db_session):
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_run_monitors_reports_counts(client: TestClient, db_session, seed) -> None:
    seeded = seed.booking(hours_since_delivery=500, now=datetime.now(timezone.utc))

    response = client.post("/functions/run-monitors")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "bookingsProcessed": 1,
        "disputesProcessed": 0,
        "notificationsSent": 2,
    }
    db_session.expire_all()
    assert db_session.get(BookingModel, seeded.booking_id).delivery_status == "confirmed"


def test_delivery_trigger_omits_dispute_count(client: TestClient) -> None:
    response = client.get("/functions/check-delivery-auto-release")

    assert response.status_code == 200
    body = response.json()
    assert body["bookingsProcessed"] == 0
    assert "disputesProcessed" not in body


def test_dispute_trigger_omits_booking_count(client: TestClient) -> None:
    response = client.post("/functions/check-dispute-deadlines")

    assert response.status_code == 200
    body = response.json()
    assert body["disputesProcessed"] == 0
    assert "bookingsProcessed" not in body


def test_unexpected_failure_returns_500(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _explode(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(functions_module, "run_monitors", _explode)

    response = client.post("/functions/run-monitors")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "database unavailable"}


def test_cron_secret_is_enforced(app, client: TestClient) -> None:
    settings = Settings(database_url="sqlite://", cron_secret="s3cret")
    app.dependency_overrides[get_settings] = lambda: settings

    missing = client.post("/functions/run-monitors")
    wrong = client.post(
        "/functions/run-monitors", headers={"Authorization": "Bearer nope"}
    )
    accepted = client.post(
        "/functions/run-monitors", headers={"Authorization": "Bearer s3cret"}
    )

    assert missing.status_code == 401
    assert missing.json() == {"detail": "Unauthorized"}
    assert wrong.status_code == 401
    assert accepted.status_code == 200


def test_cors_preflight(client: TestClient) -> None:
    response = client.options(
        "/functions/run-monitors",
        headers={
            "Origin": "https://dashboard.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, x-client-info",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_plain_options_is_answered_without_running(
    app, client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    settings = Settings(database_url="sqlite://", cron_secret="s3cret")
    app.dependency_overrides[get_settings] = lambda: settings

    def _explode(*args, **kwargs):
        raise AssertionError("monitors must not run for OPTIONS")

    monkeypatch.setattr(functions_module, "run_monitors", _explode)

    for path in (
        "/functions/run-monitors",
        "/functions/check-delivery-auto-release",
        "/functions/check-dispute-deadlines",
    ):
        response = client.options(path)
        assert response.status_code == 200
