"""HTTP API tests: contact, health, monitoring, metrics, CORS."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from smartops.contact import ContactDispatcher, get_contact_dispatcher
from smartops.main import app
from smartops.routes.contact import (
    INVALID_EMAIL_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    SUCCESS_MESSAGE,
    is_valid_email,
)
from smartops.telemetry import CONTACT_SUBMISSIONS


@pytest.fixture
def dispatcher():
    fake = MagicMock(spec=ContactDispatcher)
    app.dependency_overrides[get_contact_dispatcher] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture
def client(dispatcher):
    # No context manager: the lifespan (broadcaster) is not started
    return TestClient(app)


def _outcome(outcome: str) -> float:
    return CONTACT_SUBMISSIONS.labels(outcome=outcome)._value.get()


# ── Contact ───────────────────────────────────────────────────────

class TestContact:
    def test_valid_submission(self, client, dispatcher):
        payload = {"name": "A", "email": "a@b.com", "message": "hi"}
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": SUCCESS_MESSAGE}

    def test_valid_submission_is_dispatched(self, client, dispatcher):
        payload = {"name": "A", "email": "a@b.com", "phone": "555-0100", "message": "hi"}
        client.post("/api/contact", json=payload)
        dispatcher.dispatch.assert_called_once()
        submission = dispatcher.dispatch.call_args[0][0]
        assert submission.phone == "555-0100"

    def test_invalid_email(self, client, dispatcher):
        payload = {"name": "A", "email": "bad", "message": "hi"}
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": INVALID_EMAIL_MESSAGE}
        dispatcher.dispatch.assert_not_called()

    def test_missing_name(self, client, dispatcher):
        payload = {"email": "a@b.com", "message": "hi"}
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": MISSING_FIELDS_MESSAGE}
        dispatcher.dispatch.assert_not_called()

    @pytest.mark.parametrize("field", ["name", "email", "message"])
    def test_empty_required_field(self, client, field):
        payload = {"name": "A", "email": "a@b.com", "message": "hi"}
        payload[field] = ""
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 400
        assert response.json()["message"] == MISSING_FIELDS_MESSAGE

    def test_missing_fields_checked_before_email(self, client):
        response = client.post("/api/contact", json={"email": "bad"})
        assert response.json()["message"] == MISSING_FIELDS_MESSAGE

    def test_phone_is_optional(self, client):
        payload = {"name": "A", "email": "a@b.com", "message": "hi", "phone": None}
        assert client.post("/api/contact", json=payload).status_code == 200

    @pytest.mark.parametrize(
        "phone, stored",
        [(5551234, "5551234"), (555.5, "555.5"), ({"ext": 12}, "{'ext': 12}")],
    )
    def test_phone_of_any_type_is_accepted(self, client, dispatcher, phone, stored):
        payload = {"name": "A", "email": "a@b.com", "phone": phone, "message": "hi"}
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": SUCCESS_MESSAGE}
        dispatcher.dispatch.assert_called_once()
        assert dispatcher.dispatch.call_args[0][0].phone == stored

    def test_non_json_body(self, client):
        response = client.post(
            "/api/contact",
            content=b"name=A",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": MISSING_FIELDS_MESSAGE}

    def test_wrong_field_type(self, client):
        payload = {"name": ["A"], "email": "a@b.com", "message": "hi"}
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 400
        assert response.json()["message"] == MISSING_FIELDS_MESSAGE

    def test_outcome_counter(self, client):
        before = _outcome("invalid_email")
        client.post("/api/contact", json={"name": "A", "email": "x@y", "message": "hi"})
        assert _outcome("invalid_email") - before == 1


class TestEmailPattern:
    @pytest.mark.parametrize(
        "email", ["a@b.com", "first.last@sub.example.org", "x+tag@y.io"]
    )
    def test_accepts(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["bad", "a@b", "a b@c.com", "a@@b.com", "@b.com", "a@b.com\n", "a@.com "],
    )
    def test_rejects(self, email):
        assert not is_valid_email(email)


# ── Health ────────────────────────────────────────────────────────

class TestHealth:
    def test_health_returns_200(self, client):
        assert client.get("/api/health").status_code == 200

    def test_health_body(self, client):
        data = client.get("/api/health").json()
        assert data == {
            "status": "OK",
            "message": "Arbor Technologies SmartOps Core Online",
        }

    def test_health_is_stable(self, client):
        bodies = [client.get("/api/health").json() for _ in range(3)]
        assert bodies[0] == bodies[1] == bodies[2]


# ── Monitoring ────────────────────────────────────────────────────

class TestMonitoring:
    def test_monitoring_shape(self, client):
        response = client.get("/api/monitoring")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["globalUptime"] == 99.97
        assert len(data["metrics"]) == 6
        assert len(data["regions"]) == 5
        assert 100 <= data["autoRemediations"] < 150

    def test_fixed_order_across_calls(self, client):
        first = client.get("/api/monitoring").json()
        second = client.get("/api/monitoring").json()
        assert [m["name"] for m in first["metrics"]] == [m["name"] for m in second["metrics"]]
        assert [r["region"] for r in first["regions"]] == [
            "US-East (Virginia)",
            "US-West (Oregon)",
            "EU-West (Ireland)",
            "APAC-Southeast (Singapore)",
            "APAC-Northeast (Tokyo)",
        ]
        assert [r["region"] for r in second["regions"]] == [r["region"] for r in first["regions"]]

    def test_region_fields(self, client):
        region = client.get("/api/monitoring").json()["regions"][0]
        assert set(region) == {
            "region", "status", "latency", "uptime", "activeInstances", "incidents",
        }


# ── Metrics / CORS ────────────────────────────────────────────────

class TestPlatform:
    def test_metrics_endpoint_returns_prometheus_format(self, client):
        client.get("/api/health")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "http_requests_total" in response.text
        assert "metrics_broadcasts_total" in response.text

    def test_cors_allows_any_origin(self, client):
        response = client.get("/api/health", headers={"Origin": "https://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/contact",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert response.status_code == 200
        assert "POST" in response.headers["access-control-allow-methods"]

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH"])
    def test_cors_preflight_allows_any_method(self, client, method):
        response = client.options(
            "/api/contact",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": method,
            },
        )
        assert response.status_code == 200
        assert method in response.headers["access-control-allow-methods"]

    def test_health_rejects_post(self, client):
        response = client.post("/api/health")
        assert response.status_code == 405
