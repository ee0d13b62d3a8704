"""
Tests for health and metrics endpoints
"""
from app.core.logging_config import LoggingConfig


def test_health(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_health_detailed(client):
    r = client.get("/health/detailed")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["components"]["database"]["status"] == "healthy"


def test_health_detailed_reports_log_counts(client):
    LoggingConfig.get_logger("app.tests").warning("health check log count")

    body = client.get("/health/detailed").json()

    counts = body["logging"]
    assert set(counts) == {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    assert all(isinstance(v, int) for v in counts.values())
    assert counts["WARNING"] >= 1


def test_metrics_exposition(client):
    client.get("/health")

    r = client.get("/metrics")

    assert r.status_code == 200
    assert "http_requests_total" in r.text
    assert "resource_deletions_total" in r.text


def test_request_id_header(client):
    r = client.get("/health", headers={"x-request-id": "req-1"})

    assert r.headers["x-request-id"] == "req-1"
