"""
Monitoring tests: health checks, request log, metrics and response headers.
"""

from fastapi.testclient import TestClient

from realty.middleware.logging import RequestLog


class TestRequestLog:
    """Test the bounded request log."""

    @staticmethod
    def entry(status_code: int, duration_ms: float = 10.0) -> dict:
        return {"method": "GET", "path": "/x", "status_code": status_code, "duration_ms": duration_ms}

    def test_keeps_newest_entries(self):
        log = RequestLog(max_entries=3)
        for status_code in (200, 201, 404, 500):
            log.record(self.entry(status_code))

        assert [e["status_code"] for e in log.recent()] == [500, 404, 201]

    def test_errors_only_and_limit(self):
        log = RequestLog()
        for status_code in (200, 400, 200, 503):
            log.record(self.entry(status_code))

        assert [e["status_code"] for e in log.recent(errors_only=True)] == [503, 400]
        assert len(log.recent(limit=1)) == 1

    def test_summary(self):
        log = RequestLog()
        log.record(self.entry(200, 10.0))
        log.record(self.entry(201, 20.0))
        log.record(self.entry(404, 30.0))
        log.record(self.entry(500, 40.0))

        summary = log.summary()

        assert summary["total_requests"] == 4
        assert summary["error_count"] == 2
        assert summary["error_rate"] == 50.0
        assert summary["avg_response_time_ms"] == 25.0
        assert summary["status_codes"] == {"2xx": 2, "4xx": 1, "5xx": 1}

    def test_empty_summary(self):
        summary = RequestLog().summary()

        assert summary["total_requests"] == 0
        assert summary["error_rate"] == 0.0
        assert summary["avg_response_time_ms"] == 0.0


class TestHealth:
    """Test health endpoints."""

    def test_root_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "testing"
        assert data["database"] == {"backend": "memory", "connected": True}

    def test_api_health(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_degraded_when_storage_unreachable(self, client: TestClient, app):
        async def unreachable():
            return False

        app.state.storage.ping = unreachable

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_root_info(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["api_prefix"] == "/api"


class TestRequestLogging:
    """Test the middleware and the log endpoints."""

    def test_request_id_and_timing_headers(self, client: TestClient):
        response = client.get("/api/properties")

        assert response.headers["X-Request-ID"]
        assert float(response.headers["X-Processing-Time"]) >= 0

    def test_incoming_request_id_is_kept(self, client: TestClient):
        response = client.get("/api/properties", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    def test_logs_require_session(self, client: TestClient):
        assert client.get("/api/logs").status_code == 401
        assert client.post("/api/logs/clear").status_code == 401
        assert client.get("/api/metrics").status_code == 401

    def test_logs_record_requests(self, auth_client: TestClient):
        auth_client.get("/api/cities", headers={"User-Agent": "pytest-agent"})
        auth_client.get("/api/properties/missing-id")

        logs = auth_client.get("/api/logs", params={"limit": 10}).json()["logs"]

        newest = logs[0]
        assert newest["path"] == "/api/properties/missing-id"
        assert newest["status_code"] == 404
        cities = next(e for e in logs if e["path"] == "/api/cities")
        assert cities["method"] == "GET"
        assert cities["user_agent"] == "pytest-agent"
        assert cities["duration_ms"] >= 0

    def test_error_logs_filter(self, auth_client: TestClient):
        auth_client.get("/api/cities")
        auth_client.get("/api/properties/missing-id")

        logs = auth_client.get("/api/logs", params={"type": "errors"}).json()["logs"]

        assert logs
        assert all(e["status_code"] >= 400 for e in logs)

    def test_invalid_log_type(self, auth_client: TestClient):
        assert auth_client.get("/api/logs", params={"type": "verbose"}).status_code == 400

    def test_clear_logs(self, auth_client: TestClient):
        auth_client.get("/api/cities")

        assert auth_client.post("/api/logs/clear").json()["success"] is True
        logs = auth_client.get("/api/logs").json()

        # Only the clear call itself remains
        assert [e["path"] for e in logs["logs"]] == ["/api/logs/clear"]

    def test_metrics(self, auth_client: TestClient):
        auth_client.post("/api/logs/clear")
        auth_client.get("/api/cities")
        auth_client.get("/api/properties/missing-id")

        metrics = auth_client.get("/api/metrics").json()

        assert metrics["total_requests"] == 3
        assert metrics["error_count"] == 1
        assert metrics["status_codes"] == {"2xx": 2, "4xx": 1}
        assert "timestamp" in metrics
