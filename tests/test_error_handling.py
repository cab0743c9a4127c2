"""
Error handling tests: response format, status mapping and request id propagation.
"""

import json
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from realty.services.error_handler import ErrorHandlerService
from realty.storage import DuplicateKeyError
from realty.utils.exceptions import (
    ConflictError,
    FileSizeExceededError,
    NotFoundError,
    ValidationError,
)

ERROR_KEYS = {"message", "code", "timestamp", "request_id"}


class TestErrorHandlerService:
    """Test error formatting without the HTTP stack."""

    def test_format_error_response(self):
        body = ErrorHandlerService.format_error_response("NOT_FOUND", "Property not found", request_id="abc")

        assert set(body) == ERROR_KEYS
        assert body["code"] == "NOT_FOUND"
        assert body["request_id"] == "abc"
        assert body["timestamp"].endswith("Z")

    def test_field_errors_included(self):
        response = ErrorHandlerService.handle_api_exception(
            ValidationError("Invalid data", field_errors=[{"field": "price", "message": "too low"}])
        )

        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["errors"] == [{"field": "price", "message": "too low"}]

    def test_validation_error_locations(self):
        response = ErrorHandlerService.handle_validation_error([
            {"loc": ("body", "price"), "msg": "Input should be greater than 0", "type": "greater_than"},
            {"loc": ("query", "status"), "msg": "Input should be 'available'", "type": "enum"},
            {"loc": ("body", "images", 0), "msg": "Input should be a valid string", "type": "string_type"},
        ])

        body = json.loads(response.body)
        assert response.status_code == 400
        assert [e["field"] for e in body["errors"]] == ["price", "status", "images.0"]

    def test_duplicate_key(self):
        response = ErrorHandlerService.handle_duplicate_key_error(
            DuplicateKeyError("cities", "slug", "luanda")
        )

        body = json.loads(response.body)
        assert response.status_code == 409
        assert body["errors"][0]["field"] == "slug"

    def test_upload_errors_carry_success_flag(self):
        response = ErrorHandlerService.handle_api_exception(FileSizeExceededError("big.jpg", 5 * 1024 * 1024))

        body = json.loads(response.body)
        assert body["success"] is False
        assert body["message"] == "File 'big.jpg' exceeds maximum allowed size of 5MB"

    def test_exception_status_codes(self):
        assert NotFoundError("Property", "123").status_code == 404
        assert NotFoundError("Property", "123").detail == "Property not found with ID: 123"
        assert ConflictError("taken").status_code == 409


class TestErrorResponses:
    """Test error responses produced by the application."""

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert ERROR_KEYS <= set(body)
        assert body["code"] == "HTTP_404"

    def test_wrong_method(self, client: TestClient):
        response = client.patch("/api/properties")

        assert response.status_code == 405

    def test_malformed_json(self, auth_client: TestClient):
        response = auth_client.post(
            "/api/cities", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_request_id_matches_header(self, client: TestClient):
        response = client.get("/api/properties/missing-id", headers={"X-Request-ID": "req-0001"})

        assert response.status_code == 404
        assert response.json()["request_id"] == "req-0001"
        assert response.headers["X-Request-ID"] == "req-0001"

    def test_database_errors_are_generic(self, app: FastAPI):
        @app.get("/test-database-failure")
        async def database_failure():
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        with TestClient(app) as client:
            response = client.get("/test-database-failure")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert "disk" not in body["message"]

    def test_unexpected_errors_are_generic(self, app: FastAPI):
        @app.get("/test-unexpected-failure")
        async def unexpected_failure():
            raise RuntimeError("secret internals")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/test-unexpected-failure")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "INTERNAL_SERVER_ERROR"
        assert "secret" not in body["message"]
