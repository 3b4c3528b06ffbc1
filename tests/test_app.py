"""
Tests for the application shell and error envelope
"""
import asyncio

from fastapi.testclient import TestClient

from storefront.config.database import DatabaseManager
from storefront.errors import first_error_message
from storefront.main import app


class TestRootEndpoints:
    """Test endpoints outside the API prefix"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["docs"] == "/docs"
        assert data["health"] == "/health"

    def test_health_without_database(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "disconnected"


class TestErrorEnvelope:
    """Test the JSON error body"""

    def test_unknown_route(self, client):
        response = client.get("/api/v1/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    def test_malformed_json_is_400(self, client):
        response = client.post(
            "/api/v1/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Request body must be valid JSON"}

    def test_missing_body_with_all_optional_fields(self, client):
        response = client.post("/api/v1/auth/login")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Request body is required"}

    def test_missing_body_reports_first_check(self, client, admin_headers):
        response = client.post("/api/v1/category/create-category", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Name is required"

    def test_database_unavailable(self):
        # No override and no lifespan, so there is no connection
        response = TestClient(app).get("/api/v1/category/get-category")

        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "message": "Database connection not available. Please check your MongoDB connection.",
        }


class TestFirstErrorMessage:
    """Test picking the message out of validation errors"""

    def test_custom_value_error(self):
        errors = [{"type": "value_error", "loc": ("body",), "msg": "Value error, Name is required", "ctx": {"error": ValueError("Name is required")}}]

        assert first_error_message(errors) == "Name is required"

    def test_prefix_is_stripped_without_ctx(self):
        errors = [{"type": "value_error", "loc": ("body",), "msg": "Value error, Name is required"}]

        assert first_error_message(errors) == "Name is required"

    def test_type_error_names_field(self):
        errors = [{"type": "string_type", "loc": ("body", "email"), "msg": "Input should be a valid string"}]

        assert first_error_message(errors) == "email: Input should be a valid string"

    def test_invalid_json(self):
        errors = [{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error", "ctx": {"error": "Expecting value"}}]

        assert first_error_message(errors) == "Request body must be valid JSON"

    def test_no_errors(self):
        assert first_error_message([]) == "Invalid request"


class FailingDatabase:
    async def command(self, name):
        raise RuntimeError("server selection timeout")


class TestDatabaseStatus:
    """Test the connectivity string reported by /health"""

    def test_disconnected(self):
        assert asyncio.run(DatabaseManager().status()) == "disconnected"

    def test_ping_failure(self):
        manager = DatabaseManager()
        manager.database = FailingDatabase()

        assert asyncio.run(manager.status()) == "error: server selection timeout"
