"""
Basic tests for the Weather Forecast API.

This module contains tests for the application wiring: informational
endpoints, documentation, CORS and the global error handling.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import create_app


def test_root_endpoint(client):
    """Test the root endpoint returns correct response."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert "docs" in data


def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_openapi_docs_available(client):
    """Test that OpenAPI documentation is available."""
    assert client.get("/docs").status_code == 200

    response = client.get("/api/openapi.json")
    assert response.status_code == 200

    paths = response.json()["paths"]
    assert "/api/auth/register" in paths
    assert "/api/auth/login" in paths
    assert "/api/weather" in paths


def test_cors_headers(client):
    """Test that configured origins receive CORS headers."""
    response = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_malformed_body_returns_envelope(client):
    """A body that is not JSON is reported as a validation failure."""
    response = client.post(
        "/api/auth/login",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"]


def test_unknown_route_returns_envelope(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.parametrize(
    "language,message",
    [
        (None, "An internal server error occurred."),
        ("ar", "حدث خطأ داخلي في الخادم."),
    ],
)
def test_unhandled_exception_returns_500_envelope(test_settings, clock, language, message):
    app = create_app(test_settings, clock=clock)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret failure detail")

    headers = {"Accept-Language": language} if language else {}
    with TestClient(app) as client:
        response = client.get("/boom", headers=headers)

    assert response.status_code == 500
    body = response.json()
    assert body == {
        "success": False,
        "statusCode": 500,
        "message": message,
        "errors": [],
        "data": None,
    }
    assert "secret failure detail" not in response.text
