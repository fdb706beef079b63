"""
Tests for the health check endpoint.
"""

from rest_framework import status


def test_health_check_reports_healthy(client, db):
    response = client.get("/health/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "status": "healthy",
        "database": "connected",
        "channel_layer": "configured",
    }


def test_health_check_reports_database_failure(client, db, mocker):
    mocker.patch(
        "core.views.connection.cursor", side_effect=Exception("connection refused")
    )

    response = client.get("/health/")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["database"] == "disconnected"
