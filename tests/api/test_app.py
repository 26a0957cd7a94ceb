"""Tests for the application shell: root, health, middleware and error mapping."""

from datetime import datetime
from unittest.mock import Mock

import pytest

from clinic_records.api.dependencies import get_clinical_store, get_patient_store, get_user_store
from clinic_records.api.errors import status_for_error
from clinic_records.domain.errors import (
    AuthenticationError,
    DuplicatePatientError,
    RecordNotFoundError,
    RecordsError,
    RecordValidationError,
    StorageError,
)
from clinic_records.domain.ports import ClinicalStorePort, PatientStorePort, UserStorePort


def mock_store(spec, name, reachable=True):
    store = Mock(spec=spec)
    store.name = name
    store.ping.return_value = reachable
    return store


@pytest.fixture
def store_mocks(app):
    stores = {
        "patients": mock_store(PatientStorePort, "patients"),
        "users": mock_store(UserStorePort, "users"),
        "clinical": mock_store(ClinicalStorePort, "clinical"),
    }
    app.dependency_overrides[get_patient_store] = lambda: stores["patients"]
    app.dependency_overrides[get_user_store] = lambda: stores["users"]
    app.dependency_overrides[get_clinical_store] = lambda: stores["clinical"]
    return stores


class TestRootEndpoint:

    def test_root_endpoint_returns_info(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "1.0.0"
        assert data["health"] == "/api/health"


class TestHealthEndpoint:

    def test_all_stores_connected_is_healthy(self, client, store_mocks):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert [s["name"] for s in data["stores"]] == ["patients", "users", "clinical"]
        assert all(s["status"] == "connected" for s in data["stores"])
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))

    def test_some_stores_down_is_degraded(self, client, store_mocks):
        store_mocks["users"].ping.return_value = False

        data = client.get("/api/health").json()

        assert data["status"] == "degraded"
        users = next(s for s in data["stores"] if s["name"] == "users")
        assert users == {"name": "users", "status": "disconnected", "response_time_ms": None}

    def test_all_stores_down_is_unhealthy(self, client, store_mocks):
        for store in store_mocks.values():
            store.ping.return_value = False

        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"


class TestMiddleware:

    def test_process_time_and_request_id_headers(self, client):
        response = client.get("/")

        assert "X-Process-Time" in response.headers
        assert len(response.headers["X-Request-ID"]) == 32

    def test_request_id_is_propagated(self, client):
        response = client.get("/", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}


class TestErrorStatusMapping:

    @pytest.mark.parametrize("error, expected", [
        (RecordNotFoundError("Patient not found"), 404),
        (RecordValidationError("Invalid request"), 400),
        (DuplicatePatientError("P1"), 400),
        (AuthenticationError("Invalid email"), 400),
        (StorageError(), 500),
        (RecordsError("something else"), 500),
    ])
    def test_status_for_error(self, error, expected):
        assert status_for_error(error) == expected

    def test_storage_error_message_is_generic(self):
        assert StorageError(operation="find").message == "Server error"
