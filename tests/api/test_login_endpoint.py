"""Tests for POST /login."""

from unittest.mock import Mock

from clinic_records.api.dependencies import get_user_store
from clinic_records.domain.errors import StorageError
from clinic_records.domain.ports import UserStorePort


class TestLogin:

    def test_valid_credentials_return_profile(self, client, nurse):
        response = client.post("/login", json={"email": "nurse@example.org", "password": "correct-horse"})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful",
            "user": {"email": "nurse@example.org", "role": "nurse"},
        }

    def test_response_never_contains_password_or_hash(self, client, nurse):
        response = client.post("/login", json={"email": "nurse@example.org", "password": "correct-horse"})

        assert "correct-horse" not in response.text
        assert nurse.password_hash not in response.text
        assert "password" not in response.json()["user"]

    def test_wrong_password(self, client, nurse):
        response = client.post("/login", json={"email": "nurse@example.org", "password": "battery-staple"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid password"}

    def test_unknown_email(self, client, nurse):
        response = client.post("/login", json={"email": "doctor@example.org", "password": "correct-horse"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email"}

    def test_missing_password_is_validation_error(self, client):
        response = client.post("/login", json={"email": "nurse@example.org"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    def test_validation_errors_do_not_echo_input(self, client):
        response = client.post("/login", json={"email": "nurse@example.org", "password": ""})

        assert response.status_code == 400
        assert "nurse@example.org" not in response.text

    def test_user_without_stored_hash_cannot_log_in(self, client, user_store):
        user_store._collection.insert_one({"email": "legacy@example.org", "role": "admin"})

        response = client.post("/login", json={"email": "legacy@example.org", "password": "anything"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid password"}


class TestLoginStoreFailure:

    def test_store_error_returns_500(self, client, app):
        failing = Mock(spec=UserStorePort)
        failing.find_by_email.side_effect = StorageError(operation="find_one", collection="users")
        app.dependency_overrides[get_user_store] = lambda: failing

        response = client.post("/login", json={"email": "nurse@example.org", "password": "correct-horse"})

        assert response.status_code == 500
        assert response.json() == {"message": "Server error"}
