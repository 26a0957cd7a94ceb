"""Shared fixtures: in-memory MongoDB stores and an API test client."""

import bcrypt
import mongomock
import pytest
from fastapi.testclient import TestClient

from clinic_records.adapters.storage import MongoClinicalStore, MongoPatientStore, MongoUserStore
from clinic_records.api.dependencies import get_clinical_store, get_patient_store, get_user_store
from clinic_records.api.main import create_app


@pytest.fixture
def patient_store():
    """Patients collection on its own in-memory client."""
    return MongoPatientStore(mongomock.MongoClient()["patient_db"]["patients"])


@pytest.fixture
def user_store():
    return MongoUserStore(mongomock.MongoClient()["user_db"]["users"])


@pytest.fixture
def clinical_store():
    return MongoClinicalStore(mongomock.MongoClient()["clinical_db"]["clinicals"])


@pytest.fixture
def nurse(user_store):
    """A provisioned user: nurse@example.org / correct-horse."""
    password_hash = bcrypt.hashpw(b"correct-horse", bcrypt.gensalt(rounds=4)).decode("utf-8")
    return user_store.insert("nurse@example.org", password_hash, "nurse")


@pytest.fixture
def app(patient_store, user_store, clinical_store):
    """Application with store dependencies pointed at the in-memory stores."""
    application = create_app()
    application.dependency_overrides[get_patient_store] = lambda: patient_store
    application.dependency_overrides[get_user_store] = lambda: user_store
    application.dependency_overrides[get_clinical_store] = lambda: clinical_store
    return application


@pytest.fixture
def client(app):
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
