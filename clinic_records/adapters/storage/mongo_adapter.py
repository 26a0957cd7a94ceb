"""MongoDB Storage Adapters.

These adapters implement the collection ports on top of pymongo. Each port is
backed by its own ``MongoClient`` so patients, users and clinical records can
live in independently addressable databases.

Security Impact:
    - Connection strings are never logged; only host and database name are
    - Driver exceptions are logged with context and re-raised as StorageError,
      whose public message is generic

Architecture:
    - Implements the domain ports (Hexagonal Architecture)
    - Clients are created once by ``MongoConnections`` and shared for the
      process lifetime; no pooling policy beyond the driver's defaults
    - No retries, no per-operation timeout beyond the connect timeout
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from clinic_records.domain.errors import StorageError
from clinic_records.domain.ports import ClinicalStorePort, PatientStorePort, StorePort, UserStorePort
from clinic_records.domain.records import (
    ClinicalCreate,
    ClinicalRecord,
    Patient,
    PatientCreate,
    User,
)
from clinic_records.infrastructure.config_manager import StoreConfig

logger = logging.getLogger(__name__)

DEFAULT_DATABASES = {
    "patients": "patient_db",
    "users": "user_db",
    "clinical": "clinical_db",
}

COLLECTION_NAMES = {
    "patients": "patients",
    "users": "users",
    "clinical": "clinicals",
}


def to_object_id(key: str) -> Optional[ObjectId]:
    """Convert a string key to an ObjectId, or None if it is not well-formed."""
    if not ObjectId.is_valid(key):
        return None
    return ObjectId(key)


class MongoCollectionAdapter(StorePort):
    """Common plumbing for adapters wrapping a single pymongo collection.

    Parameters:
        collection: The pymongo (or API-compatible) collection to operate on
    """

    def __init__(self, collection: Collection):
        self._collection = collection

    @contextmanager
    def _operation(self, operation: str) -> Iterator[None]:
        """Translate driver failures into StorageError for ``operation``."""
        try:
            yield
        except PyMongoError as e:
            logger.error(
                f"{self.name}.{operation} failed: {type(e).__name__}: {str(e)}",
                exc_info=True
            )
            raise StorageError(operation=operation, collection=self.name) from e

    def ping(self) -> bool:
        try:
            self._collection.database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"Ping to {self.name} store failed: {type(e).__name__}")
            return False


class MongoPatientStore(MongoCollectionAdapter, PatientStorePort):
    """Patients collection on MongoDB."""

    def list_all(self) -> list[Patient]:
        with self._operation("find"):
            docs = list(self._collection.find())
        return [Patient.from_document(doc) for doc in docs]

    def get(self, key: str) -> Optional[Patient]:
        oid = to_object_id(key)
        if oid is None:
            logger.debug(f"Patient key is not a valid ObjectId: {key!r}")
            return None
        with self._operation("find_one"):
            doc = self._collection.find_one({"_id": oid})
        return Patient.from_document(doc) if doc else None

    def find_by_patient_id(self, patient_id: str) -> Optional[Patient]:
        with self._operation("find_one"):
            doc = self._collection.find_one({"patient_id": patient_id})
        return Patient.from_document(doc) if doc else None

    def insert(self, patient: PatientCreate) -> Patient:
        doc = patient.model_dump()
        with self._operation("insert_one"):
            result = self._collection.insert_one(doc)
        return Patient(id=str(result.inserted_id), **patient.model_dump())


class MongoUserStore(MongoCollectionAdapter, UserStorePort):
    """Users collection on MongoDB. Documents hold the bcrypt hash in ``password``."""

    def find_by_email(self, email: str) -> Optional[User]:
        with self._operation("find_one"):
            doc = self._collection.find_one({"email": email})
        return User.from_document(doc) if doc else None

    def insert(self, email: str, password_hash: str, role: Optional[str] = None) -> User:
        doc = {"email": email, "password": password_hash, "role": role}
        with self._operation("insert_one"):
            result = self._collection.insert_one(doc)
        return User(id=str(result.inserted_id), email=email, password_hash=password_hash, role=role)


class MongoClinicalStore(MongoCollectionAdapter, ClinicalStorePort):
    """Clinical records collection on MongoDB.

    ``patient_id`` is stored as an ObjectId referencing the patient's ``_id``
    in the patients database. The reference is not checked.
    """

    def insert(self, record: ClinicalCreate) -> ClinicalRecord:
        doc = {
            "patient_id": ObjectId(record.patient_id),
            "type": record.type,
            "value": record.value,
            "timestamp": datetime.now(timezone.utc),
        }
        with self._operation("insert_one"):
            result = self._collection.insert_one(doc)
        return ClinicalRecord(
            id=str(result.inserted_id),
            patient_id=record.patient_id,
            type=record.type,
            value=record.value,
            timestamp=doc["timestamp"],
        )

    def find_by_patient(self, patient_key: str) -> list[ClinicalRecord]:
        oid = to_object_id(patient_key)
        if oid is None:
            return []
        with self._operation("find"):
            docs = list(self._collection.find({"patient_id": oid}))
        return [ClinicalRecord.from_document(doc) for doc in docs]


class MongoConnections:
    """The three store clients, opened once at startup.

    Example Usage:
        ```python
        connections = MongoConnections.from_config(get_store_config())
        patients = connections.patient_store()
        ...
        connections.close()
        ```
    """

    def __init__(self, clients: dict[str, MongoClient]):
        self._clients = clients

    @classmethod
    def from_config(cls, config: StoreConfig) -> "MongoConnections":
        """Create one client per store.

        pymongo connects lazily, so this does not fail when a server is down;
        the first operation does, after ``connect_timeout_ms``.
        """
        clients = {}
        for store in DEFAULT_DATABASES:
            uri = config.uri_for(store)
            logger.info(f"Opening {store} store at {StoreConfig.describe_uri(uri)}")
            clients[store] = MongoClient(
                uri,
                connectTimeoutMS=config.connect_timeout_ms,
                serverSelectionTimeoutMS=config.connect_timeout_ms,
                tz_aware=True,
            )
        return cls(clients)

    def collection(self, store: str) -> Collection:
        client = self._clients[store]
        database = client.get_default_database(default=DEFAULT_DATABASES[store])
        return database[COLLECTION_NAMES[store]]

    def patient_store(self) -> MongoPatientStore:
        return MongoPatientStore(self.collection("patients"))

    def user_store(self) -> MongoUserStore:
        return MongoUserStore(self.collection("users"))

    def clinical_store(self) -> MongoClinicalStore:
        return MongoClinicalStore(self.collection("clinical"))

    def close(self) -> None:
        for store, client in self._clients.items():
            client.close()
            logger.debug(f"Closed {store} store client")
