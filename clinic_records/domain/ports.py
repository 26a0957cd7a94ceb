"""Domain Ports - Abstract Contracts for the Document Store.

This module defines the Port interfaces that storage adapters must implement.
Following Hexagonal Architecture, the handlers depend on these contracts and
never on a database driver directly.

Architecture:
    - One port per collection, so each can live behind its own connection
    - Methods raise ``StorageError`` for unexpected store failures and return
      ``None`` (or an empty list) when nothing matches
    - Keys cross the port as strings; adapters translate them to the store's
      native key type
"""

from abc import ABC, abstractmethod
from typing import Optional

from clinic_records.domain.records import (
    ClinicalCreate,
    ClinicalRecord,
    Patient,
    PatientCreate,
    User,
)


class StorePort(ABC):
    """Behaviour shared by every collection adapter."""

    name: str = "store"

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the backing store answers a round trip."""
        pass


class PatientStorePort(StorePort):
    """Abstract contract for the patients collection."""

    name = "patients"

    @abstractmethod
    def list_all(self) -> list[Patient]:
        """Return every stored patient, in store-native order."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[Patient]:
        """Return the patient with store key ``key``.

        A key that is not well-formed for the store is treated as not found.
        """
        pass

    @abstractmethod
    def find_by_patient_id(self, patient_id: str) -> Optional[Patient]:
        """Return the patient carrying the application identifier, if any."""
        pass

    @abstractmethod
    def insert(self, patient: PatientCreate) -> Patient:
        """Persist a new patient and return its stored representation."""
        pass


class UserStorePort(StorePort):
    """Abstract contract for the users collection."""

    name = "users"

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Return the user registered under ``email``.

        Parameters:
            email: Login email, matched exactly

        Returns:
            User (including the stored hash) or None if no user has that email
        """
        pass

    @abstractmethod
    def insert(self, email: str, password_hash: str, role: Optional[str] = None) -> User:
        """Persist a pre-hashed user. Used for provisioning, not over HTTP."""
        pass


class ClinicalStorePort(StorePort):
    """Abstract contract for the clinical records collection."""

    name = "clinical"

    @abstractmethod
    def insert(self, record: ClinicalCreate) -> ClinicalRecord:
        """Persist a measurement, stamping it with the current server time."""
        pass

    @abstractmethod
    def find_by_patient(self, patient_key: str) -> list[ClinicalRecord]:
        """Return every record referencing the patient store key."""
        pass
