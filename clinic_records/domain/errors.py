"""Domain error taxonomy for Clinic Records.

Every failure a request can end in is one of these exception kinds. Handlers
and adapters raise them; the API layer maps each kind to an HTTP status in a
single place (see ``clinic_records.api.errors``).

Security Impact:
    - StorageError keeps the driver exception as ``__cause__`` for logging
      only; its public message is generic and safe to return to callers
    - AuthenticationError messages never include the submitted password
"""

from typing import Any, Optional


class RecordsError(Exception):
    """Base exception for all Clinic Records errors.

    Attributes:
        message: Client-safe, free-text description of the failure
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFoundError(RecordsError):
    """Raised when a requested entity is absent.

    Attributes:
        collection: Collection that was searched (patients, clinical, ...)
        key: The key or reference that did not resolve
    """

    def __init__(self, message: str, collection: Optional[str] = None, key: Optional[str] = None):
        super().__init__(message)
        self.collection = collection
        self.key = key


class RecordValidationError(RecordsError):
    """Raised when a request body or parameter is malformed.

    Attributes:
        errors: Field-level problems as ``{"field": ..., "message": ...}`` dicts
    """

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicatePatientError(RecordsError):
    """Raised when a patient with the same application identifier exists."""

    def __init__(self, patient_id: str):
        super().__init__("Patient ID already exists")
        self.patient_id = patient_id


class AuthenticationError(RecordsError):
    """Raised when a login attempt fails (unknown email or wrong password)."""
    pass


class StorageError(RecordsError):
    """Raised when the document store fails unexpectedly.

    Attributes:
        operation: Store operation that failed (find, insert_one, ...)
        collection: Collection the operation targeted
    """

    def __init__(
        self,
        message: str = "Server error",
        operation: Optional[str] = None,
        collection: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.collection = collection
