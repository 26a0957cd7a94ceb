"""Record schemas for the three document collections.

These models describe the shape of patients, users and clinical measurements
as they cross the API boundary. They carry structural validation only; every
business rule (identifier uniqueness, password checks) lives in the handlers.

Security Impact:
    - Request models ignore unknown fields so clients cannot smuggle extra
      keys into stored documents
    - User.password_hash is excluded from every serialized representation
    - Clinical timestamps are never taken from the client

Architecture:
    - Pure domain models with no driver dependencies; store keys are plain
      24-character hex strings here and converted by the storage adapter
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

STORE_KEY_PATTERN = r"^[0-9a-fA-F]{24}$"


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _strip_non_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class EmergencyContact(BaseModel):
    """Person to reach on the patient's behalf."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Emergency contact name")
    relationship: Optional[str] = Field(None, description="Relationship to patient")
    phone: Optional[str] = Field(None, description="Emergency contact phone")


class ContactInfo(BaseModel):
    """Patient contact details."""

    model_config = ConfigDict(extra="ignore")

    phone: Optional[str] = Field(None, description="Primary phone number")
    email: Optional[str] = Field(None, description="Primary email address")
    address: Optional[str] = Field(None, description="Postal address")
    emergency_contact: Optional[EmergencyContact] = None


class PatientCreate(BaseModel):
    """Body of a patient-creation request.

    Parameters:
        patient_id: Application-assigned identifier (unique among patients,
            distinct from the store-generated key)
        name: Patient full name
        age: Age in years
        gender: Free-text gender
        admission_date: When the patient was admitted
        condition: Current condition
        contact: Phone, email, address and emergency contact
        medical_history: Prior diagnoses or procedures
        allergies: Known allergies
        blood_type: ABO group with Rh sign (e.g. ``O+``)
    """

    model_config = ConfigDict(extra="ignore")

    patient_id: str = Field(..., min_length=1, max_length=64, description="Application-assigned patient identifier")
    name: str = Field(..., min_length=1, description="Patient full name")
    age: Optional[int] = Field(None, ge=0, le=150, description="Age in years")
    gender: Optional[str] = None
    admission_date: Optional[datetime] = None
    condition: Optional[str] = None
    contact: ContactInfo = Field(default_factory=ContactInfo)
    medical_history: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    blood_type: Optional[str] = Field(None, pattern=r"^(A|B|AB|O)[+-]$")

    @field_validator("patient_id", "name")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        """Reject identifiers and names that are only whitespace."""
        return _strip_non_blank(v)


class Patient(BaseModel):
    """A stored patient, addressed by its store-generated key ``id``.

    Read model for documents already in the collection. The collection is
    schema-flexible and may hold documents written by other clients, so none
    of the creation constraints (blood type pattern, age range, required
    fields) are applied here.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Store-generated key")
    patient_id: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    admission_date: Optional[datetime] = None
    condition: Optional[str] = None
    contact: ContactInfo = Field(default_factory=ContactInfo)
    medical_history: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    blood_type: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Patient":
        """Map a stored document to a Patient.

        A document whose optional fields have unexpected types is reduced to
        its key, identifier and name rather than rejected.

        Parameters:
            doc: Raw document, including ``_id``

        Returns:
            Patient with ``id`` taken from ``_id``
        """
        key = str(doc["_id"])
        # A stored ``id`` field would collide with the store key
        data = {k: v for k, v in doc.items() if k not in ("_id", "id")}
        try:
            return cls(id=key, **data)
        except ValidationError as e:
            logger.warning(f"Patient document {key} does not match the read schema ({e.error_count()} errors); returning core fields only")
            return cls(id=key, patient_id=_as_text(doc.get("patient_id")), name=_as_text(doc.get("name")))


class LoginRequest(BaseModel):
    """Body of a login request."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class UserProfile(BaseModel):
    """Public view of a user: never carries credentials."""

    email: str
    role: Optional[str] = None


class User(BaseModel):
    """A stored user. The password is held only as a bcrypt hash."""

    id: str
    email: str
    password_hash: str = Field(..., exclude=True, repr=False)
    role: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        """Map a stored user. A missing hash maps to "" and never verifies."""
        return cls(
            id=str(doc["_id"]),
            email=str(doc.get("email", "")),
            password_hash=str(doc.get("password") or ""),
            role=_as_text(doc.get("role")),
        )

    def profile(self) -> UserProfile:
        return UserProfile(email=self.email, role=self.role)


class ClinicalCreate(BaseModel):
    """Body of a clinical-record creation request.

    Any ``timestamp`` sent by the client is dropped along with other unknown
    fields; the server assigns the time of insert.
    """

    model_config = ConfigDict(extra="ignore")

    patient_id: str = Field(..., pattern=STORE_KEY_PATTERN, description="Store key of the patient")
    type: str = Field(..., min_length=1, description="Measurement type, e.g. 'blood pressure'")
    value: str = Field(..., min_length=1, description="Measurement value, e.g. '120/80'")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_numeric_value(cls, v: Any) -> Any:
        # Measurements often arrive as bare numbers; they are stored as text.
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("type", "value")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        return _strip_non_blank(v)


class ClinicalRecord(BaseModel):
    """A stored clinical measurement.

    Read model: fields other than ``id`` may be absent on documents written
    by other clients.
    """

    id: str
    patient_id: Optional[str] = None
    type: Optional[str] = None
    value: Optional[str] = None
    timestamp: Optional[datetime] = None

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Stores that hand back naive datetimes hold them in UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ClinicalRecord":
        """Map a stored measurement, tolerating missing fields.

        An unparseable ``timestamp`` is dropped rather than failing the read.
        """
        key = str(doc["_id"])
        data = {
            "id": key,
            "patient_id": _as_text(doc.get("patient_id")),
            "type": _as_text(doc.get("type")),
            "value": _as_text(doc.get("value")),
            "timestamp": doc.get("timestamp"),
        }
        try:
            return cls(**data)
        except ValidationError:
            logger.warning(f"Clinical document {key} has an unreadable timestamp; returning it without one")
            return cls(**{**data, "timestamp": None})
