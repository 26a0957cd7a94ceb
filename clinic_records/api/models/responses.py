"""Response envelopes for the record endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from clinic_records.domain.records import ClinicalRecord, Patient, UserProfile


class PatientDetail(BaseModel):
    """A patient together with its clinical measurements."""

    patient: Patient
    clinical_data: list[ClinicalRecord] = Field(default_factory=list, serialization_alias="clinicalData")


class PatientCreated(BaseModel):
    message: str
    patient: Patient


class LoginResponse(BaseModel):
    message: str
    user: UserProfile


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
    errors: Optional[list[dict[str, Any]]] = None
