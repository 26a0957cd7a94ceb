"""Domain layer for Clinic Records.

This module contains the record schemas, the error taxonomy and the store
ports. All domain models are pure Python with no dependencies beyond Pydantic.
"""

from .records import (
    ClinicalCreate,
    ClinicalRecord,
    LoginRequest,
    Patient,
    PatientCreate,
    User,
    UserProfile,
)

__all__ = [
    "ClinicalCreate",
    "ClinicalRecord",
    "LoginRequest",
    "Patient",
    "PatientCreate",
    "User",
    "UserProfile",
]
