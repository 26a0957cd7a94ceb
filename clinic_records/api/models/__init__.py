"""API Pydantic models."""

from clinic_records.api.models.health import HealthResponse, StoreHealth
from clinic_records.api.models.responses import (
    ErrorResponse,
    LoginResponse,
    PatientCreated,
    PatientDetail,
)
