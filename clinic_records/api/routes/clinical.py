"""Clinical measurement endpoints."""

import logging

from fastapi import APIRouter

from clinic_records.api.dependencies import ClinicalStoreDep
from clinic_records.api.models.responses import ErrorResponse
from clinic_records.domain.errors import RecordNotFoundError
from clinic_records.domain.records import ClinicalCreate, ClinicalRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clinical", tags=["clinical"])


@router.post(
    "",
    status_code=201,
    response_model=ClinicalRecord,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_clinical_record(body: ClinicalCreate, clinical: ClinicalStoreDep) -> ClinicalRecord:
    """Store a measurement stamped with the server's current time.

    The patient reference is not checked against the patients collection.
    """
    record = clinical.insert(body)
    logger.info(f"Created clinical record {record.id} ({record.type})")
    return record


@router.get(
    "/{patient_key}",
    response_model=list[ClinicalRecord],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def list_clinical_records(patient_key: str, clinical: ClinicalStoreDep) -> list[ClinicalRecord]:
    """Return all measurements for a patient store key.

    An empty result is answered with 404, not an empty list, so callers
    cannot tell a patient without measurements from an unknown key.
    """
    records = clinical.find_by_patient(patient_key)
    if not records:
        raise RecordNotFoundError("No clinical data found", collection="clinical", key=patient_key)
    return records
