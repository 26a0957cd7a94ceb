"""Patient endpoints: list, retrieve with clinical data, create."""

import logging

from fastapi import APIRouter

from clinic_records.api.dependencies import ClinicalStoreDep, PatientStoreDep
from clinic_records.api.models.responses import ErrorResponse, PatientCreated, PatientDetail
from clinic_records.domain.errors import DuplicatePatientError, RecordNotFoundError
from clinic_records.domain.records import Patient, PatientCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=list[Patient], responses={500: {"model": ErrorResponse}})
def list_patients(patients: PatientStoreDep) -> list[Patient]:
    """Return every patient, unfiltered and in store order."""
    return patients.list_all()


@router.get(
    "/{key}",
    response_model=PatientDetail,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_patient(key: str, patients: PatientStoreDep, clinical: ClinicalStoreDep) -> PatientDetail:
    """Return one patient by store key, with all of its clinical records.

    The clinical lookup only runs once the patient has been found.
    """
    patient = patients.get(key)
    if patient is None:
        raise RecordNotFoundError("Patient not found", collection="patients", key=key)

    clinical_data = clinical.find_by_patient(patient.id)
    logger.debug(f"Patient {patient.id} has {len(clinical_data)} clinical records")
    return PatientDetail(patient=patient, clinical_data=clinical_data)


@router.post(
    "",
    status_code=201,
    response_model=PatientCreated,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_patient(body: PatientCreate, patients: PatientStoreDep) -> PatientCreated:
    """Create a patient unless one with the same ``patient_id`` exists.

    The existence check and the insert are two separate store operations, not
    an atomic one: two concurrent requests with the same ``patient_id`` can
    both pass the check and both insert. A unique index on ``patient_id``
    would close the gap.
    """
    if patients.find_by_patient_id(body.patient_id) is not None:
        raise DuplicatePatientError(body.patient_id)

    patient = patients.insert(body)
    logger.info(f"Created patient {patient.id}")
    return PatientCreated(message="Patient added successfully", patient=patient)
