"""Dependency injection for the Clinic Records API.

Store adapters are created once in the application lifespan and kept on
``app.state``; these functions hand them to route handlers. Tests replace
them through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request

from clinic_records.domain.ports import ClinicalStorePort, PatientStorePort, UserStorePort


def get_patient_store(request: Request) -> PatientStorePort:
    """Get the patients store opened at startup.

    Parameters:
        request: Incoming request (gives access to ``app.state``)

    Returns:
        PatientStorePort: Shared patients adapter
    """
    return request.app.state.patient_store


def get_user_store(request: Request) -> UserStorePort:
    """Get the users store opened at startup.

    Parameters:
        request: Incoming request (gives access to ``app.state``)

    Returns:
        UserStorePort: Shared users adapter
    """
    return request.app.state.user_store


def get_clinical_store(request: Request) -> ClinicalStorePort:
    """Get the clinical records store opened at startup.

    Parameters:
        request: Incoming request (gives access to ``app.state``)

    Returns:
        ClinicalStorePort: Shared clinical adapter
    """
    return request.app.state.clinical_store


# Type aliases for dependency injection
PatientStoreDep = Annotated[PatientStorePort, Depends(get_patient_store)]
UserStoreDep = Annotated[UserStorePort, Depends(get_user_store)]
ClinicalStoreDep = Annotated[ClinicalStorePort, Depends(get_clinical_store)]
