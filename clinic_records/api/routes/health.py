"""Health check endpoint for the Clinic Records API."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from clinic_records import __version__
from clinic_records.api.dependencies import ClinicalStoreDep, PatientStoreDep, UserStoreDep
from clinic_records.api.models.health import HealthResponse, StoreHealth
from clinic_records.domain.ports import StorePort

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


def check_store_health(store: StorePort) -> StoreHealth:
    """Ping one store and time the round trip.

    Security Impact:
        - Only checks connectivity, no records or connection strings exposed
    """
    start_time = time.time()
    if store.ping():
        response_time = (time.time() - start_time) * 1000
        return StoreHealth(name=store.name, status="connected", response_time_ms=round(response_time, 2))

    logger.warning(f"Store {store.name} is not reachable")
    return StoreHealth(name=store.name, status="disconnected")


@router.get("/health", response_model=HealthResponse)
def health_check(
    patients: PatientStoreDep,
    users: UserStoreDep,
    clinical: ClinicalStoreDep,
) -> HealthResponse:
    """Report connectivity of the three document stores.

    Used by monitoring tools and load balancers; always answers 200.
    """
    stores = [check_store_health(store) for store in (patients, users, clinical)]
    connected = sum(1 for store in stores if store.status == "connected")

    if connected == len(stores):
        overall_status = "healthy"
    elif connected == 0:
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        stores=stores,
    )
