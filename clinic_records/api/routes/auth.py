"""Login endpoint.

Authentication only: a successful login returns the user's public profile
and nothing else. No session, token or expiry is issued.
"""

import logging

from fastapi import APIRouter

from clinic_records.api.dependencies import UserStoreDep
from clinic_records.api.models.responses import ErrorResponse, LoginResponse
from clinic_records.domain.errors import AuthenticationError
from clinic_records.domain.records import LoginRequest
from clinic_records.infrastructure.passwords import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse, responses={400: {"model": ErrorResponse}})
def login(body: LoginRequest, users: UserStoreDep) -> LoginResponse:
    user = users.find_by_email(body.email)
    if user is None:
        raise AuthenticationError("Invalid email")

    if not verify_password(body.password, user.password_hash):
        logger.info(f"Failed login for user {user.id}")
        raise AuthenticationError("Invalid password")

    logger.info(f"Successful login for user {user.id}")
    return LoginResponse(message="Login successful", user=user.profile())
