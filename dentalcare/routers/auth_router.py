import logging
from fastapi import APIRouter, Depends, HTTPException

from ..application.ports.user_repo import UserDto
from ..application.services.auth_service import AuthService
from ..schemas import LoginRequest, LoginResponse, UserResponse, ErrorResponse
from .dependencies import get_auth_service, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


def to_user_response(user: UserDto) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        name=user.name,
        phone=user.phone,
        dateOfBirth=user.date_of_birth,
        address=user.address,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        token, user = auth_service.login(credentials.email, credentials.password)
        return LoginResponse(token=token, user=to_user_response(user))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to log in")


@router.get("/users/me", response_model=UserResponse)
def read_current_user(current_user: UserDto = Depends(get_current_user)):
    return to_user_response(current_user)
