# homehelp/modules/auth/router.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from homehelp.modules.auth.security import get_current_user
from homehelp.shared.models.user_models import User
from homehelp.core.database import get_db
from . import service as auth_service
from .schemas import LoginRequest, RegisterRequest, AuthResponse, UserPublic, MessageResponse

router = APIRouter(
    tags=["Authentication"],
    responses={404: {"description": "Not found"}},
)

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer or provider account"
)
async def register(
    register_data: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Sign up and receive an access token right away.
    """
    try:
        user = await auth_service.register_user(db, register_data)
    except auth_service.RegistrationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    access_token = auth_service.create_access_token(subject=user.uid)
    return AuthResponse(access_token=access_token, user=UserPublic.model_validate(user))

@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in with username and password"
)
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    user = await auth_service.authenticate_user(db, login_data)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = auth_service.create_access_token(subject=user.uid)
    return AuthResponse(access_token=access_token, user=UserPublic.model_validate(user))

@router.get(
    "/user",
    response_model=UserPublic,
    summary="Current user"
)
async def read_current_user(
    current_user: User = Depends(get_current_user)
):
    """
    Frontends call this after login to learn the user's role.
    """
    return current_user

@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out"
)
async def logout(
    current_user: User = Depends(get_current_user)
):
    # tokens are stateless; the client drops its copy
    return MessageResponse(message="Logged out")
