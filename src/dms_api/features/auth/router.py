"""HTTP interface for authentication endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from dms_api.api.deps import get_auth_service
from dms_api.core.http import CurrentTokenId, CurrentUser

from .schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserEnvelope,
    UserOut,
)
from .service import AuthService

router = APIRouter(tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new employee account",
    responses={
        status.HTTP_422_UNPROCESSABLE_ENTITY: {
            "description": "Missing fields, duplicate email or unknown department.",
        },
    },
)
async def register(payload: RegisterRequest, service: AuthServiceDep) -> AuthResponse:
    user, token = await service.register(payload)
    return AuthResponse(
        message="User registered successfully",
        user=UserOut.from_model(user),
        token=token,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Exchange credentials for a bearer token",
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Invalid credentials."},
    },
)
async def login(payload: LoginRequest, service: AuthServiceDep) -> AuthResponse:
    user, token = await service.login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        user=UserOut.from_model(user),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse, summary="Revoke the current token")
async def logout(
    user: CurrentUser,
    token_id: CurrentTokenId,
    service: AuthServiceDep,
) -> MessageResponse:
    await service.logout(user_id=user.id, token_id=token_id)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserEnvelope, summary="Return the authenticated user")
async def read_current_user(user: CurrentUser) -> UserEnvelope:
    return UserEnvelope(user=UserOut.from_model(user))


__all__ = ["router"]
